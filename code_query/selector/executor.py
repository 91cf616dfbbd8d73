"""
Selector executor for tree-sitter syntax trees.

The executor traverses a tree-sitter tree, builds a lightweight parent-linked
index of named nodes and evaluates a parsed selector against it.

This is intentionally focused on pragmatics:
- only named, non-extra nodes are candidates (punctuation, keywords and
  comments are skipped)
- results come back in document (pre-order) order

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, FrozenSet, Optional, Union

from ..core.constants import DEFAULT_DIALECTS
from ..core.models import SourceSpan
from ..parsing.interfaces import SyntaxTree
from ..parsing.positions import node_span
from ..parsing.tree_sitter_parser import TreeSitterParser
from .aliases import leaf_value, resolve_field_alias, resolve_node_types
from .ast import (
    Combinator,
    Predicate,
    PredicateOp,
    PseudoKind,
    Query,
    SelectorList,
    SelectorStep,
)
from .parser import parse_selector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Match:
    """
    A single selector match.

    The command line only prints ``loc``; ``name`` (the text of the node's
    ``name`` field) and ``code`` (the node source, filled when queried with
    ``include_code``) are for library callers.
    """

    node_type: str
    name: Optional[str]
    loc: Optional[SourceSpan]
    code: Optional[str] = None
    node: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class _NodeInfo:
    index: int
    node: Any
    parent: Optional[int]
    depth: int
    field_name: Optional[str]
    sibling_index: int
    sibling_count: int

    @property
    def node_type(self) -> str:
        return self.node.type


def query_tree(
    tree: SyntaxTree,
    selector: Union[str, SelectorList],
    *,
    include_code: bool = False,
) -> list[Match]:
    """
    Query a parsed tree using selectors.

    Args:
        tree: parsed source
        selector: selector string or an already parsed selector
        include_code: include the node source text for each match (can be large)
    """
    q = parse_selector(selector) if isinstance(selector, str) else selector
    source = tree.source

    nodes = _build_index(tree.program)
    matched = _eval_selector_list(nodes, q, source)
    logger.debug(f"{tree.filename}: {len(matched)} of {len(nodes)} nodes matched")

    out: list[Match] = []
    for info in matched:
        out.append(
            Match(
                node_type=info.node_type,
                name=_field_text(info.node, "name", source),
                loc=node_span(info.node, source),
                code=_node_text(info.node, source) if include_code else None,
                node=info.node,
            )
        )
    return out


@lru_cache(maxsize=1)
def _default_parser() -> TreeSitterParser:
    return TreeSitterParser()


def query_source(
    source: str,
    selector: str,
    *,
    filename: str = "input.tsx",
    dialects: FrozenSet[str] = DEFAULT_DIALECTS,
    include_code: bool = False,
) -> list[Match]:
    """
    Parse JavaScript/TypeScript source and query it.

    Raises:
        QueryParseError: malformed selector
        SourceParseError: source does not parse
    """
    q = parse_selector(selector)
    tree = _default_parser().parse_sync(source, filename=filename, dialects=dialects)
    return query_tree(tree, q, include_code=include_code)


class SelectorQueryEngine:
    """SelectorEngine implementation backed by the Lark selector grammar."""

    def __init__(self, *, include_code: bool = False) -> None:
        self.include_code = include_code

    def compile(self, selector: str) -> SelectorList:
        return parse_selector(selector)

    def query(self, tree: SyntaxTree, compiled: SelectorList) -> list[Match]:
        return query_tree(tree, compiled, include_code=self.include_code)


def _build_index(root: Any) -> list[_NodeInfo]:
    """
    Build a pre-order node list with parent indexes and sibling positions.

    Iterative traversal: minified sources can nest deeper than the recursion limit.
    """
    infos: list[_NodeInfo] = []
    stack: list[tuple[Any, Optional[int], int, Optional[str], int, int]] = [
        (root, None, 0, None, 0, 1)
    ]

    while stack:
        node, parent, depth, field_name, sib_idx, sib_count = stack.pop()
        idx = len(infos)
        infos.append(
            _NodeInfo(
                index=idx,
                node=node,
                parent=parent,
                depth=depth,
                field_name=field_name,
                sibling_index=sib_idx,
                sibling_count=sib_count,
            )
        )

        named = [
            (child, node.field_name_for_child(i))
            for i, child in enumerate(node.children)
            if child.is_named and not child.is_extra
        ]
        for pos in range(len(named) - 1, -1, -1):
            child, child_field = named[pos]
            stack.append((child, idx, depth + 1, child_field, pos, len(named)))

    return infos


def _eval_selector_list(
    nodes: list[_NodeInfo], q: SelectorList, source: bytes
) -> list[_NodeInfo]:
    if len(q.queries) == 1:
        return _eval_query(nodes, q.queries[0], source)
    seen: Dict[int, _NodeInfo] = {}
    for query in q.queries:
        for info in _eval_query(nodes, query, source):
            seen.setdefault(info.index, info)
    return [seen[i] for i in sorted(seen)]


def _eval_query(nodes: list[_NodeInfo], q: Query, source: bytes) -> list[_NodeInfo]:
    current = _apply_step(nodes, q.first, source)
    for comb, step in q.rest:
        nxt_candidates = _apply_step(nodes, step, source)
        current = _apply_combinator(nodes, current, nxt_candidates, comb)
    return current


def _apply_combinator(
    nodes: list[_NodeInfo],
    prev: list[_NodeInfo],
    nxt: list[_NodeInfo],
    comb: Combinator,
) -> list[_NodeInfo]:
    if not prev or not nxt:
        return []
    prev_ids = {p.index for p in prev}

    if comb == Combinator.CHILD:
        return [n for n in nxt if n.parent in prev_ids]

    if comb == Combinator.ADJACENT_SIBLING:
        prev_positions = {(p.parent, p.sibling_index) for p in prev}
        return [
            n for n in nxt if (n.parent, n.sibling_index - 1) in prev_positions
        ]

    if comb == Combinator.GENERAL_SIBLING:
        first_prev: Dict[Optional[int], int] = {}
        for p in prev:
            current = first_prev.get(p.parent)
            if current is None or p.sibling_index < current:
                first_prev[p.parent] = p.sibling_index
        return [
            n
            for n in nxt
            if n.parent in first_prev and n.sibling_index > first_prev[n.parent]
        ]

    # Descendant: any ancestor match.
    out: list[_NodeInfo] = []
    for n in nxt:
        p = n.parent
        while p is not None:
            if p in prev_ids:
                out.append(n)
                break
            p = nodes[p].parent
    return out


def _apply_step(
    nodes: list[_NodeInfo], step: SelectorStep, source: bytes
) -> list[_NodeInfo]:
    types = None if step.node_type == "*" else resolve_node_types(step.node_type)
    matched = [n for n in nodes if _matches_step(n, step, types, source)]
    for pseudo in step.pseudos:
        if pseudo.kind == PseudoKind.FIRST:
            matched = matched[:1]
        elif pseudo.kind == PseudoKind.LAST:
            matched = matched[-1:] if matched else []
        elif pseudo.kind == PseudoKind.NTH:
            idx = pseudo.index or 0
            matched = [matched[idx]] if 0 <= idx < len(matched) else []
    return matched


def _matches_step(
    node: _NodeInfo,
    step: SelectorStep,
    types: Optional[FrozenSet[str]],
    source: bytes,
) -> bool:
    if types is not None and node.node_type not in types:
        return False
    for pred in step.predicates:
        if not _matches_predicate(node, pred, source):
            return False
    for pseudo in step.pseudos:
        if not _matches_position(node, pseudo.kind, pseudo.index):
            return False
    return True


def _matches_position(node: _NodeInfo, kind: PseudoKind, index: Optional[int]) -> bool:
    if kind == PseudoKind.FIRST_CHILD:
        return node.parent is not None and node.sibling_index == 0
    if kind == PseudoKind.LAST_CHILD:
        return node.parent is not None and node.sibling_index == node.sibling_count - 1
    if kind == PseudoKind.NTH_CHILD:
        return node.parent is not None and node.sibling_index == (index or 1) - 1
    if kind == PseudoKind.NTH_LAST_CHILD:
        return (
            node.parent is not None
            and node.sibling_count - node.sibling_index == (index or 1)
        )
    # :first/:last/:nth select from the step results in _apply_step
    return True


def _matches_predicate(node: _NodeInfo, pred: Predicate, source: bytes) -> bool:
    val = _get_attr(node, pred.attr, source)
    if val is None:
        return False
    if pred.op == PredicateOp.EXISTS:
        return True
    return _compare(val, pred.op, pred.value or "")


def _get_attr(node: _NodeInfo, attr: str, source: bytes) -> Optional[str]:
    a = attr.lower()
    if a == "type":
        return node.node_type
    if a == "text":
        return _node_text(node.node, source)
    if a == "field":
        return node.field_name
    if a == "start_line":
        return str(node.node.start_point[0] + 1)
    if a == "end_line":
        return str(node.node.end_point[0] + 1)

    # Field path such as "name", "function.property" or "callee.object.name"
    target = node.node
    parts = attr.split(".")
    for i, part in enumerate(parts):
        child = target.child_by_field_name(part)
        if child is None:
            alias = resolve_field_alias(part, target.type)
            if alias is not None:
                child = target.child_by_field_name(alias)
        if child is None:
            if i == len(parts) - 1:
                return leaf_value(part, target.type, _node_text(target, source))
            return None
        target = child
    return _node_text(target, source)


def _field_text(node: Any, field_name: str, source: bytes) -> Optional[str]:
    child = node.child_by_field_name(field_name)
    return _node_text(child, source) if child is not None else None


def _node_text(node: Any, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _compare(left: str, op: PredicateOp, right: str) -> bool:
    if op == PredicateOp.EQ:
        return left == right
    if op == PredicateOp.NE:
        return left != right
    if op == PredicateOp.CONTAINS:
        return right in left
    if op == PredicateOp.PREFIX:
        return left.startswith(right)
    if op == PredicateOp.SUFFIX:
        return left.endswith(right)
    return False

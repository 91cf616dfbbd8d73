"""
Selector - CSS-like structural selectors for JavaScript/TypeScript (tree-sitter).

This package is designed as a standalone component that can be extracted into a
separate library if needed.

Public API:
  - parse_selector(selector: str) -> SelectorList
  - query_source(source: str, selector: str, *, include_code: bool = False) -> list[Match]
  - query_tree(tree: SyntaxTree, selector, *, include_code: bool = False) -> list[Match]
  - SelectorQueryEngine(*, include_code: bool = False) (SelectorEngine implementation)
  - resolve_node_types, resolve_field_alias (ESTree names to tree-sitter names)
  - QueryParseError

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from ..core.exceptions import QueryParseError
from .aliases import ESTREE_ALIASES, resolve_field_alias, resolve_node_types
from .ast import (
    Combinator,
    Predicate,
    PredicateOp,
    Pseudo,
    PseudoKind,
    Query,
    SelectorList,
    SelectorStep,
)
from .parser import parse_selector
from .executor import Match, SelectorQueryEngine, query_source, query_tree

__all__ = [
    "QueryParseError",
    "ESTREE_ALIASES",
    "resolve_field_alias",
    "resolve_node_types",
    "Combinator",
    "Predicate",
    "PredicateOp",
    "Pseudo",
    "PseudoKind",
    "Query",
    "SelectorList",
    "SelectorStep",
    "parse_selector",
    "Match",
    "SelectorQueryEngine",
    "query_source",
    "query_tree",
]

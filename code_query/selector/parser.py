"""
Selector parser (Lark).

Supported features (intentionally minimal but practical):
- Steps: `TYPE` or `*`
- Combinators: descendant (space), child (`>`), adjacent sibling (`+`),
  general sibling (`~`)
- Selector lists: `A, B`
- Predicates: [attr], [attr=value], [attr!=value], [attr~=value],
  [attr^=value], [attr$=value]; attr may be a dotted field path
- Pseudos: :first, :last, :nth(N), :first-child, :last-child,
  :nth-child(N), :nth-last-child(N)

Notes:
- Values can be quoted with single or double quotes; unquoted barewords are allowed.
- Whitespace is insignificant except as descendant combinator.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

from lark import Lark, Transformer, Token, UnexpectedInput
from lark.exceptions import VisitError

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
from ..core.exceptions import QueryParseError


_GRAMMAR = r"""
?start: selector_list

selector_list: selector ("," selector)*
selector: step ((COMBINATOR step) | step)*
COMBINATOR: ">" | "+" | "~"

step: node_type predicate* pseudo*
    | predicate+ pseudo*
    | pseudo+
node_type: STAR | NAME
STAR: "*"

predicate: "[" attr_path (OP value)? "]"
attr_path: NAME ("." NAME)*
OP: "!=" | "~=" | "^=" | "$=" | "="
?value: STRING | BAREWORD

pseudo: ":" PSEUDO_NAME pseudo_args?
pseudo_args: "(" INT ")"

NAME: /[a-zA-Z_][a-zA-Z0-9_]*/
PSEUDO_NAME: /[a-zA-Z_][a-zA-Z0-9_-]*/
STRING.2: /"(?:[^"\\]|\\.)*"/ | /'(?:[^'\\]|\\.)*'/
BAREWORD: /[^\]\s\)]+/
INT: /[0-9]+/

%import common.WS_INLINE -> WS
%ignore WS
"""


_parser = Lark(_GRAMMAR, parser="lalr", start="start")

_ESCAPE_RE = re.compile(r"\\(.)")

_COMBINATORS = {c.value: c for c in Combinator if c is not Combinator.DESCENDANT}


@dataclass(frozen=True)
class _ParsedPseudo:
    name: str
    index: Optional[int]


class _ToAst(Transformer):
    def NAME(self, t: Token) -> str:  # noqa: N802
        return str(t)

    def PSEUDO_NAME(self, t: Token) -> str:  # noqa: N802
        return str(t)

    def INT(self, t: Token) -> int:  # noqa: N802
        return int(str(t))

    def STAR(self, _t: Token) -> str:  # noqa: N802
        return "*"

    def BAREWORD(self, t: Token) -> str:  # noqa: N802
        return str(t)

    def STRING(self, t: Token) -> str:  # noqa: N802
        # Strip the quotes and resolve backslash escapes (\" -> ", \\ -> \).
        raw = str(t)
        return _ESCAPE_RE.sub(r"\1", raw[1:-1])

    def OP(self, t: Token) -> str:  # noqa: N802
        return str(t)

    def attr_path(self, items: list[Any]) -> str:
        return ".".join(str(i) for i in items)

    def predicate(self, items: list[Any]) -> Predicate:
        attr = str(items[0])
        if len(items) == 1:
            return Predicate(attr=attr, op=PredicateOp.EXISTS)
        op = PredicateOp(str(items[1]))
        val = str(items[2])
        return Predicate(attr=attr, op=op, value=val)

    def pseudo_args(self, items: list[Any]) -> int:
        return int(items[0])

    def pseudo(self, items: list[Any]) -> _ParsedPseudo:
        name = str(items[0])
        idx: Optional[int] = None
        if len(items) > 1:
            idx = int(items[1])
        return _ParsedPseudo(name=name, index=idx)

    def node_type(self, items: list[Any]) -> str:
        return str(items[0])

    def step(self, items: list[Any]) -> SelectorStep:
        node_type: str = "*"
        predicates: list[Predicate] = []
        pseudos: list[Pseudo] = []

        for it in items:
            if isinstance(it, Predicate):
                predicates.append(it)
            elif isinstance(it, _ParsedPseudo):
                pseudos.append(_pseudo_from_parsed(it))
            elif isinstance(it, str):
                node_type = it
            else:
                raise QueryParseError(f"Unexpected step item: {it!r}")

        return SelectorStep(
            node_type=node_type,
            predicates=tuple(predicates),
            pseudos=tuple(pseudos),
        )

    def selector(self, items: list[Any]) -> Query:
        if not items:
            raise QueryParseError("Empty selector")
        first = items[0]
        if not isinstance(first, SelectorStep):
            raise QueryParseError("Invalid selector start")

        rest: list[tuple[Combinator, SelectorStep]] = []
        i = 1
        while i < len(items):
            it = items[i]
            if isinstance(it, Token) and it.type == "COMBINATOR":
                step = items[i + 1]
                if not isinstance(step, SelectorStep):
                    raise QueryParseError("Invalid selector sequence")
                rest.append((_COMBINATORS[str(it)], step))
                i += 2
                continue
            if isinstance(it, SelectorStep):
                rest.append((Combinator.DESCENDANT, it))
                i += 1
                continue
            raise QueryParseError("Invalid selector sequence")

        return Query(first=first, rest=tuple(rest))

    def selector_list(self, items: list[Any]) -> SelectorList:
        return SelectorList(queries=tuple(items))


def _pseudo_from_parsed(p: _ParsedPseudo) -> Pseudo:
    name = p.name.lower()
    if name in (
        PseudoKind.FIRST.value,
        PseudoKind.LAST.value,
        PseudoKind.FIRST_CHILD.value,
        PseudoKind.LAST_CHILD.value,
    ):
        if p.index is not None:
            raise QueryParseError(f":{name} does not accept arguments")
        return Pseudo(kind=PseudoKind(name))
    if name == PseudoKind.NTH.value:
        if p.index is None:
            raise QueryParseError(":nth requires an integer argument, e.g. :nth(0)")
        return Pseudo(kind=PseudoKind.NTH, index=p.index)
    if name in (PseudoKind.NTH_CHILD.value, PseudoKind.NTH_LAST_CHILD.value):
        if p.index is None or p.index < 1:
            raise QueryParseError(
                f":{name} requires a positive integer argument, e.g. :{name}(1)"
            )
        return Pseudo(kind=PseudoKind(name), index=p.index)
    raise QueryParseError(f"Unsupported pseudo: {p.name}")


@lru_cache(maxsize=128)
def parse_selector(selector: str) -> SelectorList:
    """
    Parse a selector into a selector AST.

    Raises:
        QueryParseError
    """
    try:
        tree = _parser.parse(selector)
        return _ToAst().transform(tree)
    except UnexpectedInput as e:
        raise QueryParseError(f"Invalid selector: {e}", selector=selector) from e
    except VisitError as e:
        if isinstance(e.orig_exc, QueryParseError):
            raise QueryParseError(str(e.orig_exc), selector=selector) from e.orig_exc
        raise

"""
Selector AST models.

These data structures represent a parsed selector query.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Combinator(str, Enum):
    """Selector step relation."""

    DESCENDANT = " "
    CHILD = ">"
    ADJACENT_SIBLING = "+"
    GENERAL_SIBLING = "~"


class PredicateOp(str, Enum):
    """Predicate operator for attribute tests."""

    EXISTS = ""
    EQ = "="
    NE = "!="
    CONTAINS = "~="
    PREFIX = "^="
    SUFFIX = "$="


@dataclass(frozen=True)
class Predicate:
    """Attribute predicate like [name="foo"], [text^="use"] or [body]."""

    attr: str
    op: PredicateOp
    value: Optional[str] = None


class PseudoKind(str, Enum):
    """Pseudo-class / functional pseudo."""

    FIRST = "first"
    LAST = "last"
    NTH = "nth"
    FIRST_CHILD = "first-child"
    LAST_CHILD = "last-child"
    NTH_CHILD = "nth-child"
    NTH_LAST_CHILD = "nth-last-child"


@dataclass(frozen=True)
class Pseudo:
    """
    Pseudo like :first, :nth(0) or :nth-child(2).

    :first/:last/:nth pick from the step's match list (0-based);
    the *-child forms test the node's position among its named siblings
    (1-based).
    """

    kind: PseudoKind
    index: Optional[int] = None


@dataclass(frozen=True)
class SelectorStep:
    """
    A single selector step.

    `node_type` can be:
    - "*" (match anything)
    - ESTree/Babel alias: TSAsExpression, CallExpression, Identifier, ...
    - tree-sitter node type (e.g. as_expression, call_expression)
    """

    node_type: str
    predicates: tuple[Predicate, ...] = ()
    pseudos: tuple[Pseudo, ...] = ()


@dataclass(frozen=True)
class Query:
    """A compound query, e.g. CallExpression > member_expression + arguments."""

    first: SelectorStep
    rest: tuple[tuple[Combinator, SelectorStep], ...] = ()


@dataclass(frozen=True)
class SelectorList:
    """Comma-separated alternatives; matches are the union in document order."""

    queries: tuple[Query, ...]

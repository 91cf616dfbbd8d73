"""
Contracts between the query run and its parser and selector engine.

The run driver only depends on these protocols, so tests and alternative
engines can be plugged in without touching orchestration code.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, FrozenSet, Optional, Protocol, Sequence, Union

from ..core.models import SourceSpan


@dataclass(frozen=True)
class SyntaxTree:
    """A parsed file: the root node plus the bytes it was parsed from."""

    program: Any
    source: bytes
    filename: str
    grammar: str


class LocatedNode(Protocol):
    """A selector match; ``loc`` is None when the node carries no position."""

    @property
    def loc(self) -> Optional[SourceSpan]:
        ...


class SourceParser(Protocol):
    """Turns source text into a syntax tree."""

    async def parse(
        self,
        text: str,
        *,
        filename: str,
        cwd: Union[str, Path],
        dialects: FrozenSet[str],
    ) -> SyntaxTree:
        """Parse ``text``; raises SourceParseError on syntax errors."""
        ...


class SelectorEngine(Protocol):
    """Evaluates structural selectors against a syntax tree."""

    def compile(self, selector: str) -> Any:
        """Validate and compile a selector; raises QueryParseError."""
        ...

    def query(self, tree: SyntaxTree, compiled: Any) -> Sequence[LocatedNode]:
        """Return the nodes matching ``compiled`` in document order."""
        ...

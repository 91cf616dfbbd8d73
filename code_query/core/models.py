"""
Data models for a query run.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet

from .constants import (
    DEFAULT_DIALECTS,
    DEFAULT_GLOB,
    IGNORE_FILENAME,
    LINES_ABOVE,
    LINES_BELOW,
)


@dataclass(frozen=True)
class SourcePosition:
    """A point in source text: 1-based line, 0-based character column."""

    line: int
    column: int


@dataclass(frozen=True)
class SourceSpan:
    """Start and end positions of a syntax node."""

    start: SourcePosition
    end: SourcePosition


@dataclass(frozen=True)
class MatchLocation:
    """Where a match starts in a file."""

    path: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.path}#{self.line}:{self.column}"


@dataclass(frozen=True)
class Frame:
    """Dedented source lines surrounding a match."""

    text: str
    first_line: int
    last_line: int


@dataclass(frozen=True)
class RunResult:
    """Summary of one query run."""

    file_count: int
    match_count: int
    had_error: bool

    @property
    def exit_code(self) -> int:
        return 1 if self.had_error else 0


@dataclass(frozen=True)
class QueryOptions:
    """
    Explicit configuration of a query run.

    The working directory is part of the options so the run driver never
    consults process-wide state.
    """

    selector: str
    glob: str = DEFAULT_GLOB
    cwd: Path = field(default_factory=Path.cwd)
    verbose: bool = False
    include_code_frame: bool = False
    ignore_filename: str = IGNORE_FILENAME
    lines_above: int = LINES_ABOVE
    lines_below: int = LINES_BELOW
    dialects: FrozenSet[str] = DEFAULT_DIALECTS

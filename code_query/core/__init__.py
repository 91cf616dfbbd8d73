"""
Core query pipeline: settings, file discovery, formatting and the run driver.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from .exceptions import (
    CodeQueryError,
    ParserUnavailableError,
    QueryParseError,
    SourceParseError,
)
from .models import (
    Frame,
    MatchLocation,
    QueryOptions,
    RunResult,
    SourcePosition,
    SourceSpan,
)
from .dedent import dedent, split_lines
from .formatter import build_frame, format_match
from .ignore_loader import load_ignore_patterns, parse_ignore_patterns
from .file_enumerator import expand_braces, iter_source_files, should_ignore_path
from .runner import run_query

__all__ = [
    "CodeQueryError",
    "ParserUnavailableError",
    "QueryParseError",
    "SourceParseError",
    "Frame",
    "MatchLocation",
    "QueryOptions",
    "RunResult",
    "SourcePosition",
    "SourceSpan",
    "dedent",
    "split_lines",
    "build_frame",
    "format_match",
    "load_ignore_patterns",
    "parse_ignore_patterns",
    "expand_braces",
    "iter_source_files",
    "should_ignore_path",
    "run_query",
]

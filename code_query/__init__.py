"""
Code Query Tool

Finds JavaScript/TypeScript source files by glob, parses them with tree-sitter
and prints the locations of nodes matching a CSS-like structural selector.

Can be used as a library (``run_query``) or via the ``code-query`` CLI.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

__version__ = "1.0.0"
__author__ = "Vasiliy Zdanovskiy"
__email__ = "vasilyvz@gmail.com"

from .core import (
    CodeQueryError,
    MatchLocation,
    QueryOptions,
    RunResult,
    SourceParseError,
    dedent,
    run_query,
)

__all__ = [
    "CodeQueryError",
    "MatchLocation",
    "QueryOptions",
    "RunResult",
    "SourceParseError",
    "dedent",
    "run_query",
]

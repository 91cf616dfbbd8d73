"""
Base exception hierarchy for code query operations.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from typing import Optional


class CodeQueryError(Exception):
    """Base exception for code query operations."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            code: Optional error code for programmatic handling
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class QueryParseError(CodeQueryError, ValueError):
    """Raised when selector parsing fails."""

    def __init__(self, message: str, selector: str = None, details: dict = None):
        """
        Initialize selector parse error.

        Args:
            message: Error message
            selector: Optional selector text that failed to parse
            details: Optional additional details
        """
        super().__init__(message, code="QUERY_PARSE_ERROR", details=details)
        self.selector = selector


class SourceParseError(CodeQueryError):
    """Raised when a source file contains a syntax error."""

    def __init__(
        self,
        message: str,
        filename: str = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        details: dict = None,
    ):
        """
        Initialize source parse error.

        Args:
            message: Error message, e.g. "Unexpected token (3:4)"
            filename: File that failed to parse
            line: 1-based line of the first syntax error
            column: 0-based column of the first syntax error
            details: Optional additional details
        """
        super().__init__(message, code="SOURCE_PARSE_ERROR", details=details)
        self.filename = filename
        self.line = line
        self.column = column


class ParserUnavailableError(CodeQueryError):
    """Raised when a tree-sitter grammar package cannot be loaded."""

    def __init__(self, message: str, grammar: str = None, details: dict = None):
        """
        Initialize parser unavailable error.

        Args:
            message: Error message
            grammar: Grammar name that could not be loaded
            details: Optional additional details
        """
        super().__init__(message, code="PARSER_UNAVAILABLE", details=details)
        self.grammar = grammar

"""
Tests for exception hierarchy.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from code_query.core.exceptions import (
    CodeQueryError,
    ParserUnavailableError,
    QueryParseError,
    SourceParseError,
)


class TestCodeQueryError:
    """Test base CodeQueryError exception."""

    def test_base_exception_creation(self):
        """Test creating base exception."""
        error = CodeQueryError("Test error")
        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.code is None
        assert error.details == {}

    def test_base_exception_with_code_and_details(self):
        """Test creating base exception with code and details."""
        error = CodeQueryError("Test error", code="X", details={"k": "v"})
        assert error.code == "X"
        assert error.details == {"k": "v"}


class TestQueryParseError:
    """Test selector parse errors."""

    def test_is_value_error(self):
        """Test QueryParseError is also a ValueError."""
        error = QueryParseError("bad", selector="[")
        assert isinstance(error, CodeQueryError)
        assert isinstance(error, ValueError)
        assert error.selector == "["
        assert error.code == "QUERY_PARSE_ERROR"


class TestSourceParseError:
    """Test source parse errors."""

    def test_position(self):
        """Test filename and position are kept."""
        error = SourceParseError("Unexpected token (3:4)", filename="a.js", line=3, column=4)
        assert str(error) == "Unexpected token (3:4)"
        assert (error.filename, error.line, error.column) == ("a.js", 3, 4)
        assert error.code == "SOURCE_PARSE_ERROR"


class TestParserUnavailableError:
    """Test missing grammar errors."""

    def test_grammar(self):
        """Test grammar name is kept."""
        error = ParserUnavailableError("Language not available: tsx", grammar="tsx")
        assert error.grammar == "tsx"
        assert error.code == "PARSER_UNAVAILABLE"

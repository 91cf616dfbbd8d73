"""
Tests for the tree-sitter source parser.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import anyio
import pytest

from code_query.core.constants import DEFAULT_DIALECTS
from code_query.core.exceptions import ParserUnavailableError, SourceParseError
from code_query.parsing import TreeSitterParser, grammars_for_dialects, select_grammar
from code_query.parsing import tree_sitter_parser


JSX_ONLY = frozenset({"jsx"})
TS_ONLY = frozenset({"typescript"})


class TestSelectGrammar:
    """Tests for grammar selection by dialect and suffix."""

    @pytest.mark.parametrize(
        "filename, grammar",
        [
            ("a.js", "tsx"),
            ("a.jsx", "tsx"),
            ("a.mjs", "tsx"),
            ("a.tsx", "tsx"),
            ("a.ts", "typescript"),
            ("src/a.mts", "typescript"),
            ("a.CTS", "typescript"),
        ],
    )
    def test_default_dialects(self, filename: str, grammar: str) -> None:
        assert select_grammar(filename, DEFAULT_DIALECTS) == grammar

    def test_typescript_without_jsx(self) -> None:
        assert select_grammar("a.tsx", TS_ONLY) == "typescript"

    def test_no_typescript_uses_javascript(self) -> None:
        assert select_grammar("a.ts", JSX_ONLY) == "javascript"
        assert select_grammar("a.js", frozenset()) == "javascript"

    def test_grammars_for_dialects(self) -> None:
        assert grammars_for_dialects(DEFAULT_DIALECTS) == {"tsx", "typescript"}
        assert grammars_for_dialects(TS_ONLY) == {"typescript"}
        assert grammars_for_dialects(JSX_ONLY) == {"javascript"}


class TestParseSync:
    """Tests for synchronous parsing."""

    def test_parses_program(self) -> None:
        tree = TreeSitterParser().parse_sync("const x = 1 as any;", filename="a.js")
        assert tree.program.type == "program"
        assert tree.grammar == "tsx"
        assert tree.filename == "a.js"
        assert tree.source == b"const x = 1 as any;"

    def test_jsx_in_js_file(self) -> None:
        tree = TreeSitterParser().parse_sync("const el = <App />;", filename="a.js")
        assert not tree.program.has_error

    def test_angle_bracket_assertion_in_ts_file(self) -> None:
        tree = TreeSitterParser().parse_sync("const v = <string>x;", filename="a.ts")
        assert tree.grammar == "typescript"

    def test_empty_source(self) -> None:
        tree = TreeSitterParser().parse_sync("", filename="a.js")
        assert tree.program.type == "program"

    def test_syntax_error_position(self) -> None:
        with pytest.raises(SourceParseError) as exc_info:
            TreeSitterParser().parse_sync("const x = 1;\nconst = ;\n", filename="bad.js")
        error = exc_info.value
        assert error.filename == "bad.js"
        assert error.line == 2
        assert f"({error.line}:{error.column})" in str(error)

    def test_typescript_rejected_without_typescript_dialect(self) -> None:
        with pytest.raises(SourceParseError):
            TreeSitterParser().parse_sync("const x = 1 as any;", filename="a.js", dialects=JSX_ONLY)

    def test_unknown_grammar(self) -> None:
        with pytest.raises(ParserUnavailableError):
            TreeSitterParser()._get_parser("cobol")

    def test_missing_grammar_package(self, monkeypatch) -> None:
        monkeypatch.setitem(
            tree_sitter_parser.GRAMMAR_MODULES,
            "tsx",
            ("code_query_missing_grammar", "language_tsx"),
        )
        with pytest.raises(ParserUnavailableError) as exc_info:
            TreeSitterParser().load_grammars(DEFAULT_DIALECTS)
        assert exc_info.value.grammar == "tsx"

    def test_parsers_are_reused(self) -> None:
        parser = TreeSitterParser()
        parser.load_grammars(DEFAULT_DIALECTS)
        assert parser._get_parser("tsx") is parser._get_parser("tsx")


class TestParseAsync:
    """Tests for the async parse entry point."""

    def test_parse_in_worker_thread(self, tmp_path) -> None:
        parser = TreeSitterParser()

        async def run():
            return await parser.parse(
                "foo();", filename="a.tsx", cwd=tmp_path, dialects=DEFAULT_DIALECTS
            )

        tree = anyio.run(run)
        assert tree.program.type == "program"

    def test_parse_error_propagates(self) -> None:
        parser = TreeSitterParser()

        async def run():
            return await parser.parse("}}}", filename="a.js")

        with pytest.raises(SourceParseError):
            anyio.run(run)

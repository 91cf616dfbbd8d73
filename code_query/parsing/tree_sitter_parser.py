"""
Tree-sitter parser for JavaScript and TypeScript sources.

The enabled dialects decide which grammar is used:

- typescript + jsx: TSX grammar (``.ts``/``.mts``/``.cts`` use TypeScript,
  where ``<T>expr`` assertions are valid)
- typescript only: TypeScript grammar
- otherwise: JavaScript grammar, which accepts JSX natively

Tree-sitter never raises on bad input; it inserts ERROR and missing nodes.
The first such node is reported as a SourceParseError so a broken file is
treated as a failed parse.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import functools
import importlib
import logging
from pathlib import Path, PurePath
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

from anyio import to_thread
import tree_sitter

from ..core.constants import (
    DEFAULT_DIALECTS,
    DIALECT_JSX,
    DIALECT_TYPESCRIPT,
    TYPESCRIPT_ONLY_SUFFIXES,
)
from ..core.exceptions import ParserUnavailableError, SourceParseError
from .interfaces import SyntaxTree
from .positions import node_start

logger = logging.getLogger(__name__)

GRAMMAR_JAVASCRIPT = "javascript"
GRAMMAR_TYPESCRIPT = "typescript"
GRAMMAR_TSX = "tsx"

# grammar name -> (python module, language function)
GRAMMAR_MODULES: Dict[str, Tuple[str, str]] = {
    GRAMMAR_JAVASCRIPT: ("tree_sitter_javascript", "language"),
    GRAMMAR_TYPESCRIPT: ("tree_sitter_typescript", "language_typescript"),
    GRAMMAR_TSX: ("tree_sitter_typescript", "language_tsx"),
}


def select_grammar(filename: str, dialects: FrozenSet[str]) -> str:
    """Pick the grammar for ``filename`` under the enabled dialects."""
    if DIALECT_TYPESCRIPT not in dialects:
        return GRAMMAR_JAVASCRIPT
    suffix = PurePath(filename).suffix.lower()
    if DIALECT_JSX in dialects and suffix not in TYPESCRIPT_ONLY_SUFFIXES:
        return GRAMMAR_TSX
    return GRAMMAR_TYPESCRIPT


def grammars_for_dialects(dialects: FrozenSet[str]) -> FrozenSet[str]:
    """All grammars ``select_grammar`` can return under ``dialects``."""
    if DIALECT_TYPESCRIPT not in dialects:
        return frozenset({GRAMMAR_JAVASCRIPT})
    if DIALECT_JSX in dialects:
        return frozenset({GRAMMAR_TSX, GRAMMAR_TYPESCRIPT})
    return frozenset({GRAMMAR_TYPESCRIPT})


def find_first_error(root: Any) -> Optional[Any]:
    """Return the first ERROR or missing node in document order, if any."""
    if not root.has_error:
        return None
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        # Only subtrees flagged with errors can contain one.
        stack.extend(
            child
            for child in reversed(node.children)
            if child.has_error or child.is_missing
        )
    return None


def describe_error(node: Any, source: bytes) -> str:
    """Human-readable message for an error node, e.g. ``Missing ";" (1:9)``."""
    pos = node_start(node, source)
    if node.is_missing:
        return f'Missing "{node.type}" ({pos.line}:{pos.column})'
    return f"Unexpected token ({pos.line}:{pos.column})"


class TreeSitterParser:
    """
    Tree-sitter backed implementation of the SourceParser contract.

    Usage::

        parser = TreeSitterParser()
        tree = await parser.parse(text, filename="a.tsx", cwd=".", dialects=dialects)
        tree.program.type  # "program"
    """

    def __init__(self) -> None:
        self._parsers: Dict[str, tree_sitter.Parser] = {}

    def _get_parser(self, grammar: str) -> tree_sitter.Parser:
        """Get or create a parser for a grammar (languages load lazily)."""
        if grammar in self._parsers:
            return self._parsers[grammar]

        if grammar not in GRAMMAR_MODULES:
            raise ParserUnavailableError(f"Unknown grammar: {grammar}", grammar=grammar)
        module_name, func_name = GRAMMAR_MODULES[grammar]
        try:
            module = importlib.import_module(module_name)
            language = tree_sitter.Language(getattr(module, func_name)())
        except (ImportError, AttributeError) as err:
            raise ParserUnavailableError(
                f"Language not available: {grammar} ({module_name})", grammar=grammar
            ) from err

        parser = tree_sitter.Parser()
        parser.language = language
        self._parsers[grammar] = parser
        logger.debug(f"Loaded tree-sitter grammar {grammar} from {module_name}")
        return parser

    def load_grammars(self, dialects: FrozenSet[str] = DEFAULT_DIALECTS) -> None:
        """
        Load every grammar needed for ``dialects`` up front.

        Raises:
            ParserUnavailableError: If a grammar package is not installed
        """
        for grammar in sorted(grammars_for_dialects(dialects)):
            self._get_parser(grammar)

    def parse_sync(
        self,
        text: str,
        *,
        filename: str,
        cwd: Union[str, Path, None] = None,
        dialects: FrozenSet[str] = DEFAULT_DIALECTS,
    ) -> SyntaxTree:
        """
        Parse source text synchronously.

        Args:
            text: Source code
            filename: File name, used for grammar selection and errors
            cwd: Working directory the filename is relative to
            dialects: Enabled syntax extensions

        Returns:
            SyntaxTree with the ``program`` root node

        Raises:
            SourceParseError: If the source contains a syntax error
            ParserUnavailableError: If the grammar package is not installed
        """
        grammar = select_grammar(filename, dialects)
        source = text.encode("utf-8")
        tree = self._get_parser(grammar).parse(source)

        error_node = find_first_error(tree.root_node)
        if error_node is not None:
            pos = node_start(error_node, source)
            raise SourceParseError(
                describe_error(error_node, source),
                filename=filename,
                line=pos.line,
                column=pos.column,
                details={"grammar": grammar, "cwd": str(cwd) if cwd else None},
            )

        return SyntaxTree(
            program=tree.root_node, source=source, filename=filename, grammar=grammar
        )

    async def parse(
        self,
        text: str,
        *,
        filename: str,
        cwd: Union[str, Path, None] = None,
        dialects: FrozenSet[str] = DEFAULT_DIALECTS,
    ) -> SyntaxTree:
        """Parse in a worker thread so the event loop is not blocked."""
        return await to_thread.run_sync(
            functools.partial(
                self.parse_sync, text, filename=filename, cwd=cwd, dialects=dialects
            )
        )

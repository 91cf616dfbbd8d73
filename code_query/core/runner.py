"""
Query run driver.

Enumerates files, parses and queries them one at a time and prints the
results. Per-file read and parse failures are reported and remembered but
never stop the run.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

import anyio
import click

from .dedent import split_lines
from .exceptions import SourceParseError
from .file_enumerator import iter_source_files
from .formatter import format_file_header, format_match, format_summary
from .ignore_loader import load_ignore_patterns
from .models import QueryOptions, RunResult
from ..parsing.interfaces import LocatedNode, SelectorEngine, SourceParser

logger = logging.getLogger(__name__)

# click.echo-compatible output sink: echo(message, err=False)
Echo = Callable[..., None]

# Failures isolated to a single file
PER_FILE_ERRORS = (OSError, UnicodeDecodeError, SourceParseError)


@dataclass(frozen=True)
class FileQueryResult:
    """Matches found in one file plus its source lines for code frames."""

    path: str
    nodes: Sequence[LocatedNode]
    source_lines: List[str]


async def query_file(
    path: str,
    compiled: Any,
    *,
    options: QueryOptions,
    parser: SourceParser,
    engine: SelectorEngine,
) -> FileQueryResult:
    """
    Read, parse and query a single file.

    Raises:
        OSError / UnicodeDecodeError: file cannot be read as UTF-8
        SourceParseError: file does not parse
    """
    source = await (anyio.Path(options.cwd) / path).read_text(encoding="utf-8")
    tree = await parser.parse(
        source, filename=path, cwd=options.cwd, dialects=options.dialects
    )
    nodes = engine.query(tree, compiled)
    return FileQueryResult(path=path, nodes=nodes, source_lines=split_lines(source))


async def run_query(
    options: QueryOptions,
    *,
    parser: SourceParser,
    engine: SelectorEngine,
    echo: Echo = click.echo,
    compiled: Optional[Any] = None,
) -> RunResult:
    """
    Run a selector query over every file matching ``options.glob``.

    Args:
        options: Run configuration (selector, glob, cwd, output flags)
        parser: Source parser
        engine: Selector engine
        echo: Output sink; results go to stdout, failures to ``err=True``
        compiled: Selector already compiled by ``engine`` (compiled here if None)

    Returns:
        RunResult with file and match counts and the failure flag

    Raises:
        QueryParseError: If the selector is malformed (before any file is read)
    """
    if compiled is None:
        compiled = engine.compile(options.selector)

    ignore_patterns = await load_ignore_patterns(options.cwd, options.ignore_filename)

    file_count = 0
    match_count = 0
    had_error = False

    async for path in iter_source_files(
        options.glob, cwd=options.cwd, ignore_patterns=ignore_patterns
    ):
        result: Optional[FileQueryResult] = None
        try:
            result = await query_file(
                path, compiled, options=options, parser=parser, engine=engine
            )
        except PER_FILE_ERRORS as e:
            echo(f"{path}: {e}", err=True)
            logger.debug(f"Query failed for {path}", exc_info=True)
            had_error = True

        if result is not None:
            if options.verbose and result.nodes:
                echo(format_file_header(path, len(result.nodes)))
            for node in result.nodes:
                echo(
                    format_match(
                        path,
                        node.loc,
                        result.source_lines,
                        include_code_frame=options.include_code_frame,
                        lines_above=options.lines_above,
                        lines_below=options.lines_below,
                    )
                )
            match_count += len(result.nodes)

        file_count += 1

    if options.verbose:
        echo(format_summary(file_count))

    logger.info(
        f"Queried {file_count} files, {match_count} matches, "
        f"{'with' if had_error else 'without'} errors"
    )
    return RunResult(file_count=file_count, match_count=match_count, had_error=had_error)

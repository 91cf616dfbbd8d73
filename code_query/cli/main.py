"""
Main CLI entry point for the code query tool.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import functools
import logging
from pathlib import Path
from typing import Optional

import anyio
import click

from .. import __version__
from ..core.constants import LOG_LEVELS
from ..core.exceptions import ParserUnavailableError, QueryParseError
from ..core.models import QueryOptions
from ..core.runner import run_query
from ..core.settings_manager import get_settings
from ..logging import setup_logging
from ..parsing import TreeSitterParser
from ..selector import SelectorQueryEngine

logger = logging.getLogger(__name__)

_EPILOG = """\b
Examples:
  code-query "TSAsExpression"
  code-query "CallExpression[function.property=log]" "src/**/*.ts" --include-code-frame
"""


@click.command(epilog=_EPILOG)
@click.argument("selector")
@click.argument("glob", required=False, default=None)
@click.option("--verbose", is_flag=True, default=False, help="Logs additional information")
@click.option(
    "--include-code-frame",
    is_flag=True,
    default=False,
    help="Logs the codeframe of each query result.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Diagnostic log level on stderr (default: CODE_QUERY_LOG_LEVEL or WARNING)",
)
@click.version_option(version=__version__, prog_name="code-query")
@click.pass_context
def cli(
    ctx: click.Context,
    selector: str,
    glob: Optional[str],
    verbose: bool,
    include_code_frame: bool,
    log_level: Optional[str],
) -> None:
    """
    Queries files for a given AST SELECTOR (CSS like).

    GLOB selects the files to search, relative to the current directory
    (default: **/*.{cjs,js,jsx,mjs,ts,tsx}). Files listed in the .gitignore
    of the current working directory are ignored.
    """
    settings = get_settings()
    settings.set_cli_overrides({"log_level": log_level.upper() if log_level else None})
    setup_logging(settings.log_level)

    engine = SelectorQueryEngine()
    try:
        compiled = engine.compile(selector)
    except QueryParseError as e:
        raise click.BadParameter(str(e), param_hint="'SELECTOR'") from e

    options = QueryOptions(
        selector=selector,
        glob=glob or settings.default_glob,
        cwd=Path.cwd(),
        verbose=verbose,
        include_code_frame=include_code_frame,
        ignore_filename=settings.ignore_filename,
        lines_above=settings.lines_above,
        lines_below=settings.lines_below,
        dialects=settings.dialects,
    )
    logger.debug(f"Running query {selector!r} over {options.glob!r} in {options.cwd}")

    parser = TreeSitterParser()
    try:
        parser.load_grammars(options.dialects)
    except ParserUnavailableError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    result = anyio.run(
        functools.partial(
            run_query, options, parser=parser, engine=engine, compiled=compiled
        )
    )
    ctx.exit(result.exit_code)


if __name__ == "__main__":
    cli()

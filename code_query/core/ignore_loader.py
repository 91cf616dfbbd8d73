"""
Loader for the ignore-pattern file in the working directory.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import logging
from pathlib import Path
from typing import Set, Union

import anyio

from .constants import IGNORE_COMMENT_PREFIX, IGNORE_FILENAME
from .dedent import split_lines

logger = logging.getLogger(__name__)


def parse_ignore_patterns(content: str) -> Set[str]:
    """Return the non-empty, non-comment lines of an ignore file."""
    patterns: Set[str] = set()
    for full_line in split_lines(content):
        line = full_line.strip()
        if not line or line.startswith(IGNORE_COMMENT_PREFIX):
            continue
        patterns.add(line)
    return patterns


async def load_ignore_patterns(
    cwd: Union[str, Path], filename: str = IGNORE_FILENAME
) -> Set[str]:
    """
    Read exclusion patterns from ``cwd/filename``.

    A missing or unreadable file means "no exclusions" and is not an error.
    """
    ignore_path = anyio.Path(cwd) / filename
    try:
        content = await ignore_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"No ignore patterns loaded from {ignore_path}: {e}")
        return set()

    patterns = parse_ignore_patterns(content)
    logger.debug(f"Loaded {len(patterns)} ignore patterns from {ignore_path}")
    return patterns

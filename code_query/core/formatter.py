"""
Rendering of selector matches as location lines and code frames.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from typing import Optional, Sequence

from .constants import LINES_ABOVE, LINES_BELOW, UNKNOWN_LOCATION_MESSAGE
from .dedent import dedent
from .models import Frame, MatchLocation, SourceSpan


def build_frame(
    source_lines: Sequence[str],
    loc: SourceSpan,
    *,
    lines_above: int = LINES_ABOVE,
    lines_below: int = LINES_BELOW,
) -> Frame:
    """
    Cut the lines around ``loc`` out of the file and dedent them.

    The slice runs from index ``start.line - lines_above`` up to, but not
    including, ``end.line + lines_below``; the start is clamped at the top of
    the file.
    """
    first = max(loc.start.line - lines_above, 0)
    last = min(loc.end.line + lines_below, len(source_lines))
    text = dedent("\n".join(source_lines[first:last]))
    return Frame(text=text, first_line=first + 1, last_line=last)


def format_match(
    path: str,
    loc: Optional[SourceSpan],
    source_lines: Sequence[str],
    *,
    include_code_frame: bool = False,
    lines_above: int = LINES_ABOVE,
    lines_below: int = LINES_BELOW,
) -> str:
    """
    Render one match.

    Returns ``path#line:column``, followed by ``:`` and the dedented frame on
    the next lines when ``include_code_frame`` is set. A match without a
    location renders as a fixed message.
    """
    if loc is None:
        return UNKNOWN_LOCATION_MESSAGE

    location = MatchLocation(path=path, line=loc.start.line, column=loc.start.column)
    if not include_code_frame:
        return str(location)

    frame = build_frame(
        source_lines, loc, lines_above=lines_above, lines_below=lines_below
    )
    return f"{location}:\n{frame.text}"


def format_file_header(path: str, match_count: int) -> str:
    """Verbose line printed before a file's matches."""
    return f"{path} {match_count} matches:"


def format_summary(file_count: int) -> str:
    """Verbose line printed after the run."""
    return f"Queried {file_count} files."

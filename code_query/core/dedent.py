"""
Dedent helper that understands tab indentation.

A block is indented with tabs if any of its lines starts with a tab; the
common depth is then stripped as that many tabs, otherwise as spaces. Blocks
mixing both are not normalized.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import re

LINE_BREAK_RE = re.compile(r"\r?\n")
_LEADING_WS_RE = re.compile(r"^[ \t]*")


def split_lines(source: str) -> list[str]:
    """Split text on LF or CRLF line breaks."""
    return LINE_BREAK_RE.split(source)


def dedent(source: str) -> str:
    """Remove the indentation shared by all lines of ``source``."""
    lines = split_lines(source)
    uses_tabs = any(line.startswith("\t") for line in lines)

    min_indentation = min(len(_LEADING_WS_RE.match(line).group(0)) for line in lines)
    if min_indentation == 0:
        return "\n".join(lines)

    prefix_re = re.compile("^" + ("\t" if uses_tabs else " ") * min_indentation)
    return "\n".join(prefix_re.sub("", line, count=1) for line in lines)

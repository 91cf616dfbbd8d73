"""
Conversion of tree-sitter byte positions into line/character positions.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from typing import Any

from ..core.models import SourcePosition, SourceSpan


def char_column(source: bytes, byte_offset: int, byte_column: int) -> int:
    """Count characters between the start of the line and ``byte_offset``."""
    line_start = byte_offset - byte_column
    return len(source[line_start:byte_offset].decode("utf-8", errors="replace"))


def node_start(node: Any, source: bytes) -> SourcePosition:
    row, column = node.start_point
    return SourcePosition(line=row + 1, column=char_column(source, node.start_byte, column))


def node_end(node: Any, source: bytes) -> SourcePosition:
    row, column = node.end_point
    return SourcePosition(line=row + 1, column=char_column(source, node.end_byte, column))


def node_span(node: Any, source: bytes) -> SourceSpan:
    """1-based lines and 0-based character columns of a tree-sitter node."""
    return SourceSpan(start=node_start(node, source), end=node_end(node, source))

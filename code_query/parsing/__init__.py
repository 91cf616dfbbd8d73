"""
Parsing layer: collaborator contracts and the tree-sitter parser.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from .interfaces import LocatedNode, SelectorEngine, SourceParser, SyntaxTree
from .positions import node_span
from .tree_sitter_parser import TreeSitterParser, grammars_for_dialects, select_grammar

__all__ = [
    "LocatedNode",
    "SelectorEngine",
    "SourceParser",
    "SyntaxTree",
    "TreeSitterParser",
    "grammars_for_dialects",
    "node_span",
    "select_grammar",
]

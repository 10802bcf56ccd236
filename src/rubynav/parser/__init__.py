"""
Ruby parsing, node classification and traversal on top of tree-sitter.
"""

from .ruby_parser import parse_source, parse_file, read_source, get_parser
from .dispatcher import Dispatcher
from .nodes import classify_node, constant_name, REFERENCE_NODE_TYPES
from .targeting import Target, locate_target, nesting_at

__all__ = [
    "parse_source",
    "parse_file",
    "read_source",
    "get_parser",
    "Dispatcher",
    "classify_node",
    "constant_name",
    "REFERENCE_NODE_TYPES",
    "Target",
    "locate_target",
    "nesting_at",
]

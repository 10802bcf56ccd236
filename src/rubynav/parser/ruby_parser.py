from pathlib import Path
from typing import Optional, Tuple

import tree_sitter_ruby as tsruby
from tree_sitter import Language, Parser, Tree

from rubynav.exceptions import ParserError
from rubynav.logging_config import logger

RUBY_LANGUAGE = Language(tsruby.language())

# Parser instances are reusable across documents; build one lazily
_parser: Optional[Parser] = None


def get_parser() -> Parser:
    """
    Returns the shared tree-sitter parser for Ruby.
    """
    global _parser
    if _parser is None:
        parser = Parser()
        parser.language = RUBY_LANGUAGE
        _parser = parser
        logger.debug("Initialized tree-sitter Ruby parser")
    return _parser


def parse_source(source: str) -> Tree:
    """
    Parses Ruby source text.

    tree-sitter recovers from syntax errors, so a tree is always returned;
    broken regions show up as ERROR nodes.
    """
    tree = get_parser().parse(source.encode("utf-8"))
    if tree.root_node.has_error:
        logger.debug("Parsed Ruby source contains syntax errors; continuing with partial tree")
    return tree


def read_source(file_path: Path) -> str:
    """
    Reads a Ruby file as UTF-8 text.

    Raises:
        ParserError: If the file cannot be read or decoded.
    """
    path = Path(file_path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParserError(str(path), str(e))


def parse_file(file_path: Path) -> Tuple[str, Tree]:
    """
    Reads and parses a Ruby file.

    Returns:
        The decoded source and its syntax tree.

    Raises:
        ParserError: If the file cannot be read or decoded.
    """
    source = read_source(file_path)
    return source, parse_source(source)

"""
Cursor targeting: which reference node sits under the cursor, and the
lexical nesting it is evaluated in.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from tree_sitter import Node, Tree

from .nodes import (
    CALL,
    IDENTIFIER,
    REFERENCE_NODE_TYPES,
    SCOPE_SEPARATOR,
    contains,
    is_constant_path_tail,
    is_field,
    is_load_call,
    is_method_name,
    node_text,
    same_span,
)

NAMESPACE_NODE_TYPES = ("class", "module")


@dataclass(frozen=True)
class Target:
    """A reference node under the cursor and its enclosing namespaces."""
    node: Node
    nesting: Tuple[str, ...]


def to_byte_column(source: str, line: int, character: int) -> Optional[int]:
    """Convert a code-point column on `line` to a UTF-8 byte column."""
    lines = source.split("\n")
    if line < 0 or line >= len(lines) or character < 0:
        return None
    return len(lines[line][:character].encode("utf-8"))


def _is_reference(node: Node) -> bool:
    # The method name of a call belongs to the call around it
    if node.type == IDENTIFIER and is_method_name(node) and node.parent.type == CALL:
        return False
    return node.type in REFERENCE_NODE_TYPES


def _targets_call(call: Node, child: Node, leaf: Node) -> bool:
    """
    Whether reaching `call` from its child `child` still means the cursor
    is on the call.

    True from the method name and from the call's own parentheses. From an
    argument only a require path counts; receivers and blocks never do.
    """
    if is_field(call, child, "method"):
        return True
    if is_field(call, child, "arguments"):
        return same_span(child, leaf) or is_load_call(call)
    return False


def locate_target(tree: Tree, source: str, line: int, character: int) -> Optional[Target]:
    """
    Find the innermost reference node covering a zero-based position.

    The tail constant of a path (`Bar` in `Foo::Bar`) targets the whole
    path. A call is only targeted from its method name, its own punctuation
    or the path of a require, never from inside its receiver, arguments or
    block.
    """
    column = to_byte_column(source, line, character)
    if column is None:
        return None

    leaf = tree.root_node.named_descendant_for_point_range((line, column), (line, column))
    node = leaf
    previous: Optional[Node] = None

    while node is not None and not _is_reference(node):
        previous = node
        node = node.parent

    if node is None:
        return None

    if node.type == CALL and previous is not None and not _targets_call(node, previous, leaf):
        return None

    if is_constant_path_tail(node):
        node = node.parent

    return Target(node=node, nesting=nesting_at(node))


def nesting_at(node: Node) -> Tuple[str, ...]:
    """
    Names of the class/module bodies enclosing `node`, outermost first.

    A class or module whose name or superclass contains the node does not
    count: those expressions are evaluated in the outer scope. A name with
    a leading "::" restarts the nesting at the top level.
    """
    names: List[str] = []
    current = node.parent
    while current is not None:
        if current.type in NAMESPACE_NODE_TYPES:
            name = current.child_by_field_name("name")
            superclass = current.child_by_field_name("superclass")
            inside_header = (name is not None and contains(name, node)) or (
                superclass is not None and contains(superclass, node)
            )
            if name is not None and not inside_header:
                names.append(node_text(name))
        current = current.parent

    nesting: List[str] = []
    for name in reversed(names):
        if name.startswith(SCOPE_SEPARATOR):
            nesting = [name[len(SCOPE_SEPARATOR):]]
        else:
            nesting.append(name)
    return tuple(nesting)

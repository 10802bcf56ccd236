"""
Classification of tree-sitter Ruby nodes into references.

Every `classify_*` function returns a `Reference` or None; None means the
node has a shape that can never resolve (dynamic constant path, interpolated
require, anonymous block argument, local variable read, ...).
"""

from typing import Optional

from tree_sitter import Node

from rubynav.references import (
    ConstantPath,
    ConstantRead,
    LoadKind,
    MethodCall,
    ModuleLoad,
    Reference,
    SymbolBlockArgument,
)

CALL = "call"
BLOCK_ARGUMENT = "block_argument"
CONSTANT = "constant"
SCOPE_RESOLUTION = "scope_resolution"
IDENTIFIER = "identifier"

REFERENCE_NODE_TYPES = (CALL, BLOCK_ARGUMENT, CONSTANT, SCOPE_RESOLUTION, IDENTIFIER)

# Local variables never leak out of these
HARD_SCOPE_TYPES = ("program", "class", "module", "singleton_class", "method", "singleton_method")
# Blocks also see the locals of the scope around them
SOFT_SCOPE_TYPES = ("block", "do_block", "lambda")

# Every identifier directly under these declares a local
_DECLARING_PARENTS = (
    "method_parameters",
    "lambda_parameters",
    "block_parameters",
    "splat_parameter",
    "hash_splat_parameter",
    "block_parameter",
    "destructured_parameter",
    "left_assignment_list",
    "rest_assignment",
    "destructured_left_assignment",
    "exception_variable",
)

# Parent type -> field holding the declared local
_DECLARING_FIELDS = {
    "optional_parameter": "name",
    "keyword_parameter": "name",
    "assignment": "left",
    "operator_assignment": "left",
    "for": "pattern",
}

# Identifiers under these name a method rather than call one
_METHOD_NAME_FIELDS = {
    CALL: "method",
    "method": "name",
    "singleton_method": "name",
}
_METHOD_NAME_PARENTS = ("alias", "undef")

# Calls classified as module loads rather than method calls
ABSOLUTE_LOAD_METHODS = ("require",)
RELATIVE_LOAD_METHODS = ("require_relative",)

SCOPE_SEPARATOR = "::"


def node_text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace")


def contains(outer: Node, inner: Node) -> bool:
    """True when `inner` lies entirely inside `outer`'s byte range."""
    return outer.start_byte <= inner.start_byte and inner.end_byte <= outer.end_byte


def same_span(a: Node, b: Node) -> bool:
    return a.type == b.type and a.start_byte == b.start_byte and a.end_byte == b.end_byte


def is_field(parent: Node, child: Node, field: str) -> bool:
    """True when `child` is the node stored under `field` of `parent`."""
    value = parent.child_by_field_name(field)
    return value is not None and same_span(value, child)


def is_load_call(node: Node) -> bool:
    if node.type != CALL:
        return False
    method = node.child_by_field_name("method")
    return method is not None and node_text(method) in ABSOLUTE_LOAD_METHODS + RELATIVE_LOAD_METHODS


def is_constant_path_tail(node: Node) -> bool:
    """True for the `Bar` of `Foo::Bar`; it only has meaning as part of the path."""
    parent = node.parent
    return parent is not None and parent.type == SCOPE_RESOLUTION and is_field(parent, node, "name")


def constant_name(node: Node) -> Optional[str]:
    """
    Full name of a constant or constant path.

    `Foo::Bar` gives "Foo::Bar", `::Foo` keeps its leading "::", and paths
    whose scope is not itself a constant (`foo::Bar`, `self.class::Bar`)
    give None.
    """
    if node.type == CONSTANT:
        return node_text(node)

    if node.type != SCOPE_RESOLUTION:
        return None

    name = node.child_by_field_name("name")
    if name is None or name.type != CONSTANT:
        return None

    scope = node.child_by_field_name("scope")
    if scope is None:
        return f"{SCOPE_SEPARATOR}{node_text(name)}"

    prefix = constant_name(scope)
    if prefix is None:
        return None
    return f"{prefix}{SCOPE_SEPARATOR}{node_text(name)}"


def string_literal_content(node: Node) -> Optional[str]:
    """Content of a plain string literal; None if interpolated or not a string."""
    if node.type != "string":
        return None

    parts = []
    for child in node.named_children:
        if child.type in ("string_content", "escape_sequence"):
            parts.append(node_text(child))
        else:
            return None
    return "".join(parts)


def first_string_argument(call: Node) -> Optional[str]:
    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return None

    values = [child for child in arguments.named_children if child.type != "comment"]
    if not values:
        return None
    return string_literal_content(values[0])


def classify_call(node: Node) -> Optional[Reference]:
    method = node.child_by_field_name("method")
    if method is None:
        return None

    name = node_text(method)
    if name in ABSOLUTE_LOAD_METHODS:
        return ModuleLoad(LoadKind.ABSOLUTE, first_string_argument(node))
    if name in RELATIVE_LOAD_METHODS:
        return ModuleLoad(LoadKind.RELATIVE, first_string_argument(node))

    receiver = node.child_by_field_name("receiver")
    return MethodCall(name, receiver is None or receiver.type == "self")


def classify_block_argument(node: Node) -> Optional[Reference]:
    if not node.named_children:
        return None

    expression = node.named_children[0]
    if expression.type == "simple_symbol":
        value = node_text(expression)[1:]
    elif expression.type == "delimited_symbol":
        value = "".join(
            node_text(child) for child in expression.named_children if child.type == "string_content"
        )
        if any(child.type == "interpolation" for child in expression.named_children):
            return None
    else:
        return None

    if not value:
        return None
    return SymbolBlockArgument(value)


def classify_constant(node: Node) -> Optional[Reference]:
    if is_constant_path_tail(node):
        return None
    return ConstantRead(node_text(node))


def classify_scope_resolution(node: Node) -> Optional[Reference]:
    name = constant_name(node)
    if name is None:
        return None
    return ConstantPath(name)


def is_method_name(node: Node) -> bool:
    """True for identifiers that name a method: `foo` in `a.foo`, `def foo`, `alias foo bar`."""
    parent = node.parent
    if parent is None:
        return False
    if parent.type in _METHOD_NAME_PARENTS:
        return True
    field = _METHOD_NAME_FIELDS.get(parent.type)
    return field is not None and is_field(parent, node, field)


def declares_local(node: Node) -> bool:
    """True for identifiers that introduce a local variable (parameters, assignment targets)."""
    parent = node.parent
    if parent is None:
        return False
    if parent.type in _DECLARING_PARENTS:
        return True
    field = _DECLARING_FIELDS.get(parent.type)
    return field is not None and is_field(parent, node, field)


def _declared_before(scope: Node, name: str, offset: int) -> bool:
    stack = list(scope.named_children)
    while stack:
        node = stack.pop()
        if node.start_byte >= offset or node.type in HARD_SCOPE_TYPES + SOFT_SCOPE_TYPES:
            continue
        if node.type == IDENTIFIER and declares_local(node) and node_text(node) == name:
            return True
        stack.extend(node.named_children)
    return False


def is_local_variable(node: Node) -> bool:
    """
    True when the identifier reads a local variable.

    Ruby decides this lexically: the name must have been declared earlier
    in the same method, class or file body, or in a block around it.
    """
    name = node_text(node)
    scope = node.parent
    while scope is not None:
        if scope.type in SOFT_SCOPE_TYPES + HARD_SCOPE_TYPES:
            if _declared_before(scope, name, node.start_byte):
                return True
            if scope.type in HARD_SCOPE_TYPES:
                return False
        scope = scope.parent
    return False


def classify_identifier(node: Node) -> Optional[Reference]:
    """A bare `helper` that is not a local is a call on self."""
    if is_method_name(node) or declares_local(node) or is_local_variable(node):
        return None
    return MethodCall(node_text(node), True)


_CLASSIFIERS = {
    CALL: classify_call,
    BLOCK_ARGUMENT: classify_block_argument,
    CONSTANT: classify_constant,
    SCOPE_RESOLUTION: classify_scope_resolution,
    IDENTIFIER: classify_identifier,
}


def classify_node(node: Node) -> Optional[Reference]:
    """Classify any node; unsupported node types give None."""
    classifier = _CLASSIFIERS.get(node.type)
    if classifier is None:
        return None
    return classifier(node)

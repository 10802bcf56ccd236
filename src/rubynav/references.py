"""
Classified reference occurrences.

Each visited syntax node is turned into exactly one of these values (or
nothing) before resolution, so the resolver only ever branches on a closed
set of reference shapes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class LoadKind(str, Enum):
    """How a module-load statement locates its file."""
    ABSOLUTE = "absolute"   # require: looked up through load paths
    RELATIVE = "relative"   # require_relative: relative to the current file


@dataclass(frozen=True)
class MethodCall:
    """A call to `name`; self receiver when there is no receiver or it is `self`."""
    name: str
    has_self_receiver: bool


@dataclass(frozen=True)
class SymbolBlockArgument:
    """A method reference passed as `&:name`."""
    name: str


@dataclass(frozen=True)
class ConstantRead:
    """A bare constant such as `Foo`."""
    name: str


@dataclass(frozen=True)
class ConstantPath:
    """A qualified constant such as `Foo::Bar` or `::Foo`."""
    name: str


@dataclass(frozen=True)
class ModuleLoad:
    """
    A require/require_relative statement.

    `literal` is None when the first argument is missing or is not a plain
    string literal.
    """
    kind: LoadKind
    literal: Optional[str]


Reference = Union[MethodCall, SymbolBlockArgument, ConstantRead, ConstantPath, ModuleLoad]

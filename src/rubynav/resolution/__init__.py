"""
Resolution package: go-to-definition for Ruby references.

Provides the definition resolver, its response builder and the
request-level facade.
"""

from .facade import find_definitions, resolve_reference, resolve_references
from .definition import DefinitionResolver
from .response_builder import CollectionResponseBuilder, ResponseSink
from .config import (
    MAX_DEFINITION_CANDIDATES_WITHOUT_RECEIVER,
    SCOPE_SEPARATOR,
)

__all__ = [
    "find_definitions",
    "resolve_reference",
    "resolve_references",
    "DefinitionResolver",
    "CollectionResponseBuilder",
    "ResponseSink",
    "MAX_DEFINITION_CANDIDATES_WITHOUT_RECEIVER",
    "SCOPE_SEPARATOR",
]

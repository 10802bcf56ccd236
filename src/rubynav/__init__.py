"""
rubynav - Go-to-definition engine for Ruby code

Resolves method calls, constants and require statements against a
pre-built definition index.
"""

__version__ = "0.1.0"

from rubynav.index import MemoryIndex, load_index
from rubynav.resolution import find_definitions, resolve_reference, DefinitionResolver
from rubynav.schemas import DefinitionEntry, LoadPathEntry, Location, ResolutionContext

__all__ = [
    "__version__",
    "MemoryIndex",
    "load_index",
    "find_definitions",
    "resolve_reference",
    "DefinitionResolver",
    "DefinitionEntry",
    "LoadPathEntry",
    "Location",
    "ResolutionContext",
]

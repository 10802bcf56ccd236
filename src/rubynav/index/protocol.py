"""
Read-only query surface the definition resolver needs from an index.
"""

from typing import Protocol, Sequence

from rubynav.schemas import DefinitionEntry, LoadPathEntry


class DefinitionIndex(Protocol):
    """
    Anything that can answer definition queries.

    Implementations own all scope search (ancestors, mixins, lexical
    nesting); callers only filter and emit what comes back.
    """

    def resolve_method(self, name: str, receiver_name: str) -> Sequence[DefinitionEntry]:
        """Method entries for `name` visible from namespace `receiver_name`, ancestor-aware."""
        ...

    def lookup_by_name(self, name: str) -> Sequence[DefinitionEntry]:
        """Every entry with exactly this name, unscoped."""
        ...

    def resolve_constant(self, name: str, nesting: Sequence[str]) -> Sequence[DefinitionEntry]:
        """Constant entries for `name` seen from `nesting`, most specific first."""
        ...

    def search_load_paths(self, literal: str) -> Sequence[LoadPathEntry]:
        """Load-path entries that may match a require literal."""
        ...

    def is_project_owned(self, file_path: str) -> bool:
        """True for project source, False for dependencies."""
        ...

"""
In-memory definition index.

Holds declaration entries and load paths loaded from a JSON index and
answers the scope-aware queries the definition resolver relies on.
"""

import os
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from rubynav.logging_config import logger
from rubynav.schemas import DefinitionEntry, IndexStats, LoadPathEntry

# Owner used for methods declared at the top level of a file
TOP_LEVEL = ""

SEPARATOR = "::"


def _normalize(path: str) -> str:
    return os.path.normcase(os.path.normpath(os.path.abspath(path)))


def _is_within(path: str, root: str) -> bool:
    try:
        return os.path.commonpath([path, root]) == root
    except ValueError:
        # Different drives on Windows
        return False


class MemoryIndex:
    """
    Dictionary-backed index over a fixed set of entries.

    Entries keep the order they were added in; every query returns
    candidates in that native order.
    """

    def __init__(
        self,
        entries: Iterable[DefinitionEntry] = (),
        load_paths: Iterable[LoadPathEntry] = (),
        project_root: Optional[str] = None,
        dependency_paths: Iterable[str] = (),
    ):
        self.project_root = project_root
        self.dependency_paths: List[str] = list(dependency_paths)

        self._entries: List[DefinitionEntry] = []
        self._by_name: Dict[str, List[DefinitionEntry]] = {}
        self._methods: Dict[Tuple[str, str], List[DefinitionEntry]] = {}
        self._namespaces: Dict[str, List[DefinitionEntry]] = {}
        self._load_paths: List[LoadPathEntry] = list(load_paths)

        self._normalized_root = _normalize(project_root) if project_root else None
        self._normalized_dependencies = [_normalize(p) for p in self.dependency_paths]

        for entry in entries:
            self.add(entry)

    def add(self, entry: DefinitionEntry) -> None:
        """Register one declaration site."""
        self._entries.append(entry)
        self._by_name.setdefault(entry.name, []).append(entry)

        if entry.kind == "method":
            owner = entry.owner or TOP_LEVEL
            self._methods.setdefault((owner, entry.name), []).append(entry)
        elif entry.is_namespace:
            self._namespaces.setdefault(entry.name, []).append(entry)

    def add_load_path(self, entry: LoadPathEntry) -> None:
        self._load_paths.append(entry)

    @property
    def entries(self) -> List[DefinitionEntry]:
        return list(self._entries)

    @property
    def load_paths(self) -> List[LoadPathEntry]:
        return list(self._load_paths)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def lookup_by_name(self, name: str) -> List[DefinitionEntry]:
        return list(self._by_name.get(name, []))

    def resolve_method(self, name: str, receiver_name: str) -> List[DefinitionEntry]:
        """
        Find `name` on the first ancestor of `receiver_name` that defines it.

        Methods declared at the top level are visible from every namespace
        and are searched last.
        """
        for ancestor in self.ancestors_of(receiver_name):
            found = self._methods.get((ancestor, name))
            if found:
                return list(found)

        return list(self._methods.get((TOP_LEVEL, name), []))

    def resolve_constant(self, name: str, nesting: Sequence[str]) -> List[DefinitionEntry]:
        """
        Resolve a constant reference from a lexical position.

        Lookup order: enclosing namespaces innermost first, then the
        ancestors of the innermost namespace, then the top level. A leading
        "::" restricts the lookup to the top level.
        """
        if name.startswith(SEPARATOR):
            return self._constants_named(name[len(SEPARATOR):])

        tried: Set[str] = set()
        for candidate in self._constant_candidates(name, nesting):
            if candidate in tried:
                continue
            tried.add(candidate)

            found = self._constants_named(candidate)
            if found:
                return found

        return []

    def search_load_paths(self, literal: str) -> List[LoadPathEntry]:
        return [entry for entry in self._load_paths if entry.require_path.startswith(literal)]

    def is_project_owned(self, file_path: str) -> bool:
        """
        Project code is anything outside the dependency roots; with a known
        project root it must also sit under that root.
        """
        path = _normalize(file_path)
        if self._normalized_root is not None and not _is_within(path, self._normalized_root):
            return False

        return not any(_is_within(path, dep) for dep in self._normalized_dependencies)

    # ------------------------------------------------------------------
    # Ancestry
    # ------------------------------------------------------------------

    def ancestors_of(self, namespace: str) -> List[str]:
        """
        Linearized ancestors of a namespace, the namespace itself included.

        Prepended modules come before the namespace, included modules after
        it (last included first), then the superclass chain. Names that
        appear twice or form a cycle are only visited once.
        """
        ancestors: List[str] = []
        self._linearize(namespace, ancestors, set())
        return ancestors

    def _linearize(self, namespace: str, ancestors: List[str], visited: Set[str]) -> None:
        if namespace in visited:
            return
        visited.add(namespace)

        prepends: List[str] = []
        includes: List[str] = []
        superclass: Optional[str] = None
        for declaration in self._namespaces.get(namespace, []):
            prepends.extend(declaration.prepends)
            includes.extend(declaration.includes)
            if superclass is None and declaration.superclass:
                superclass = declaration.superclass

        for module in reversed(prepends):
            self._linearize(module, ancestors, visited)

        ancestors.append(namespace)

        for module in reversed(includes):
            self._linearize(module, ancestors, visited)

        if superclass:
            self._linearize(superclass, ancestors, visited)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _constant_candidates(self, name: str, nesting: Sequence[str]) -> Iterable[str]:
        for depth in range(len(nesting), 0, -1):
            yield SEPARATOR.join([*nesting[:depth], name])

        if nesting:
            for ancestor in self.ancestors_of(SEPARATOR.join(nesting)):
                if ancestor != TOP_LEVEL:
                    yield f"{ancestor}{SEPARATOR}{name}"

        yield name

    def _constants_named(self, qualified_name: str) -> List[DefinitionEntry]:
        return [entry for entry in self._by_name.get(qualified_name, []) if entry.kind != "method"]

    def stats(self) -> IndexStats:
        kinds = Counter(entry.kind for entry in self._entries)
        logger.debug(f"Index holds {len(self._entries)} entries and {len(self._load_paths)} load paths")
        return IndexStats(
            total_entries=len(self._entries),
            total_load_paths=len(self._load_paths),
            entry_kinds=dict(kinds),
            project_root=self.project_root,
            dependency_paths=list(self.dependency_paths),
        )

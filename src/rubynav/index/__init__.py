"""
Public API for the definition index.
"""
from pathlib import Path
from typing import Iterable, Optional

from .protocol import DefinitionIndex
from .memory_index import MemoryIndex
from .json_store import JSONIndexStore


def load_index(
    index_path: Path,
    extra_dependency_paths: Optional[Iterable[str]] = None,
    default_project_root: Optional[Path] = None,
) -> MemoryIndex:
    """
    Load a definition index from a JSON file.

    Args:
        index_path: Path to the JSON index
        extra_dependency_paths: Additional dependency roots (e.g. from user config)
        default_project_root: Project root to use when the index records none

    Raises:
        IndexCorruptionError: If the file is missing or malformed
    """
    index = JSONIndexStore(index_path).read()
    project_root = index.project_root
    if project_root is None and default_project_root is not None:
        project_root = str(default_project_root)

    if not extra_dependency_paths and project_root == index.project_root:
        return index

    return MemoryIndex(
        entries=index.entries,
        load_paths=index.load_paths,
        project_root=project_root,
        dependency_paths=[*index.dependency_paths, *(extra_dependency_paths or ())],
    )


def save_index(index: MemoryIndex, index_path: Path) -> Path:
    """Write a MemoryIndex to a JSON file."""
    return JSONIndexStore(index_path).write(index)


__all__ = [
    "DefinitionIndex",
    "MemoryIndex",
    "JSONIndexStore",
    "load_index",
    "save_index",
]

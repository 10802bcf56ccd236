"""
CLI Common Utilities

Shared helpers for locating and loading the definition index.
"""

from pathlib import Path
from typing import Optional

import typer

from rubynav.exceptions import RubyNavError
from rubynav.index import MemoryIndex, load_index
from rubynav.user_config import UserConfig
from .output import print_error


def get_default_index(index_path: Optional[Path], config: UserConfig) -> Path:
    """
    Get the index path, checking existence.

    Raises:
        typer.Exit: If the index file doesn't exist
    """
    if index_path is None:
        index_path = config.index_path

    if not index_path.exists():
        print_error(
            f"Index not found at {index_path}. Provide --index or set index.path in .rubynav/config.json.",
            code="INDEX_NOT_FOUND",
            input_value=str(index_path),
        )
        raise typer.Exit(code=1)

    return index_path


def load_index_or_exit(index_path: Optional[Path], config: UserConfig) -> MemoryIndex:
    """
    Load the index, adding configured dependency roots, or exit with an error.

    An index that records no project root takes the configured one.

    Raises:
        typer.Exit: If the index is missing or fails to load
    """
    validated_path = get_default_index(index_path, config)

    try:
        return load_index(
            validated_path,
            extra_dependency_paths=config.dependency_paths,
            default_project_root=config.project_root,
        )
    except RubyNavError as e:
        print_error(f"Error loading index: {e}", code="INDEX_LOAD_FAILED", input_value=str(validated_path))
        raise typer.Exit(code=1)

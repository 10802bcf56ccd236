import json
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError

from rubynav.logging_config import logger
from rubynav.exceptions import IndexCorruptionError
from rubynav.schemas import DefinitionEntry, LoadPathEntry
from .memory_index import MemoryIndex


class JSONIndexStore:
    """
    JSON-backed storage for a definition index.

    Layout:
        {
          "metadata": {"project_root": "...", "dependency_paths": [...]},
          "entries": [DefinitionEntry, ...],
          "load_paths": [LoadPathEntry, ...]
        }
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def write(self, index: MemoryIndex) -> Path:
        """
        Persist an index to disk as JSON.
        """
        payload: Dict[str, Any] = {
            "metadata": {
                "project_root": index.project_root,
                "dependency_paths": index.dependency_paths,
            },
            "entries": [e.model_dump(mode="json") for e in index.entries],
            "load_paths": [lp.model_dump(mode="json") for lp in index.load_paths],
        }

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2))
        logger.info(f"Wrote index with {len(payload['entries'])} entries and {len(payload['load_paths'])} load paths to {self.path}")
        return self.path

    def read(self) -> MemoryIndex:
        """
        Load an index from disk and rehydrate its entries.

        Relative dependency paths are resolved against the project root.

        Raises:
            IndexCorruptionError: If the index file is missing, malformed or cannot be parsed.
        """
        if not self.path.exists():
            raise IndexCorruptionError(f"Index file not found at {self.path}")

        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as exc:
            raise IndexCorruptionError(f"Index file at {self.path} contains invalid JSON: {exc}")
        except OSError as exc:
            raise IndexCorruptionError(f"Failed to read index from {self.path}: {exc}")

        if not isinstance(data, dict):
            raise IndexCorruptionError(f"Index file at {self.path} is not a valid JSON object")

        try:
            meta = data.get("metadata") or {}
            entries = [DefinitionEntry(**e) for e in data.get("entries", [])]
            load_paths = [LoadPathEntry(**lp) for lp in data.get("load_paths", [])]
            project_root = meta.get("project_root")
            dependency_paths = self._resolve_dependency_paths(
                meta.get("dependency_paths", []), project_root
            )
        except (ValidationError, TypeError, AttributeError) as exc:
            raise IndexCorruptionError(f"Index file at {self.path} has invalid structure: {exc}")

        logger.info(f"Loaded index with {len(entries)} entries and {len(load_paths)} load paths from {self.path}")
        return MemoryIndex(
            entries=entries,
            load_paths=load_paths,
            project_root=project_root,
            dependency_paths=dependency_paths,
        )

    @staticmethod
    def _resolve_dependency_paths(paths: List[str], project_root: Any) -> List[str]:
        if not isinstance(paths, list):
            raise TypeError("metadata.dependency_paths must be a list")

        resolved = []
        for entry in paths:
            path = Path(entry)
            if not path.is_absolute() and project_root:
                path = Path(project_root) / path
            resolved.append(str(path))
        return resolved

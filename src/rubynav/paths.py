"""
rubynav Path Configuration

Centralized path management for rubynav data files.
All paths are relative to the project root (current working directory).

Directory Structure:
.rubynav/
├── index.json           # Definition index (entries + load paths)
├── config.json          # Project-local configuration overrides
└── logs/                # Log files
"""

from pathlib import Path
from typing import Optional


class RubyNavPaths:
    """
    Centralized path configuration for rubynav.

    All paths are lazily resolved relative to project_root.
    Default project_root is current working directory.
    """

    RUBYNAV_DIR = ".rubynav"
    GLOBAL_DIR = Path.home() / ".rubynav"

    INDEX_NAME = "index.json"
    CONFIG_NAME = "config.json"
    LOGS_DIR = "logs"

    GEMFILE_LOCK_NAME = "Gemfile.lock"

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize paths configuration.

        Args:
            project_root: Root directory for the project. Defaults to CWD.
        """
        self._project_root = Path(project_root) if project_root is not None else None

    @property
    def project_root(self) -> Path:
        """Get the project root directory."""
        if self._project_root is None:
            return Path.cwd()
        return self._project_root

    @property
    def rubynav_dir(self) -> Path:
        """Get the .rubynav directory path."""
        return self.project_root / self.RUBYNAV_DIR

    @property
    def index_file(self) -> Path:
        """Get the default definition index path."""
        return self.rubynav_dir / self.INDEX_NAME

    @property
    def local_config(self) -> Path:
        """Get the project-local config path."""
        return self.rubynav_dir / self.CONFIG_NAME

    @property
    def global_config(self) -> Path:
        """Get the user-wide config path."""
        return self.GLOBAL_DIR / self.CONFIG_NAME

    @property
    def logs_dir(self) -> Path:
        """Get the logs directory path."""
        return self.rubynav_dir / self.LOGS_DIR

    @property
    def gemfile_lock(self) -> Path:
        """Get the project's Gemfile.lock path."""
        return self.project_root / self.GEMFILE_LOCK_NAME

    def ensure_dirs(self) -> None:
        """Create all necessary directories if they don't exist."""
        self.rubynav_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(exist_ok=True)


# Global instance for convenience
_default_paths: Optional[RubyNavPaths] = None


def get_paths(project_root: Optional[Path] = None) -> RubyNavPaths:
    """
    Get the paths configuration.

    Args:
        project_root: Optional project root. If None, uses the cached default (CWD).

    Returns:
        RubyNavPaths instance
    """
    global _default_paths

    if project_root is not None:
        return RubyNavPaths(project_root)

    if _default_paths is None:
        _default_paths = RubyNavPaths()

    return _default_paths

"""
rubynav User Configuration

Hierarchical config system with global defaults + local overrides:
- Global: ~/.rubynav/config.json (cross-project settings)
- Local: .rubynav/config.json (project-specific overrides)

Config structure:
{
  "index": {
    "path": ".rubynav/index.json",          // Definition index location
    "dependency_paths": ["vendor/bundle"]   // Extra non-project roots
  },
  "definition": {
    "typechecker": "auto"                   // "auto", true or false
  }
}
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from rubynav.exceptions import ConfigError
from rubynav.logging_config import logger
from rubynav.paths import RubyNavPaths


# Gems whose presence in Gemfile.lock means Sorbet owns project navigation
TYPECHECKER_GEMS = ("sorbet-static", "sorbet")

# Default configuration
DEFAULT_CONFIG = {
    "index": {
        "path": None,
        "dependency_paths": ["vendor/bundle"],
    },
    "definition": {
        "typechecker": "auto",
    },
}


class UserConfig:
    """
    Manages hierarchical user configuration.

    Load order (with override):
    1. Default config (hardcoded)
    2. Global config (~/.rubynav/config.json)
    3. Local config (.rubynav/config.json)
    """

    def __init__(self, project_root: Optional[Path] = None, global_config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            project_root: Project root directory (defaults to CWD)
            global_config_path: Override for the user-wide config file
        """
        self.paths = RubyNavPaths(project_root or Path.cwd())
        self.project_root = self.paths.project_root
        self.global_config_path = global_config_path or self.paths.global_config
        self.local_config_path = self.paths.local_config

        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration with hierarchical override.

        Returns:
            Merged configuration dictionary
        """
        config = self._deep_merge({}, DEFAULT_CONFIG)

        for label, path in (("global", self.global_config_path), ("local", self.local_config_path)):
            if not path.exists():
                continue
            try:
                with open(path, 'r') as f:
                    overrides = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to load {label} config: {e}")
                continue

            if not isinstance(overrides, dict):
                logger.warning(f"Ignoring {label} config at {path}: expected a JSON object")
                continue

            config = self._deep_merge(config, overrides)
            logger.debug(f"Loaded {label} config from {path}")

        return config

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """
        Deep merge two dictionaries, with override taking precedence.

        Args:
            base: Base dictionary
            override: Override dictionary

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            elif isinstance(value, dict):
                result[key] = self._deep_merge({}, value)
            else:
                result[key] = value

        return result

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a config value by dot-separated key.

        Examples:
            config.get("definition.typechecker")  # "auto"
            config.get("index.dependency_paths")  # ["vendor/bundle"]
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @property
    def index_path(self) -> Path:
        """Configured index location, resolved against the project root."""
        configured = self.get("index.path")
        if not configured:
            return self.paths.index_file
        path = Path(configured)
        if not path.is_absolute():
            path = self.project_root / path
        return path

    @property
    def dependency_paths(self) -> List[str]:
        """Configured dependency roots as absolute paths."""
        configured = self.get("index.dependency_paths", [])
        if not isinstance(configured, list):
            raise ConfigError("index.dependency_paths must be a list of paths")

        resolved = []
        for entry in configured:
            path = Path(entry)
            if not path.is_absolute():
                path = self.project_root / path
            resolved.append(str(path))
        return resolved

    def typechecker_enabled(self) -> bool:
        """
        Whether an external type-checker is authoritative for project files.

        "auto" inspects Gemfile.lock for a Sorbet dependency.

        Raises:
            ConfigError: If definition.typechecker has an unsupported value.
        """
        setting = self.get("definition.typechecker", "auto")

        if isinstance(setting, bool):
            return setting
        if setting != "auto":
            raise ConfigError(
                f"definition.typechecker must be 'auto', true or false (got {setting!r})"
            )

        return detect_typechecker(self.project_root)


def detect_typechecker(project_root: Path) -> bool:
    """
    True when the project's Gemfile.lock pins a Sorbet gem.

    Only the specs section matters; `sorbet-runtime` alone does not count.
    """
    lockfile = RubyNavPaths(project_root).gemfile_lock
    if not lockfile.exists():
        return False

    try:
        content = lockfile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read {lockfile}: {e}")
        return False

    for line in content.splitlines():
        gem = line.strip().split(" ", 1)[0]
        if gem in TYPECHECKER_GEMS:
            logger.debug(f"Found type-checker gem '{gem}' in {lockfile}")
            return True
    return False

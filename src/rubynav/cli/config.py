"""
CLI Configuration

Centralized configuration for the rubynav CLI.
"""

import os
from typing import Optional


class CLIConfig:
    """Configuration for CLI commands"""

    # Machine mode: plain JSON output, no tables or colors
    _machine_mode: Optional[bool] = None

    @classmethod
    def set_machine_mode(cls, enabled: bool) -> None:
        """Set machine mode (pure data output, no presentation)"""
        cls._machine_mode = enabled

    @classmethod
    def is_machine_mode(cls) -> bool:
        """
        Check if machine mode is active.

        Human mode is the default; RUBYNAV_MACHINE_MODE opts into machine mode.
        """
        if cls._machine_mode is not None:
            return cls._machine_mode
        return os.getenv("RUBYNAV_MACHINE_MODE", "").lower() in ("1", "true", "yes")

    @classmethod
    def reset(cls) -> None:
        """Forget explicit settings (for testing)."""
        cls._machine_mode = None

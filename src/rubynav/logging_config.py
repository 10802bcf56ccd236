import sys
import os
from loguru import logger

# Flag to track if logging has been configured
_logging_configured = False


def setup_logging(level="INFO", suppress_console=None, enable_file_logging=None, force=False):
    """
    Configures the global logger.

    Console logging is on unless RUBYNAV_MACHINE_MODE is set. File logging is
    opt-in via RUBYNAV_FILE_LOGGING=1 or enable_file_logging=True.

    Args:
        level: Logging level (default: INFO)
        suppress_console: If True, suppress console logging. If None, check RUBYNAV_MACHINE_MODE env var.
        enable_file_logging: If True, enable file logging. If None, check RUBYNAV_FILE_LOGGING env var.
        force: Reconfigure even if logging was already set up (CLI flags, tests).
    """
    global _logging_configured

    # Configure once unless a caller (CLI flag, test fixture) forces a reset
    if _logging_configured and not force:
        return
    _logging_configured = True

    logger.remove()

    # Machine mode keeps stderr clean for JSON consumers
    if suppress_console is None:
        suppress_console = os.getenv("RUBYNAV_MACHINE_MODE", "").lower() in ("1", "true", "yes")

    # Console: human-readable resolution traces on stderr
    if not suppress_console:
        logger.add(
            sys.stderr,
            level=level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
            colorize=True
        )

    # File logging is opt-in; RUBYNAV_FILE_LOGGING=1 or enable_file_logging=True
    if enable_file_logging is None:
        enable_file_logging = os.getenv("RUBYNAV_FILE_LOGGING", "").lower() in ("1", "true", "yes")

    if enable_file_logging:
        # Lives next to the index in .rubynav/logs/
        from rubynav.paths import get_paths
        paths = get_paths()
        paths.ensure_dirs()

        logger.add(
            paths.logs_dir / "rubynav.log",
            level="INFO",           # Per-reference DEBUG traces stay on the console
            rotation="10 MB",
            retention="1 day",
            compression="gz",
            catch=True,
            serialize=False         # Plain text
        )


# Configure the logger on import (will check env var for machine mode)
setup_logging()

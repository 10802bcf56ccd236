# Custom exceptions for rubynav

class RubyNavError(Exception):
    """Base exception for all application-specific errors."""
    pass

class ParserError(RubyNavError):
    """Raised when a Ruby file cannot be read or parsed by tree-sitter."""
    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        self.message = message
        super().__init__(f"Failed to parse {file_path}: {message}")

class IndexCorruptionError(RubyNavError):
    """Raised if the definition index file is missing or malformed."""
    pass

class ConfigError(RubyNavError):
    """Raised for configuration-related problems."""
    pass


class UnresolvableBaseError(RubyNavError):
    """Raised when a relative load has neither a file URI nor a working directory to resolve against."""

    def __init__(self, uri: str, reason: str = ""):
        self.uri = uri
        self.reason = reason
        message = f"Cannot determine base directory for relative load in {uri}"
        if reason:
            message += f": {reason}"
        super().__init__(message)

"""
file:// URI helpers for document and definition locations.
"""

import re
from typing import Optional
from urllib.parse import quote, unquote, urlparse

FILE_SCHEME = "file"

_WINDOWS_DRIVE = re.compile(r"^[A-Za-z]:")
_WINDOWS_DRIVE_PATH = re.compile(r"^/[A-Za-z]:")


def from_path(path: str) -> str:
    """
    Build a percent-encoded file URI from an absolute filesystem path.

    Examples:
        "/gems/foo/lib/foo.rb" -> "file:///gems/foo/lib/foo.rb"
        "C:\\src\\a.rb"        -> "file:///C:/src/a.rb"
    """
    path = path.replace("\\", "/")
    if _WINDOWS_DRIVE.match(path):
        path = "/" + path
    return f"{FILE_SCHEME}://{quote(path, safe='/:')}"


def to_standardized_path(uri: str) -> Optional[str]:
    """
    Convert a file URI back to an unescaped filesystem path.

    Returns None for any URI that does not name a local file (untitled
    buffers, other schemes).
    """
    parsed = urlparse(uri)
    if parsed.scheme != FILE_SCHEME or not parsed.path:
        return None

    path = unquote(parsed.path)
    if _WINDOWS_DRIVE_PATH.match(path):
        path = path[1:]
    return path

"""Utility functions for pyrelup."""

import mimetypes
import re
import unicodedata

# =============================================================================
# Constants for asset operations
# =============================================================================

# Page size for asset listing (the API maximum)
DEFAULT_PER_PAGE: int = 100

# Retries granted to one upload after a 5xx or statusless failure
DEFAULT_SERVER_RETRIES: int = 1

# Fallback content type for unknown extensions
DEFAULT_MIME_TYPE: str = "application/octet-stream"

# Release event actions that carry the release being published
RELEASE_EVENT_ACTIONS: tuple[str, ...] = ("published", "created", "prereleased")


# =============================================================================
# Asset name normalization
# =============================================================================

_COMBINING_MARKS = re.compile("[\\u0300-\\u036f]")
_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9.\-_]")


def normalize_asset_name(name: str) -> str:
    """Rewrite an asset name the way GitHub stores it.

    This approximates the sanitization GitHub applies to uploaded asset
    names. It is close to the server behavior but not guaranteed to match it.

    Args:
        name: Requested asset name

    Returns:
        Normalized asset name

    Examples:
        >>> normalize_asset_name("café.txt")
        'cafe.txt'
        >>> normalize_asset_name("...hidden")
        'default.hidden'
        >>> normalize_asset_name("a/b*c?.bin")
        'abc.bin'
        >>> normalize_asset_name("trailing...")
        'trailing'
    """
    name = unicodedata.normalize("NFD", name)
    name = _COMBINING_MARKS.sub("", name)
    name = _INVALID_NAME_CHARS.sub("", name)
    name = name.rstrip(".")
    if name.startswith("."):
        name = "default." + name.lstrip(".")
    return name


# =============================================================================
# File utilities
# =============================================================================


def guess_mime_type(file_name: str) -> str:
    """Guess the content type of an asset from its name.

    Args:
        file_name: Asset or file name

    Returns:
        MIME type string (defaults to 'application/octet-stream')
    """
    mime_type, _ = mimetypes.guess_type(file_name)
    return mime_type or DEFAULT_MIME_TYPE


def is_glob_pattern(value: str) -> bool:
    """Check if a file spec contains glob wildcards.

    Examples:
        >>> is_glob_pattern("dist/*.whl")
        True
        >>> is_glob_pattern("README.md")
        False
    """
    return "*" in value or "?" in value


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "256 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f} MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f} GB"

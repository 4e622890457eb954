"""Wildcard masks used to select release assets for deletion."""

import re
from collections.abc import Iterable


def wildcard_to_regex(pattern: str) -> str:
    """Convert a wildcard mask to an anchored regular expression.

    ``*`` matches any sequence of characters and ``?`` exactly one. Every
    other character is literal.
    """
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return "^" + "".join(parts) + "$"


class DeletePattern:
    """A compiled, case-insensitive wildcard mask over asset names.

    Examples:
        >>> DeletePattern("*.zip").matches("A.ZIP")
        True
        >>> DeletePattern("*.zip").matches("a.zip.bak")
        False
    """

    def __init__(self, mask: str):
        self.mask = mask
        self._regex = re.compile(
            wildcard_to_regex(mask), re.IGNORECASE | re.DOTALL
        )

    def matches(self, name: str) -> bool:
        """Check whether the whole asset name matches the mask."""
        return self._regex.fullmatch(name) is not None

    def __repr__(self) -> str:
        return f"DeletePattern({self.mask!r})"


def compile_patterns(masks: Iterable[str]) -> list[DeletePattern]:
    """Compile masks, skipping blank entries.

    Args:
        masks: Wildcard masks (one per line in multi-line input)

    Returns:
        List of compiled patterns
    """
    return [DeletePattern(mask.strip()) for mask in masks if mask and mask.strip()]


def matches_any(patterns: Iterable[DeletePattern], name: str) -> bool:
    """Check whether any pattern matches the asset name."""
    return any(pattern.matches(name) for pattern in patterns)

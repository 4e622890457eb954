"""Parsing of string inputs (CLI options and GitHub Actions inputs)."""

from typing import Optional

from .exceptions import ReleaseConfigError

TRUE_VALUES = ("true", "yes", "y", "1")
FALSE_VALUES = ("false", "no", "n", "0")


def parse_bool(value: Optional[str], name: str, default: bool) -> bool:
    """Parse a boolean input.

    Args:
        value: Raw input value
        name: Input name used in error messages
        default: Value returned for empty input

    Returns:
        Parsed boolean

    Raises:
        ReleaseConfigError: If the value is not a recognized boolean

    Examples:
        >>> parse_bool("Yes", "overwrite", False)
        True
        >>> parse_bool("", "overwrite", True)
        True
    """
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ReleaseConfigError(f"invalid `{name}` input")


def parse_int(
    value: Optional[str],
    name: str,
    default: Optional[int] = None,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> Optional[int]:
    """Parse an integer input with optional bounds.

    Raises:
        ReleaseConfigError: If the value is not an integer or out of range
    """
    if value is None or not value.strip():
        return default
    try:
        number = int(value.strip(), 10)
    except ValueError as e:
        raise ReleaseConfigError(f"invalid `{name}` input") from e
    if (minimum is not None and number < minimum) or (
        maximum is not None and number > maximum
    ):
        raise ReleaseConfigError(f"input `{name}` is out of range")
    return number


def parse_repo(
    value: Optional[str], default_repo: Optional[str] = None, name: str = "repo"
) -> tuple[str, str]:
    """Parse an ``owner/repo`` input.

    Args:
        value: Raw input value
        default_repo: ``owner/repo`` used when the input is empty, usually
            the GITHUB_REPOSITORY of the workflow run
        name: Input name used in error messages

    Returns:
        Tuple of (owner, repo)

    Raises:
        ReleaseConfigError: If the value is malformed or nothing is available
    """
    raw = value.strip() if value else ""
    if not raw:
        if not default_repo:
            raise ReleaseConfigError(
                f"`{name}` input missing and GITHUB_REPOSITORY is not set"
            )
        raw = default_repo

    items = raw.split("/")
    if len(items) != 2:
        raise ReleaseConfigError(f"invalid `{name}` input")
    owner, repo = items[0].strip(), items[1].strip()
    if not owner or not repo:
        raise ReleaseConfigError(f"invalid `{name}` input")
    return owner, repo


def parse_multiline(value: Optional[str]) -> list[str]:
    """Split a multi-line input into stripped, non-empty lines."""
    if not value:
        return []
    return [line.strip() for line in value.splitlines() if line.strip()]

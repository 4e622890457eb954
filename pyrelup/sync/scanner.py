"""Local file resolution for release uploads."""

import glob
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from ..exceptions import ReleaseConfigError, ReleaseFileNotFoundError
from ..utils import guess_mime_type, is_glob_pattern

logger = logging.getLogger(__name__)


@dataclass
class LocalFile:
    """Represents a local file to be uploaded as a release asset."""

    path: Path
    """Path to the file as given or expanded"""

    asset_name: str
    """Asset name requested on upload (the file's basename)"""

    size: int
    """File size in bytes"""

    mime_type: str
    """Content type sent with the upload"""

    @classmethod
    def from_path(cls, file_path: Path) -> "LocalFile":
        """Create LocalFile from a path.

        Args:
            file_path: Path to an existing file

        Returns:
            LocalFile instance

        Raises:
            ReleaseFileNotFoundError: If the path is not an existing file
        """
        if not file_path.is_file():
            raise ReleaseFileNotFoundError(str(file_path))

        return cls(
            path=file_path,
            asset_name=file_path.name,
            size=file_path.stat().st_size,
            mime_type=guess_mime_type(file_path.name),
        )

    def read_bytes(self) -> bytes:
        """Read the file content from disk."""
        return self.path.read_bytes()


def expand_file_spec(spec: str) -> list[Path]:
    """Expand one file spec into paths.

    Specs without wildcards are returned unchanged. Glob specs are expanded
    recursively (``**`` is supported), sorted, and limited to regular files.

    Args:
        spec: Literal path or glob pattern

    Returns:
        List of paths (possibly empty for globs)
    """
    if not is_glob_pattern(spec):
        return [Path(spec)]

    matches = sorted(glob.glob(spec, recursive=True))
    paths = [Path(m) for m in matches if Path(m).is_file()]
    logger.debug(f"Glob {spec!r} matched {len(paths)} file(s)")
    return paths


def resolve_files(specs: Iterable[str]) -> list[LocalFile]:
    """Resolve file specs into an ordered list of local files.

    Order follows the specs; files matched by a glob are sorted by path.

    Args:
        specs: Literal paths and/or glob patterns

    Returns:
        List of LocalFile instances

    Raises:
        ReleaseConfigError: If no spec is given or nothing matched
        ReleaseFileNotFoundError: If a literal path does not exist
    """
    specs = [s.strip() for s in specs if s and s.strip()]
    if not specs:
        raise ReleaseConfigError("invalid `files` input")

    files: list[LocalFile] = []
    for spec in specs:
        for path in expand_file_spec(spec):
            files.append(LocalFile.from_path(path))

    if not files:
        raise ReleaseConfigError("No files to process")
    return files

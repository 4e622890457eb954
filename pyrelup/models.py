"""Data models for GitHub release API responses."""

from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import ReleaseConfigError
from .utils import format_size, normalize_asset_name


@dataclass(frozen=True)
class ReleaseTarget:
    """Identifies the release whose assets are being reconciled."""

    owner: str
    repo: str
    release_id: int

    def __post_init__(self) -> None:
        if not self.owner or not self.repo:
            raise ReleaseConfigError("invalid `repo` input")
        if self.release_id < 1:
            raise ReleaseConfigError("invalid `release_id` input")

    @property
    def full_name(self) -> str:
        """Repository in ``owner/repo`` form."""
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        return f"{self.full_name}#{self.release_id}"


@dataclass
class RemoteAsset:
    """An asset currently attached to a release."""

    id: int
    name: str
    size: int = 0
    content_type: Optional[str] = None
    browser_download_url: Optional[str] = None

    @property
    def normalized_name(self) -> str:
        """Name after the server-side sanitization rules are applied."""
        return normalize_asset_name(self.name)

    @property
    def size_formatted(self) -> str:
        return format_size(self.size)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RemoteAsset":
        """Create a RemoteAsset from an API asset object."""
        return cls(
            id=int(data["id"]),
            name=str(data.get("name", "")),
            size=int(data.get("size") or 0),
            content_type=data.get("content_type"),
            browser_download_url=data.get("browser_download_url"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "size": self.size,
            "content_type": self.content_type,
            "url": self.browser_download_url,
        }


@dataclass(frozen=True)
class UploadOutcome:
    """Result of one successfully uploaded file."""

    file_id: int
    download_url: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UploadOutcome":
        """Create an UploadOutcome from an upload response."""
        return cls(
            file_id=int(data["id"]),
            download_url=str(data.get("browser_download_url") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.file_id, "url": self.download_url}

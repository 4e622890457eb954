"""PyRelUp - synchronize local files with the assets of a GitHub release."""

from .api import GitHubClient
from .exceptions import (
    ReleaseAPIError,
    ReleaseAuthenticationError,
    ReleaseConfigError,
    ReleaseConflictError,
    ReleaseFileNotFoundError,
    ReleaseInvalidResponseError,
    ReleaseNetworkError,
    ReleaseNotFoundError,
    ReleasePermissionError,
    ReleaseRateLimitError,
    ReleaseUploadError,
)
from .models import ReleaseTarget, RemoteAsset, UploadOutcome
from .patterns import DeletePattern, compile_patterns
from .utils import normalize_asset_name

__all__ = [
    "GitHubClient",
    "ReleaseAPIError",
    "ReleaseAuthenticationError",
    "ReleaseConfigError",
    "ReleaseConflictError",
    "ReleaseFileNotFoundError",
    "ReleaseInvalidResponseError",
    "ReleaseNetworkError",
    "ReleaseNotFoundError",
    "ReleasePermissionError",
    "ReleaseRateLimitError",
    "ReleaseUploadError",
    "ReleaseTarget",
    "RemoteAsset",
    "UploadOutcome",
    "DeletePattern",
    "compile_patterns",
    "normalize_asset_name",
]

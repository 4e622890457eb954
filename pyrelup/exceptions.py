"""Custom exceptions for pyrelup."""

from typing import Optional


class ReleaseAPIError(Exception):
    """Base exception for release API errors.

    Attributes:
        status_code: HTTP status code returned by the server, or None when the
            failure happened before a response was received
    """

    status_code: Optional[int] = None

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class ReleaseConfigError(ReleaseAPIError):
    """Raised when inputs or configuration are missing or invalid."""


class ReleaseNetworkError(ReleaseAPIError):
    """Raised when a request fails before the server answered."""


class ReleaseInvalidResponseError(ReleaseAPIError):
    """Raised when the server response cannot be interpreted."""


class ReleaseAuthenticationError(ReleaseAPIError):
    """Raised when the token is missing, invalid or expired."""

    status_code = 401


class ReleasePermissionError(ReleaseAPIError):
    """Raised when the token lacks access to the repository."""

    status_code = 403


class ReleaseNotFoundError(ReleaseAPIError):
    """Raised when a release or asset does not exist."""

    status_code = 404


class ReleaseConflictError(ReleaseAPIError):
    """Raised when the server rejects a request as unprocessable.

    For uploads this almost always means an asset with the same name is
    already attached to the release.
    """

    status_code = 422


class ReleaseRateLimitError(ReleaseAPIError):
    """Raised when the API rate limit is exceeded."""

    status_code = 429


class ReleaseUploadError(ReleaseAPIError):
    """Raised when an upload response is unusable."""


class ReleaseFileNotFoundError(ReleaseAPIError):
    """Raised when a local file to upload does not exist."""

    def __init__(self, file_path: str):
        super().__init__(f"File not found: {file_path}")
        self.file_path = file_path

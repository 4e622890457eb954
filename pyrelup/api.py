"""API client for the GitHub releases REST API."""

from __future__ import annotations

import random
import time
from typing import Any
from urllib.parse import quote

import httpx

from .config import config, derive_upload_url
from .exceptions import (
    ReleaseAPIError,
    ReleaseAuthenticationError,
    ReleaseConfigError,
    ReleaseConflictError,
    ReleaseInvalidResponseError,
    ReleaseNetworkError,
    ReleaseNotFoundError,
    ReleasePermissionError,
    ReleaseRateLimitError,
    ReleaseUploadError,
)

API_VERSION = "2022-11-28"
USER_AGENT = "pyrelup"


class GitHubClient:
    """Client for the release endpoints of the GitHub REST API."""

    def __init__(
        self,
        token: str | None = None,
        api_url: str | None = None,
        upload_url: str | None = None,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize GitHub API client.

        Args:
            token: Optional token (uses config if not provided)
            api_url: Optional REST API URL (uses config if not provided)
            upload_url: Optional upload host URL (derived from api_url if
                not provided)
            max_retries: Maximum number of retry attempts for reads and
                deletes (default: 3)
            retry_delay: Initial delay between retries in seconds (default: 1.0)
            timeout: Request timeout in seconds (default: 30.0)
            transport: Optional httpx transport, mainly for testing
        """
        self.token = token or config.token
        self.api_url = (api_url or config.api_url).rstrip("/")
        if upload_url:
            self.upload_url = upload_url.rstrip("/")
        elif api_url:
            self.upload_url = derive_upload_url(self.api_url)
        else:
            self.upload_url = config.upload_url
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self.transport = transport

        if not self.token:
            raise ReleaseConfigError(
                "GitHub token not configured. "
                "Please set GITHUB_TOKEN environment variable."
            )

        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": "application/vnd.github+json",
                    "X-GitHub-Api-Version": API_VERSION,
                    "User-Agent": USER_AGENT,
                },
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self.transport,
            )
        return self._client

    def close(self) -> None:
        """Close the client and release connections."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def _should_retry(self, exception: Exception, attempt: int) -> bool:
        """Determine if a request should be retried.

        Args:
            exception: The exception that occurred
            attempt: Current attempt number (0-based)

        Returns:
            True if the request should be retried, False otherwise
        """
        if attempt >= self.max_retries:
            return False

        if isinstance(exception, (ReleaseNetworkError, ReleaseRateLimitError)):
            return True

        status_code = getattr(exception, "status_code", None)
        return status_code is not None and 500 <= status_code < 600

    def _calculate_retry_delay(self, attempt: int) -> float:
        """Calculate delay before next retry using exponential backoff.

        Args:
            attempt: Current attempt number (0-based)

        Returns:
            Delay in seconds
        """
        base_delay = self.retry_delay * (2**attempt)
        # +/- 25% jitter
        jitter = base_delay * 0.25 * (2 * random.random() - 1)
        return base_delay + jitter

    @staticmethod
    def _extract_error_message(response: httpx.Response) -> str | None:
        """Pull a human-readable message out of a GitHub error body."""
        try:
            if not response.content:
                return None
            error_data = response.json()
        except ValueError:
            return None
        if not isinstance(error_data, dict):
            return None

        message = error_data.get("message")
        details = [
            item.get("code") or item.get("message")
            for item in error_data.get("errors") or []
            if isinstance(item, dict)
        ]
        details = [d for d in details if d]
        if message and details:
            return f"{message} ({', '.join(details)})"
        return message or None

    def _handle_http_error(
        self, e: httpx.HTTPStatusError, attempt: int
    ) -> tuple[Exception, bool]:
        """Handle HTTP errors and determine if retry should occur.

        Args:
            e: The HTTP error exception
            attempt: Current attempt number

        Returns:
            Tuple of (exception to raise, should_retry)
        """
        response = e.response
        status_code = response.status_code
        detail = self._extract_error_message(response)

        if status_code == 401:
            raise ReleaseAuthenticationError(
                "Bad credentials - check your token"
            ) from e
        elif status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0":
            return (
                ReleaseRateLimitError("Rate limit exceeded - please try again later"),
                attempt < self.max_retries,
            )
        elif status_code == 403:
            raise ReleasePermissionError(
                detail or "Access forbidden - check your token permissions"
            ) from e
        elif status_code == 404:
            raise ReleaseNotFoundError(detail or "Not Found") from e
        elif status_code == 422:
            raise ReleaseConflictError(detail or "Validation Failed") from e
        elif status_code == 429:
            return (
                ReleaseRateLimitError("Rate limit exceeded - please try again later"),
                attempt < self.max_retries,
            )

        error_msg = f"API request failed with status {status_code}"
        if detail:
            error_msg = f"{error_msg}: {detail}"
        error = ReleaseAPIError(error_msg, status_code=status_code)
        should_retry = 500 <= status_code < 600 and attempt < self.max_retries
        return (error, should_retry)

    def _url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self.api_url}/{endpoint.lstrip('/')}"

    def _send(
        self, method: str, endpoint: str, retry: bool = True, **kwargs: Any
    ) -> httpx.Response:
        """Send a request, retrying transient failures when allowed.

        Args:
            method: HTTP method
            endpoint: API endpoint path or absolute URL
            retry: Whether network errors, 429 and 5xx are retried here
            **kwargs: Additional arguments passed to httpx

        Returns:
            The successful response

        Raises:
            ReleaseAPIError: If the request fails after all retries
        """
        url = self._url(endpoint)
        client = self._get_client()
        last_exception: Exception | None = None

        for attempt in range(self.max_retries + 1 if retry else 1):
            try:
                response = client.request(method, url, **kwargs)
                response.raise_for_status()
                return response

            except httpx.HTTPStatusError as e:
                error, should_retry = self._handle_http_error(e, attempt)
                last_exception = error

                if retry and should_retry:
                    retry_after = e.response.headers.get("Retry-After")
                    if isinstance(error, ReleaseRateLimitError) and (
                        retry_after and retry_after.isdigit()
                    ):
                        delay = float(retry_after)
                    else:
                        delay = self._calculate_retry_delay(attempt)
                    time.sleep(delay)
                    continue
                raise error from e
            except httpx.RequestError as e:
                error = ReleaseNetworkError(f"Network error: {e}")
                last_exception = error
                if retry and self._should_retry(error, attempt):
                    time.sleep(self._calculate_retry_delay(attempt))
                    continue
                raise error from e

        if last_exception:
            raise last_exception
        raise ReleaseAPIError("Request failed after all retry attempts")

    @staticmethod
    def _decode_json(response: httpx.Response) -> Any:
        """Decode a JSON response body, returning {} for empty bodies."""
        if not response.content:
            return {}

        content_type = response.headers.get("Content-Type", "")
        if "json" not in content_type:
            raise ReleaseInvalidResponseError(
                f"Unexpected response type: {content_type or 'unknown'}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise ReleaseInvalidResponseError(
                "Invalid JSON response from server"
            ) from e

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """Make an API request with retry logic and return decoded JSON."""
        return self._decode_json(self._send(method, endpoint, **kwargs))

    # =========================
    # Release Operations
    # =========================

    def get_release(self, owner: str, repo: str, release_id: int) -> Any:
        """Get a release by its numeric ID."""
        return self._request("GET", f"/repos/{owner}/{repo}/releases/{release_id}")

    def get_release_by_tag(self, owner: str, repo: str, tag: str) -> Any:
        """Get the release attached to a tag.

        Args:
            owner: Repository owner
            repo: Repository name
            tag: Tag name

        Returns:
            Release object (dict) with at least an 'id' key

        Raises:
            ReleaseNotFoundError: If no release exists for the tag
        """
        tag_path = quote(tag, safe="")
        return self._request("GET", f"/repos/{owner}/{repo}/releases/tags/{tag_path}")

    # =========================
    # Asset Operations
    # =========================

    def list_release_assets(
        self,
        owner: str,
        repo: str,
        release_id: int,
        page: int = 1,
        per_page: int = 100,
    ) -> tuple[list[dict[str, Any]], bool]:
        """Fetch one page of release assets.

        Args:
            owner: Repository owner
            repo: Repository name
            release_id: Release ID
            page: Page number (1-based)
            per_page: Number of assets per page (max 100)

        Returns:
            Tuple of (assets on this page, whether more pages follow)
        """
        response = self._send(
            "GET",
            f"/repos/{owner}/{repo}/releases/{release_id}/assets",
            params={"page": page, "per_page": per_page},
        )
        data = self._decode_json(response)
        if data == {}:
            data = []
        if not isinstance(data, list):
            raise ReleaseInvalidResponseError("Expected a list of release assets")

        if "link" in response.headers:
            has_more = "next" in response.links
        else:
            # No Link header, assume a full page may be followed by another
            has_more = len(data) >= per_page
        return data, has_more

    def delete_release_asset(self, owner: str, repo: str, asset_id: int) -> Any:
        """Delete a release asset.

        Raises:
            ReleaseNotFoundError: If the asset does not exist
        """
        return self._request(
            "DELETE", f"/repos/{owner}/{repo}/releases/assets/{asset_id}"
        )

    def upload_release_asset(
        self,
        owner: str,
        repo: str,
        release_id: int,
        name: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        content_length: int | None = None,
    ) -> Any:
        """Upload a release asset.

        The upload is attempted exactly once; callers decide how to react to
        conflicts and server errors.

        Args:
            owner: Repository owner
            repo: Repository name
            release_id: Release ID
            name: Asset file name
            data: Asset content
            content_type: MIME type of the content
            content_length: Declared content length (defaults to len(data))

        Returns:
            Asset object (dict) with 'id' and 'browser_download_url' keys

        Raises:
            ReleaseConflictError: If an asset with the same name exists
            ReleaseUploadError: If the response lacks the asset ID
        """
        if content_length is None:
            content_length = len(data)

        result = self._request(
            "POST",
            f"{self.upload_url}/repos/{owner}/{repo}/releases/{release_id}/assets",
            retry=False,
            params={"name": name},
            content=data,
            headers={
                "Content-Type": content_type,
                "Content-Length": str(content_length),
            },
        )
        if not isinstance(result, dict) or not result.get("id"):
            raise ReleaseUploadError(f"Upload response for '{name}' missing asset ID")
        return result

    # =========================
    # User Operations
    # =========================

    def get_authenticated_user(self) -> Any:
        """Get the user the token belongs to."""
        return self._request("GET", "/user")

"""Configuration management for pyrelup.

Values come from the environment first (the variables GitHub Actions
exports to every step), then from ``~/.config/pyrelup/config``.
"""

import os
from pathlib import Path
from typing import Optional

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_UPLOAD_URL = "https://uploads.github.com"


class Config:
    """Configuration manager for pyrelup."""

    def __init__(self) -> None:
        self.config_dir = Path.home() / ".config" / "pyrelup"
        self.config_file = self.config_dir / "config"
        self._file_values: Optional[dict[str, str]] = None

    def _load_file(self) -> dict[str, str]:
        """Read ``key=value`` pairs from the config file (cached)."""
        if self._file_values is None:
            values: dict[str, str] = {}
            if self.config_file.exists():
                with open(self.config_file, encoding="utf-8") as f:
                    for line in f:
                        line = line.strip()
                        if not line or line.startswith("#") or "=" not in line:
                            continue
                        key, value = line.split("=", 1)
                        values[key.strip().lower()] = value.strip()
            self._file_values = values
        return self._file_values

    @property
    def token(self) -> Optional[str]:
        """GitHub token from GITHUB_TOKEN, GH_TOKEN or the config file."""
        return (
            os.environ.get("GITHUB_TOKEN")
            or os.environ.get("GH_TOKEN")
            or self._load_file().get("token")
            or None
        )

    @property
    def api_url(self) -> str:
        """REST API base URL without trailing slash."""
        url = os.environ.get("GITHUB_API_URL") or self._load_file().get("api_url")
        return (url or DEFAULT_API_URL).rstrip("/")

    @property
    def upload_url(self) -> str:
        """Base URL of the asset upload host."""
        url = os.environ.get("GITHUB_UPLOAD_URL") or self._load_file().get(
            "upload_url"
        )
        if url:
            return url.rstrip("/")
        return derive_upload_url(self.api_url)

    @property
    def repository(self) -> Optional[str]:
        """Default ``owner/repo`` of the current workflow run."""
        return os.environ.get("GITHUB_REPOSITORY") or None

    @property
    def event_path(self) -> Optional[Path]:
        """Path of the JSON payload of the triggering workflow event."""
        value = os.environ.get("GITHUB_EVENT_PATH")
        return Path(value) if value else None

    @property
    def github_output(self) -> Optional[Path]:
        """File that collects step outputs in GitHub Actions."""
        value = os.environ.get("GITHUB_OUTPUT")
        return Path(value) if value else None

    def is_configured(self) -> bool:
        """Check whether a token is available."""
        return self.token is not None

    def save_token(self, token: str) -> None:
        """Store the token in the config file, keeping other keys.

        Args:
            token: GitHub personal access token
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        values = dict(self._load_file())
        values["token"] = token

        with open(self.config_file, "w", encoding="utf-8") as f:
            for key, value in values.items():
                f.write(f"{key}={value}\n")

        # Only the owner may read the token
        self.config_file.chmod(0o600)
        self._file_values = values

    def get_config_path(self) -> Path:
        """Get the path to the config file."""
        return self.config_file


def derive_upload_url(api_url: str) -> str:
    """Derive the upload host from a REST API URL.

    Examples:
        >>> derive_upload_url("https://api.github.com")
        'https://uploads.github.com'
        >>> derive_upload_url("https://ghe.example.com/api/v3")
        'https://ghe.example.com/api/uploads'
    """
    api_url = api_url.rstrip("/")
    if api_url == DEFAULT_API_URL:
        return DEFAULT_UPLOAD_URL
    if api_url.endswith("/api/v3"):
        return api_url[: -len("/api/v3")] + "/api/uploads"
    return api_url


config = Config()

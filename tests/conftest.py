"""Shared fixtures for pyrelup tests."""

from pathlib import Path

import pytest

from pyrelup.exceptions import ReleaseConflictError, ReleaseNotFoundError
from pyrelup.models import ReleaseTarget
from pyrelup.utils import normalize_asset_name


class FakeReleaseAPI:
    """In-memory stand-in for the release endpoints of GitHubClient.

    Stores uploaded names the way GitHub does (normalized) and rejects
    uploads whose stored name already exists with a 422.
    """

    def __init__(self, assets=None):
        self.assets: dict[int, str] = {}
        self.next_id = 1000
        self.calls: list[tuple] = []
        self.upload_failures: list[Exception] = []
        for name in assets or []:
            self.add_asset(name)

    def add_asset(self, name: str) -> int:
        asset_id = self.next_id
        self.next_id += 1
        self.assets[asset_id] = name
        return asset_id

    def names(self) -> list[str]:
        return sorted(self.assets.values())

    def get_release_by_tag(self, owner, repo, tag):
        self.calls.append(("tag", tag))
        return {"id": 42, "tag_name": tag}

    def close(self):
        pass

    def list_release_assets(self, owner, repo, release_id, page=1, per_page=100):
        self.calls.append(("list", page))
        items = [
            {"id": asset_id, "name": name, "size": 1}
            for asset_id, name in sorted(self.assets.items())
        ]
        start = (page - 1) * per_page
        return items[start : start + per_page], start + per_page < len(items)

    def delete_release_asset(self, owner, repo, asset_id):
        self.calls.append(("delete", asset_id))
        if asset_id not in self.assets:
            raise ReleaseNotFoundError("Not Found")
        del self.assets[asset_id]
        return {}

    def upload_release_asset(
        self,
        owner,
        repo,
        release_id,
        name,
        data,
        content_type="application/octet-stream",
        content_length=None,
    ):
        self.calls.append(("upload", name))
        if self.upload_failures:
            raise self.upload_failures.pop(0)
        stored = normalize_asset_name(name)
        if stored in self.assets.values():
            raise ReleaseConflictError("Validation Failed (already_exists)")
        asset_id = self.add_asset(stored)
        return {
            "id": asset_id,
            "name": stored,
            "browser_download_url": f"https://example.com/download/{stored}",
        }


@pytest.fixture
def fake_api():
    """Provide an empty fake release API."""
    return FakeReleaseAPI()


@pytest.fixture
def target():
    """Provide a release target."""
    return ReleaseTarget(owner="octo", repo="hello", release_id=42)


@pytest.fixture
def make_file(tmp_path):
    """Create a file in a temporary directory and return its path."""

    def _make(name: str, content: bytes = b"content") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make

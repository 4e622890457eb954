"""Manager for enumerating release assets with automatic pagination."""

import logging
from collections.abc import Generator
from typing import Optional

from .api import GitHubClient
from .models import ReleaseTarget, RemoteAsset
from .utils import DEFAULT_PER_PAGE

logger = logging.getLogger(__name__)


class ReleaseAssetsManager:
    """Enumerates the assets of a release page by page.

    Nothing is cached: every call starts again from the first page, so each
    caller sees the assets as they are on the server right now.
    """

    def __init__(self, client: GitHubClient, per_page: int = DEFAULT_PER_PAGE):
        """Initialize the assets manager.

        Args:
            client: GitHub API client
            per_page: Number of assets per page (default: 100)
        """
        self.client = client
        self.per_page = per_page

    def iter_assets(self, target: ReleaseTarget) -> Generator[RemoteAsset, None, None]:
        """Yield every asset of the release, fetching pages lazily.

        API errors are not caught; they propagate to the caller.

        Args:
            target: Release to enumerate

        Yields:
            RemoteAsset instances in server order
        """
        page = 1
        while True:
            logger.debug(f"Listing assets of {target}, page {page}")
            items, has_more = self.client.list_release_assets(
                owner=target.owner,
                repo=target.repo,
                release_id=target.release_id,
                page=page,
                per_page=self.per_page,
            )
            for item in items:
                yield RemoteAsset.from_dict(item)

            if not has_more or not items:
                break
            page += 1

    def get_all(self, target: ReleaseTarget) -> list[RemoteAsset]:
        """Get all assets of the release.

        Args:
            target: Release to enumerate

        Returns:
            List of all assets
        """
        return list(self.iter_assets(target))

    def find_by_name(self, target: ReleaseTarget, name: str) -> Optional[RemoteAsset]:
        """Find the asset whose stored name equals ``name``.

        Stops fetching pages as soon as a match is found.

        Args:
            target: Release to search
            name: Exact stored asset name

        Returns:
            The matching asset, or None
        """
        for asset in self.iter_assets(target):
            if asset.name == name:
                return asset
        return None

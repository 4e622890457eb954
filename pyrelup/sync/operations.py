"""Release asset operations shared by the deletion and upload phases."""

import logging
from typing import Any

from ..api import GitHubClient
from ..exceptions import ReleaseNotFoundError
from ..models import ReleaseTarget, RemoteAsset
from .scanner import LocalFile

logger = logging.getLogger(__name__)


class ReleaseOperations:
    """Unified upload/delete operations against one GitHub client."""

    def __init__(self, client: GitHubClient):
        """Initialize release operations.

        Args:
            client: GitHub API client
        """
        self.client = client

    def upload_file(self, target: ReleaseTarget, local_file: LocalFile) -> Any:
        """Upload a local file as a release asset.

        The file content is read from disk on every call.

        Args:
            target: Release receiving the asset
            local_file: Local file to upload

        Returns:
            Asset object returned by the API
        """
        return self.client.upload_release_asset(
            owner=target.owner,
            repo=target.repo,
            release_id=target.release_id,
            name=local_file.asset_name,
            data=local_file.read_bytes(),
            content_type=local_file.mime_type,
            content_length=local_file.size,
        )

    def delete_asset(self, target: ReleaseTarget, asset: RemoteAsset) -> bool:
        """Delete a release asset, treating an already-deleted asset as done.

        Args:
            target: Release owning the asset
            asset: Asset to delete

        Returns:
            True if the asset was deleted, False if it was already gone

        Raises:
            ReleaseAPIError: On any failure other than "not found"
        """
        try:
            self.client.delete_release_asset(
                owner=target.owner,
                repo=target.repo,
                asset_id=asset.id,
            )
        except ReleaseNotFoundError:
            logger.debug(f"Asset {asset.name} ({asset.id}) was already deleted")
            return False

        logger.info(f"Deleted asset {asset.name} ({asset.id})")
        return True

"""Deletion of release assets matching wildcard masks."""

import logging
from collections.abc import Iterable

from ..assets_manager import ReleaseAssetsManager
from ..models import ReleaseTarget, RemoteAsset
from ..patterns import DeletePattern, matches_any
from .operations import ReleaseOperations

logger = logging.getLogger(__name__)


class DeletionPlanner:
    """Decides which existing assets to remove and removes them.

    The asset list is fetched completely before the first deletion so that
    deleting does not shift the pages still to be read.
    """

    def __init__(
        self,
        assets_manager: ReleaseAssetsManager,
        operations: ReleaseOperations,
        patterns: Iterable[DeletePattern],
    ):
        self.assets_manager = assets_manager
        self.operations = operations
        self.patterns = list(patterns)

    def plan(self, target: ReleaseTarget) -> list[RemoteAsset]:
        """List the assets whose name matches any configured pattern."""
        if not self.patterns:
            return []

        return [
            asset
            for asset in self.assets_manager.iter_assets(target)
            if matches_any(self.patterns, asset.name)
        ]

    def execute(
        self, target: ReleaseTarget, assets: Iterable[RemoteAsset]
    ) -> list[RemoteAsset]:
        """Delete the given assets one after the other.

        Returns:
            The assets actually deleted (already-gone ones excluded)
        """
        return [
            asset for asset in assets if self.operations.delete_asset(target, asset)
        ]

    def run(self, target: ReleaseTarget) -> list[RemoteAsset]:
        """Plan and execute the deletion phase.

        Returns:
            The assets actually deleted
        """
        planned = self.plan(target)
        if not planned:
            return []
        logger.info(f"Deleting {len(planned)} asset(s) matching delete masks")
        return self.execute(target, planned)

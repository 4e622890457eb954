"""Core sync engine for reconciling local files with release assets."""

import logging
from collections.abc import Iterable, Sequence
from typing import Optional

from rich.progress import Progress, SpinnerColumn, TextColumn

from ..api import GitHubClient
from ..assets_manager import ReleaseAssetsManager
from ..models import ReleaseTarget, RemoteAsset
from ..output import OutputFormatter
from ..patterns import compile_patterns
from ..utils import DEFAULT_PER_PAGE, DEFAULT_SERVER_RETRIES, format_size
from .operations import ReleaseOperations
from .planner import DeletionPlanner
from .reconciler import UploadReconciler
from .results import UploadResults
from .scanner import LocalFile

logger = logging.getLogger(__name__)


class ReleaseSyncEngine:
    """Deletes masked assets, then uploads files one by one."""

    def __init__(
        self,
        client: GitHubClient,
        output: Optional[OutputFormatter] = None,
        per_page: int = DEFAULT_PER_PAGE,
        server_retries: int = DEFAULT_SERVER_RETRIES,
    ):
        """Initialize sync engine.

        Args:
            client: GitHub API client
            output: Output formatter for displaying progress/status
            per_page: Page size used when listing assets
            server_retries: Retries per file after a 5xx or statusless failure
        """
        self.client = client
        self.output = output or OutputFormatter()
        self.operations = ReleaseOperations(client)
        self.assets_manager = ReleaseAssetsManager(client, per_page=per_page)
        self.server_retries = server_retries

    def sync(
        self,
        target: ReleaseTarget,
        files: Sequence[LocalFile],
        delete_masks: Iterable[str] = (),
        overwrite: bool = True,
    ) -> UploadResults:
        """Reconcile the release assets with the given files.

        Any unrecovered error aborts the run; no partial results are
        returned.

        Args:
            target: Release to update
            files: Files to upload, in output order
            delete_masks: Wildcard masks of assets to delete before uploading
            overwrite: Whether same-named assets may be replaced

        Returns:
            One outcome per file, in input order

        Examples:
            >>> engine = ReleaseSyncEngine(client)
            >>> target = ReleaseTarget("octo", "hello", 42)
            >>> results = engine.sync(target, resolve_files(["dist/*"]))
            >>> print(results.to_json())
        """
        self.delete_matching(target, delete_masks)
        return self.upload_files(target, files, overwrite=overwrite)

    def delete_matching(
        self, target: ReleaseTarget, delete_masks: Iterable[str]
    ) -> list[RemoteAsset]:
        """Run the deletion phase alone.

        Returns:
            The assets that were actually deleted
        """
        patterns = compile_patterns(delete_masks)
        if not patterns:
            return []

        planner = DeletionPlanner(self.assets_manager, self.operations, patterns)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            disable=self.output.quiet or self.output.json_output,
        ) as progress:
            progress.add_task("Deleting matching release assets...", total=None)
            deleted = planner.run(target)

        if not self.output.quiet:
            for asset in deleted:
                self.output.info(f"Deleted {asset.name}")
        logger.info(f"Deletion phase removed {len(deleted)} asset(s) from {target}")
        return deleted

    def upload_files(
        self,
        target: ReleaseTarget,
        files: Sequence[LocalFile],
        overwrite: bool = True,
    ) -> UploadResults:
        """Run the upload phase.

        Args:
            target: Release receiving the assets
            files: Files to upload, in order
            overwrite: Whether same-named assets may be replaced

        Returns:
            Accumulated outcomes
        """
        reconciler = UploadReconciler(
            self.operations,
            self.assets_manager,
            overwrite=overwrite,
            server_retries=self.server_retries,
            message_callback=None if self.output.quiet else self.output.warning,
        )
        results = UploadResults()

        for local_file in files:
            if not self.output.quiet:
                self.output.info(
                    f"Uploading {local_file.path} ({format_size(local_file.size)})..."
                )
            outcome = reconciler.reconcile(target, local_file)
            results.add(outcome)
            logger.info(f"Uploaded {local_file.asset_name} as asset {outcome.file_id}")

        return results

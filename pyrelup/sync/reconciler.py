"""Per-file upload state machine with conflict resolution and retry.

Each file moves through the states below until it reaches SUCCESS or
FAILED::

    UPLOADING --ok--> SUCCESS
    UPLOADING --422--> CONFLICT --asset found--> RESOLVING_CONFLICT --> UPLOADING
                                --not found, first lookup--> UPLOADING
                                --not found--> FAILED
    UPLOADING --5xx / no status--> TRANSIENT_ERROR --> UPLOADING
    UPLOADING --anything else--> FAILED

A file gets at most one conflict deletion, two conflict lookups and
``server_retries`` transient retries, so the loop always terminates.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from ..assets_manager import ReleaseAssetsManager
from ..exceptions import ReleaseAPIError
from ..models import ReleaseTarget, RemoteAsset, UploadOutcome
from ..utils import DEFAULT_SERVER_RETRIES, normalize_asset_name
from .operations import ReleaseOperations
from .scanner import LocalFile

logger = logging.getLogger(__name__)

CONFLICT_STATUS = 422
MAX_CONFLICT_LOOKUPS = 2


class UploadState(Enum):
    """States of a single file upload."""

    UPLOADING = "uploading"
    SUCCESS = "success"
    CONFLICT = "conflict"
    RESOLVING_CONFLICT = "resolving_conflict"
    TRANSIENT_ERROR = "transient_error"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (UploadState.SUCCESS, UploadState.FAILED)


@dataclass
class UploadAttempt:
    """Mutable bookkeeping for one file while it is being reconciled."""

    local_file: LocalFile
    server_retry_budget: int = DEFAULT_SERVER_RETRIES
    state: UploadState = UploadState.UPLOADING
    conflict_delete_attempted: bool = False
    conflict_lookups: int = 0
    uploads: int = 0
    conflicting_asset: Optional[RemoteAsset] = None
    conflict_error: Optional[Exception] = None
    error: Optional[Exception] = None
    response: Optional[dict[str, Any]] = None


def error_status(error: Exception) -> Optional[int]:
    """HTTP status carried by an error, or None for statusless failures."""
    status = getattr(error, "status_code", None)
    return status if isinstance(status, int) else None


class UploadReconciler:
    """Uploads files one at a time, replacing same-named assets if allowed."""

    def __init__(
        self,
        operations: ReleaseOperations,
        assets_manager: ReleaseAssetsManager,
        overwrite: bool = True,
        server_retries: int = DEFAULT_SERVER_RETRIES,
        message_callback: Optional[Callable[[str], None]] = None,
    ):
        """Initialize the reconciler.

        Args:
            operations: Upload/delete operations
            assets_manager: Asset lister used to find conflicting assets
            overwrite: Whether an existing asset with the same name may be
                deleted and replaced
            server_retries: Retries granted per file after a 5xx or
                statusless failure
            message_callback: Optional callback for user notifications about
                retries and replacements
        """
        self.operations = operations
        self.assets_manager = assets_manager
        self.overwrite = overwrite
        self.server_retries = server_retries
        self.message_callback = message_callback

        self._handlers: dict[
            UploadState, Callable[[ReleaseTarget, UploadAttempt], None]
        ] = {
            UploadState.UPLOADING: self._upload,
            UploadState.CONFLICT: self._lookup_conflict,
            UploadState.RESOLVING_CONFLICT: self._resolve_conflict,
            UploadState.TRANSIENT_ERROR: self._retry_transient,
        }

    def reconcile(self, target: ReleaseTarget, local_file: LocalFile) -> UploadOutcome:
        """Upload one file, resolving conflicts and transient failures.

        Args:
            target: Release receiving the asset
            local_file: File to upload

        Returns:
            Outcome with the new asset ID and download URL

        Raises:
            Exception: The error that made the upload fail
        """
        attempt = UploadAttempt(
            local_file=local_file, server_retry_budget=self.server_retries
        )

        while not attempt.state.is_terminal:
            previous = attempt.state
            self._handlers[attempt.state](target, attempt)
            logger.debug(
                f"{local_file.asset_name}: {previous.value} -> "
                f"{attempt.state.value} (upload {attempt.uploads})"
            )

        if attempt.state is UploadState.FAILED:
            assert attempt.error is not None
            raise attempt.error

        assert attempt.response is not None
        return UploadOutcome.from_dict(attempt.response)

    def _notify(self, message: str) -> None:
        logger.info(message)
        if self.message_callback:
            self.message_callback(message)

    def _upload(self, target: ReleaseTarget, attempt: UploadAttempt) -> None:
        attempt.uploads += 1
        try:
            attempt.response = self.operations.upload_file(target, attempt.local_file)
        except (ReleaseAPIError, OSError) as e:
            attempt.error = e
            attempt.state = self._classify(e, attempt)
            return
        attempt.state = UploadState.SUCCESS

    def _classify(self, error: Exception, attempt: UploadAttempt) -> UploadState:
        """Pick the state that follows a failed upload."""
        status = error_status(error)

        if status == CONFLICT_STATUS:
            if attempt.conflict_error is None:
                attempt.conflict_error = error
            if (
                self.overwrite
                and not attempt.conflict_delete_attempted
                and attempt.conflict_lookups < MAX_CONFLICT_LOOKUPS
            ):
                return UploadState.CONFLICT
            attempt.error = attempt.conflict_error
            return UploadState.FAILED

        if (status is None or status >= 500) and attempt.server_retry_budget > 0:
            return UploadState.TRANSIENT_ERROR

        return UploadState.FAILED

    def _lookup_conflict(self, target: ReleaseTarget, attempt: UploadAttempt) -> None:
        attempt.conflict_lookups += 1
        stored_name = normalize_asset_name(attempt.local_file.asset_name)
        existing = self.assets_manager.find_by_name(target, stored_name)

        if existing is not None:
            attempt.conflicting_asset = existing
            attempt.state = UploadState.RESOLVING_CONFLICT
        elif attempt.conflict_lookups == 1:
            # Gone between the rejected upload and the lookup
            logger.debug(f"Conflicting asset {stored_name} not found, retrying")
            attempt.state = UploadState.UPLOADING
        else:
            attempt.error = attempt.conflict_error
            attempt.state = UploadState.FAILED

    def _resolve_conflict(self, target: ReleaseTarget, attempt: UploadAttempt) -> None:
        asset = attempt.conflicting_asset
        assert asset is not None
        self._notify(f"Replacing existing asset {asset.name}")
        self.operations.delete_asset(target, asset)
        attempt.conflict_delete_attempted = True
        attempt.conflicting_asset = None
        attempt.state = UploadState.UPLOADING

    def _retry_transient(self, target: ReleaseTarget, attempt: UploadAttempt) -> None:
        attempt.server_retry_budget -= 1
        self._notify(
            f"Upload of {attempt.local_file.asset_name} failed: {attempt.error}. "
            "Retrying..."
        )
        attempt.state = UploadState.UPLOADING

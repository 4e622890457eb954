"""Sync engine for pyrelup - delete, upload and reconcile release assets."""

from .engine import ReleaseSyncEngine
from .operations import ReleaseOperations
from .planner import DeletionPlanner
from .reconciler import UploadAttempt, UploadReconciler, UploadState
from .results import UploadResults
from .scanner import LocalFile, expand_file_spec, resolve_files

__all__ = [
    "ReleaseSyncEngine",
    "ReleaseOperations",
    "DeletionPlanner",
    "UploadReconciler",
    "UploadAttempt",
    "UploadState",
    "UploadResults",
    "LocalFile",
    "expand_file_spec",
    "resolve_files",
]

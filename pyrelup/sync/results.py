"""Ordered collection of upload outcomes."""

import json
from collections.abc import Iterator
from typing import Any

from ..models import UploadOutcome


class UploadResults:
    """Append-only list of upload outcomes in processing order."""

    def __init__(self) -> None:
        self._outcomes: list[UploadOutcome] = []

    def add(self, outcome: UploadOutcome) -> None:
        self._outcomes.append(outcome)

    @property
    def outcomes(self) -> tuple[UploadOutcome, ...]:
        return tuple(self._outcomes)

    def to_list(self) -> list[dict[str, Any]]:
        """Serialize as ``[{"id": ..., "url": ...}, ...]``."""
        return [outcome.to_dict() for outcome in self._outcomes]

    def to_json(self) -> str:
        return json.dumps(self.to_list())

    def __len__(self) -> int:
        return len(self._outcomes)

    def __iter__(self) -> Iterator[UploadOutcome]:
        return iter(self._outcomes)

"""Resolution of the release a run operates on."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .api import GitHubClient
from .exceptions import ReleaseConfigError
from .utils import RELEASE_EVENT_ACTIONS

logger = logging.getLogger(__name__)


@dataclass
class EventContext:
    """The workflow event that triggered the run."""

    action: Optional[str] = None
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def release_id(self) -> Optional[int]:
        """ID of the release carried by a release event, if any."""
        if self.action not in RELEASE_EVENT_ACTIONS:
            return None
        release = self.payload.get("release")
        if not isinstance(release, dict) or not release.get("id"):
            return None
        return int(release["id"])

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "EventContext":
        return cls(action=payload.get("action"), payload=payload)

    @classmethod
    def from_file(cls, path: Path) -> "EventContext":
        """Load the event payload written by GitHub Actions.

        Args:
            path: Value of GITHUB_EVENT_PATH

        Returns:
            EventContext (empty if the file is missing)
        """
        if not path.exists():
            logger.debug(f"Event file {path} does not exist")
            return cls()
        try:
            with open(path, encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            raise ReleaseConfigError(f"Unable to read event payload: {e}") from e
        if not isinstance(payload, dict):
            return cls()
        return cls.from_payload(payload)


def resolve_release_id(
    client: GitHubClient,
    owner: str,
    repo: str,
    release_id: Optional[int] = None,
    tag: Optional[str] = None,
    event: Optional[EventContext] = None,
) -> int:
    """Resolve the release to operate on.

    An explicit ID wins, then a tag, then a release event.

    Args:
        client: GitHub API client (used for tag lookup only)
        owner: Repository owner
        repo: Repository name
        release_id: Explicit release ID
        tag: Tag whose release is used
        event: Triggering workflow event

    Returns:
        Positive release ID

    Raises:
        ReleaseConfigError: If no source yields an ID
        ReleaseNotFoundError: If the tag has no release
    """
    if release_id is not None:
        if release_id < 1:
            raise ReleaseConfigError("invalid `release_id` input")
        return release_id

    if tag:
        release = client.get_release_by_tag(owner, repo, tag)
        if not isinstance(release, dict) or not release.get("id"):
            raise ReleaseConfigError("Failed to retrieve release from tag")
        logger.debug(f"Tag {tag} resolved to release {release['id']}")
        return int(release["id"])

    if event is not None and event.release_id:
        logger.debug(f"Using release {event.release_id} from '{event.action}' event")
        return event.release_id

    raise ReleaseConfigError("unable to determine the release id")

"""Session workspaces rooted under the upload directory."""

from __future__ import annotations

import re
from pathlib import Path
from uuid import uuid4

from foldertools.failures import InvalidSessionError
from foldertools.safety.paths import resolve_path
from foldertools.util.logging import get_logger

logger = get_logger(__name__)

_SESSION_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


def validate_session_id(session_id: str) -> str:
    if not isinstance(session_id, str) or not _SESSION_ID_RE.match(session_id):
        raise InvalidSessionError(f"Invalid session id: {session_id!r}")
    return session_id


class WorkspaceStore:
    """Maps session ids to root directories, creating them on first use.

    The existence of the directory is the session; there is no separate
    registry. Creation relies on ``mkdir(exist_ok=True)`` so concurrent first
    references to the same id both succeed.
    """

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir).expanduser().resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, session_id: str) -> Path:
        return self.base_dir / validate_session_id(session_id)

    def root_for(self, session_id: str) -> Path:
        root = self.path_for(session_id)
        if not root.is_dir():
            logger.info("Creating session root %s", root)
        root.mkdir(parents=True, exist_ok=True)
        return root

    def exists(self, session_id: str) -> bool:
        return self.path_for(session_id).is_dir()

    def new_session_id(self) -> str:
        return uuid4().hex

    def resolve(self, session_id: str, relative: str) -> Path:
        return resolve_path(self.root_for(session_id), relative)

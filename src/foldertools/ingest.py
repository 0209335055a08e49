"""Materialization of flat upload entries into a session tree."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from pydantic import BaseModel, Field

from foldertools.failures import InvalidArgumentsError, WorkspaceError
from foldertools.runtime.workspaces import WorkspaceStore
from foldertools.safety.paths import relative_to_root, resolve_path
from foldertools.util.logging import get_logger

logger = get_logger(__name__)

_SEPARATORS = re.compile(r"[\\/]+")


@dataclass
class UploadEntry:
    relative_path: str
    content: bytes


class IngestFailure(BaseModel):
    path: str
    error: str


class IngestResult(BaseModel):
    session_id: str
    file_count: int = 0
    file_paths: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    failed: list[IngestFailure] = Field(default_factory=list)
    error: str | None = None


def split_path(relative_path: str) -> list[str]:
    return [part for part in _SEPARATORS.split(relative_path) if part and part != "."]


def is_ignored(relative_path: str) -> bool:
    """Return True for VCS metadata and Finder droppings."""
    parts = split_path(relative_path)
    if not parts:
        return False
    filename = parts[-1]
    if filename == ".DS_Store" or filename.startswith(".git"):
        return True
    return ".git" in parts


def _split_entry(relative_path: str) -> tuple[str, str]:
    parts = split_path(relative_path)
    if not parts:
        raise InvalidArgumentsError(f"Empty upload path: {relative_path!r}")
    return "/".join(parts[:-1]) or ".", parts[-1]


def ingest(
    store: WorkspaceStore,
    entries: Iterable[UploadEntry],
    session_id: str | None = None,
) -> IngestResult:
    """Write ``entries`` under the session root, one entry at a time.

    Each entry succeeds or fails on its own; earlier writes are never rolled
    back. Failures are reported in ``IngestResult.failed``; a session root that
    cannot be used is reported in ``IngestResult.error`` with nothing written.
    """
    session_id = session_id or store.new_session_id()
    result = IngestResult(session_id=session_id)
    try:
        root = store.root_for(session_id)
    except (WorkspaceError, OSError) as exc:
        logger.warning("Cannot ingest into session %r: %s", session_id, exc)
        result.error = str(exc)
        return result

    for entry in entries:
        if is_ignored(entry.relative_path):
            logger.debug("Filtering out system file %s", entry.relative_path)
            result.skipped.append(entry.relative_path)
            continue
        try:
            dir_part, filename = _split_entry(entry.relative_path)
            directory = resolve_path(root, dir_part)
            directory.mkdir(parents=True, exist_ok=True)
            target = resolve_path(directory, filename)
            if target.parent != directory:
                raise InvalidArgumentsError(f"Invalid file name: {filename!r}")
            target.write_bytes(entry.content)
        except (WorkspaceError, OSError) as exc:
            logger.warning("Failed to ingest %s: %s", entry.relative_path, exc)
            result.failed.append(IngestFailure(path=entry.relative_path, error=str(exc)))
            continue
        result.file_paths.append(relative_to_root(root, target))

    result.file_count = len(result.file_paths)
    logger.info(
        "Ingested %d files into session %s (%d skipped, %d failed)",
        result.file_count,
        session_id,
        len(result.skipped),
        len(result.failed),
    )
    return result

"""Sorted, typed directory listings for a session root."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from pydantic import BaseModel

from foldertools.failures import IOFailureError, NotFoundError
from foldertools.safety.paths import is_within, relative_to_root, resolve_path
from foldertools.util.logging import get_logger

logger = get_logger(__name__)


class FileEntry(BaseModel):
    name: str
    path: str
    kind: Literal["file", "directory"]
    size_bytes: int | None = None
    modified_at: datetime


# Root collation order (as used by ICU and JavaScript localeCompare) for ASCII:
# punctuation and symbols, then digits, then letters regardless of case.
_COLLATION_ORDER = " _-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$0123456789abcdefghijklmnopqrstuvwxyz"
_WEIGHTS = {char: index for index, char in enumerate(_COLLATION_ORDER)}


def _primary_weights(name: str) -> tuple[int, ...]:
    return tuple(_WEIGHTS.get(char, len(_WEIGHTS) + ord(char)) for char in name.casefold())


def sort_key(entry: FileEntry) -> tuple[int, tuple[int, ...], str]:
    """Directories first, then collated name; lowercase wins a case-only tie."""
    kind = 0 if entry.kind == "directory" else 1
    return (kind, _primary_weights(entry.name), entry.name.swapcase())


def list_directory(root: str | Path, dir_path: str = ".") -> list[FileEntry]:
    """List the visible children of ``dir_path`` under ``root``.

    Entries starting with ``.`` are never listed. Children that cannot be
    stat-ed (vanished, broken or looping links) and symlinks pointing outside
    the root are skipped.
    """
    base = Path(root).resolve()
    target = resolve_path(base, dir_path)
    if not target.exists():
        raise NotFoundError(f"Directory does not exist: {dir_path}")
    if not target.is_dir():
        raise IOFailureError(f"Not a directory: {dir_path}")

    prefix = relative_to_root(base, target)
    entries: list[FileEntry] = []
    with os.scandir(target) as children:
        for child in children:
            if child.name.startswith("."):
                continue
            if child.is_symlink() and not is_within(base, child.path):
                continue
            try:
                stats = child.stat()
                is_dir = child.is_dir()
            except OSError as exc:
                logger.debug("Skipping unreadable entry %s: %s", child.name, exc)
                continue
            entries.append(
                FileEntry(
                    name=child.name,
                    path=child.name if prefix == "." else f"{prefix}/{child.name}",
                    kind="directory" if is_dir else "file",
                    size_bytes=None if is_dir else stats.st_size,
                    modified_at=datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc),
                )
            )
    entries.sort(key=sort_key)
    return entries

"""Containment of client-supplied paths inside a session root."""

from __future__ import annotations

from pathlib import Path, PurePosixPath, PureWindowsPath

from foldertools.failures import InvalidArgumentsError, IOFailureError, PathEscapeError
from foldertools.util.logging import get_logger

logger = get_logger(__name__)


def _relative_parts(relative: str) -> list[str]:
    # Backslash paths are parsed Windows-style so "C:\\x" loses its drive;
    # any anchor is dropped, so absolute-looking input is re-anchored at the root.
    if "\\" in relative:
        pure = PureWindowsPath(relative)
    else:
        pure = PurePosixPath(relative)
    parts = list(pure.parts)
    if pure.anchor:
        parts = parts[1:]
    return parts


def _check_relative(relative: str) -> None:
    if not isinstance(relative, str):
        raise InvalidArgumentsError("Path must be a string")
    if "\x00" in relative:
        raise InvalidArgumentsError("Path must not contain NUL bytes")


def _canonical(path: Path) -> Path:
    # Python < 3.13 raises RuntimeError on symlink loops.
    try:
        return path.resolve()
    except (RuntimeError, OSError) as exc:
        raise IOFailureError(f"Cannot resolve path (symlink loop?): {path.name}") from exc


def resolve_path(root: str | Path, relative: str) -> Path:
    """Resolve ``relative`` under ``root`` or raise :class:`PathEscapeError`.

    Both sides are canonicalized with symlinks followed, and containment is
    checked component-wise on the canonical forms.
    """
    _check_relative(relative)
    base = _canonical(Path(root))
    target = _canonical(base.joinpath(*_relative_parts(relative)))
    if target != base and base not in target.parents:
        logger.warning("Rejected path escape attempt %r under %s", relative, base)
        raise PathEscapeError(relative)
    return target


def resolve_entry(root: str | Path, relative: str) -> Path:
    """Like :func:`resolve_path`, but a final symlink component is not followed.

    The returned path names the link itself, so deleting it never touches the
    link target.
    """
    _check_relative(relative)
    parts = _relative_parts(relative)
    if not parts or parts[-1] in (".", ".."):
        return resolve_path(root, relative)
    parent = resolve_path(root, "/".join(parts[:-1]) or ".")
    return parent / parts[-1]


def is_within(root: str | Path, path: str | Path) -> bool:
    try:
        base = Path(root).resolve()
        target = Path(path).resolve()
    except (RuntimeError, OSError):
        return False
    return target == base or base in target.parents


def relative_to_root(root: str | Path, path: str | Path) -> str:
    """Render a resolved path as a POSIX session-relative string."""
    rel = Path(path).relative_to(Path(root).resolve())
    return rel.as_posix()

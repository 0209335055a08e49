from pathlib import Path

import pytest

from foldertools.failures import InvalidArgumentsError, IOFailureError, PathEscapeError
from foldertools.safety.paths import relative_to_root, resolve_entry, resolve_path


@pytest.mark.parametrize(
    "relative",
    ["..", "../", "../sibling", "a/../../b", "a/b/../../../c", "./../x", "..\\..\\x"],
)
def test_resolve_rejects_escapes(tmp_path: Path, relative: str) -> None:
    root = tmp_path / "root"
    root.mkdir()
    with pytest.raises(PathEscapeError):
        resolve_path(root, relative)


@pytest.mark.parametrize(
    ("relative", "expected"),
    [
        (".", "."),
        ("", "."),
        ("a/b.txt", "a/b.txt"),
        ("a/../b.txt", "b.txt"),
        ("./a/./c", "a/c"),
        ("a\\b.txt", "a/b.txt"),
    ],
)
def test_resolve_accepts_paths_inside_root(tmp_path: Path, relative: str, expected: str) -> None:
    target = resolve_path(tmp_path, relative)
    assert relative_to_root(tmp_path, target) == expected


def test_absolute_paths_are_reanchored_at_root(tmp_path: Path) -> None:
    target = resolve_path(tmp_path, "/etc/passwd")
    assert target == tmp_path.resolve() / "etc" / "passwd"


def test_string_prefix_sibling_is_not_inside(tmp_path: Path) -> None:
    root = tmp_path / "abc"
    root.mkdir()
    (tmp_path / "abcdef").mkdir()
    with pytest.raises(PathEscapeError):
        resolve_path(root, "../abcdef/secret.txt")


def test_symlink_escape_is_rejected(tmp_path: Path) -> None:
    root = tmp_path / "root"
    outside = tmp_path / "outside"
    root.mkdir()
    outside.mkdir()
    (outside / "secret.txt").write_text("s", encoding="utf-8")
    (root / "link").symlink_to(outside, target_is_directory=True)
    with pytest.raises(PathEscapeError):
        resolve_path(root, "link/secret.txt")


def test_symlink_inside_root_is_allowed(tmp_path: Path) -> None:
    (tmp_path / "real").mkdir()
    (tmp_path / "alias").symlink_to(tmp_path / "real", target_is_directory=True)
    assert resolve_path(tmp_path, "alias/x.txt") == tmp_path.resolve() / "real" / "x.txt"


def test_nul_byte_is_invalid(tmp_path: Path) -> None:
    with pytest.raises(InvalidArgumentsError):
        resolve_path(tmp_path, "a\x00b")


def test_drive_anchor_is_dropped(tmp_path: Path) -> None:
    target = resolve_path(tmp_path, "C:\\Windows\\win.ini")
    assert relative_to_root(tmp_path, target) == "Windows/win.ini"


def test_colon_in_posix_name_is_kept(tmp_path: Path) -> None:
    assert relative_to_root(tmp_path, resolve_path(tmp_path, "a:b.txt")) == "a:b.txt"


def test_colon_slash_in_posix_name_is_kept(tmp_path: Path) -> None:
    assert relative_to_root(tmp_path, resolve_path(tmp_path, "a:/b")) == "a:/b"


def test_symlink_loop_is_io_failure(tmp_path: Path) -> None:
    (tmp_path / "loop").symlink_to(tmp_path / "loop")
    try:
        target = resolve_path(tmp_path, "loop")
    except IOFailureError:
        return
    # Newer interpreters resolve loops lexically; the result must stay inside.
    assert target == tmp_path.resolve() / "loop"


def test_resolve_entry_keeps_final_link(tmp_path: Path) -> None:
    (tmp_path / "real").mkdir()
    (tmp_path / "alias").symlink_to(tmp_path / "real", target_is_directory=True)
    assert resolve_entry(tmp_path, "alias") == tmp_path.resolve() / "alias"
    with pytest.raises(PathEscapeError):
        resolve_entry(tmp_path, "../alias")

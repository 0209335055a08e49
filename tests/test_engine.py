from pathlib import Path

from foldertools.failures import ErrorKind
from foldertools.tools.base import ToolCall
from foldertools.tools.engine import ToolEngine, default_registry


def test_unknown_tool_does_not_touch_filesystem(tmp_path: Path) -> None:
    root = tmp_path / "session"
    result = ToolEngine().dispatch(root, ToolCall(name="format_disk"))
    assert not result.success
    assert result.error_kind == ErrorKind.UNKNOWN_TOOL
    assert result.error == "Unknown tool: format_disk"
    assert not root.exists()
    assert list(tmp_path.iterdir()) == []


def test_unknown_tool_positional(tmp_path: Path) -> None:
    result = ToolEngine().call(tmp_path, "rm_rf", "/")
    assert result.error_kind == ErrorKind.UNKNOWN_TOOL


def test_named_arguments_accept_client_aliases(tmp_path: Path) -> None:
    engine = ToolEngine()
    result = engine.dispatch(
        tmp_path,
        ToolCall(name="create_file", arguments={"filePath": "a.txt", "content": "hi"}),
    )
    assert result.success
    listing = engine.dispatch(tmp_path, ToolCall(name="list_files", arguments={"dirPath": "."}))
    assert [entry.name for entry in listing.files] == ["a.txt"]
    removed = engine.dispatch(tmp_path, ToolCall(name="create_directory", arguments={"dirPath": "d"}))
    assert removed.success


def test_argument_order_does_not_matter_for_named_calls(tmp_path: Path) -> None:
    result = ToolEngine().dispatch(
        tmp_path,
        ToolCall(name="edit_file", arguments={"content": "body", "path": "b.txt"}),
    )
    assert result.success
    assert (tmp_path / "b.txt").read_text(encoding="utf-8") == "body"


def test_unexpected_argument_is_rejected(tmp_path: Path) -> None:
    result = ToolEngine().dispatch(
        tmp_path,
        ToolCall(name="delete_file", arguments={"path": "a.txt", "force": True}),
    )
    assert not result.success
    assert result.error_kind == ErrorKind.INVALID_ARGUMENTS
    assert "force" in result.error


def test_missing_argument_is_rejected(tmp_path: Path) -> None:
    result = ToolEngine().dispatch(tmp_path, ToolCall(name="read_file"))
    assert result.error_kind == ErrorKind.INVALID_ARGUMENTS


def test_too_many_positional_arguments(tmp_path: Path) -> None:
    result = ToolEngine().call(tmp_path, "delete_file", "a.txt", "extra")
    assert result.error_kind == ErrorKind.INVALID_ARGUMENTS
    assert not (tmp_path / "a.txt").exists()


def test_bind_positional_uses_parameter_order() -> None:
    call = ToolEngine().bind_positional("create_file", ["x.txt", "data"])
    assert call.arguments == {"path": "x.txt", "content": "data"}


def test_failure_payload_shape(tmp_path: Path) -> None:
    payload = ToolEngine().call(tmp_path, "read_file", "missing.txt").to_payload()
    assert payload["success"] is False
    assert payload["error_kind"] == "not_found"
    assert "content" not in payload


def test_registry_is_fixed() -> None:
    registry = default_registry()
    assert registry.names() == [
        "create_file",
        "edit_file",
        "delete_file",
        "read_file",
        "list_files",
        "create_directory",
        "delete_directory",
    ]
    assert "format_disk" not in registry
    schemas = registry.openai_schemas()
    assert schemas[0]["function"]["name"] == "create_file"
    assert "path" in schemas[0]["function"]["parameters"]["properties"]

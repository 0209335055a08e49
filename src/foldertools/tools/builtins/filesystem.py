"""Filesystem tools confined to a session root."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from foldertools.failures import (
    DecodeFailureError,
    InvalidArgumentsError,
    IOFailureError,
    NotFoundError,
)
from foldertools.listing import list_directory
from foldertools.safety.paths import resolve_entry, resolve_path
from foldertools.tools.base import Tool, ToolInput, ToolResult

_FILE_PATH = AliasChoices("path", "filePath", "file_path")
_DIR_PATH = AliasChoices("path", "dirPath", "dir_path")


class CreateFileInput(ToolInput):
    path: str = Field(validation_alias=_FILE_PATH)
    content: str = ""


class EditFileInput(ToolInput):
    path: str = Field(validation_alias=_FILE_PATH)
    content: str


class DeleteFileInput(ToolInput):
    path: str = Field(validation_alias=_FILE_PATH)


class ReadFileInput(ToolInput):
    path: str = Field(validation_alias=_FILE_PATH)


class ListFilesInput(ToolInput):
    dir_path: str = Field(default=".", validation_alias=AliasChoices("dir_path", "dirPath", "path"))


class CreateDirectoryInput(ToolInput):
    path: str = Field(validation_alias=_DIR_PATH)


class DeleteDirectoryInput(ToolInput):
    path: str = Field(validation_alias=_DIR_PATH)


def _write_text(target: Path, content: str) -> None:
    if target.is_dir():
        raise IOFailureError(f"Is a directory: {target.name}")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content.encode("utf-8"))


class CreateFileTool(Tool):
    name = "create_file"
    description = "Create a file with optional content, creating parent directories."
    input_schema = CreateFileInput

    def run(self, root: Path, data: BaseModel | dict[str, Any]) -> ToolResult:
        payload = CreateFileInput.model_validate(data)
        _write_text(resolve_path(root, payload.path), payload.content)
        return ToolResult.ok(message=f"File created: {payload.path}")


class EditFileTool(Tool):
    name = "edit_file"
    description = "Overwrite a file with new content; missing files are created."
    input_schema = EditFileInput

    def run(self, root: Path, data: BaseModel | dict[str, Any]) -> ToolResult:
        payload = EditFileInput.model_validate(data)
        _write_text(resolve_path(root, payload.path), payload.content)
        return ToolResult.ok(message=f"File edited: {payload.path}")


class DeleteFileTool(Tool):
    name = "delete_file"
    description = "Delete a single file."
    input_schema = DeleteFileInput

    def run(self, root: Path, data: BaseModel | dict[str, Any]) -> ToolResult:
        payload = DeleteFileInput.model_validate(data)
        target = resolve_entry(root, payload.path)
        is_link = target.is_symlink()
        if not is_link and not target.exists():
            raise NotFoundError(f"File does not exist: {payload.path}")
        if not is_link and target.is_dir():
            raise IOFailureError(f"Is a directory: {payload.path}")
        target.unlink()
        return ToolResult.ok(message=f"File deleted: {payload.path}")


class ReadFileTool(Tool):
    name = "read_file"
    description = "Read a UTF-8 text file."
    input_schema = ReadFileInput

    def run(self, root: Path, data: BaseModel | dict[str, Any]) -> ToolResult:
        payload = ReadFileInput.model_validate(data)
        target = resolve_path(root, payload.path)
        if not target.exists():
            raise NotFoundError(f"File does not exist: {payload.path}")
        if target.is_dir():
            raise IOFailureError(f"Is a directory: {payload.path}")
        try:
            content = target.read_bytes().decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeFailureError(
                f"File is not valid UTF-8 text: {payload.path}"
            ) from exc
        return ToolResult.ok(content=content)


class ListFilesTool(Tool):
    name = "list_files"
    description = "List a directory: directories first, then files, hidden entries excluded."
    input_schema = ListFilesInput

    def run(self, root: Path, data: BaseModel | dict[str, Any]) -> ToolResult:
        payload = ListFilesInput.model_validate(data)
        return ToolResult.ok(files=list_directory(root, payload.dir_path))


class CreateDirectoryTool(Tool):
    name = "create_directory"
    description = "Create a directory and any missing parents."
    input_schema = CreateDirectoryInput

    def run(self, root: Path, data: BaseModel | dict[str, Any]) -> ToolResult:
        payload = CreateDirectoryInput.model_validate(data)
        resolve_path(root, payload.path).mkdir(parents=True, exist_ok=True)
        return ToolResult.ok(message=f"Directory created: {payload.path}")


class DeleteDirectoryTool(Tool):
    name = "delete_directory"
    description = "Recursively delete a directory; a missing directory is not an error."
    input_schema = DeleteDirectoryInput

    def run(self, root: Path, data: BaseModel | dict[str, Any]) -> ToolResult:
        payload = DeleteDirectoryInput.model_validate(data)
        target = resolve_entry(root, payload.path)
        if target == Path(root).resolve():
            raise InvalidArgumentsError("Refusing to delete the session root")
        if target.is_symlink() or target.is_file():
            target.unlink()
        elif target.exists():
            shutil.rmtree(target)
        return ToolResult.ok(message=f"Directory deleted: {payload.path}")


def filesystem_tools() -> list[Tool]:
    return [
        CreateFileTool(),
        EditFileTool(),
        DeleteFileTool(),
        ReadFileTool(),
        ListFilesTool(),
        CreateDirectoryTool(),
        DeleteDirectoryTool(),
    ]

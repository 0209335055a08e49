"""Failure taxonomy and exceptions raised by workspace operations."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Standardized failure categories reported in tool results."""

    PATH_ESCAPE = "path_escape"
    NOT_FOUND = "not_found"
    UNKNOWN_TOOL = "unknown_tool"
    IO_FAILURE = "io_failure"
    DECODE_FAILURE = "decode_failure"
    INVALID_ARGUMENTS = "invalid_arguments"
    INVALID_SESSION = "invalid_session"


class WorkspaceError(RuntimeError):
    kind: ErrorKind = ErrorKind.IO_FAILURE


class PathEscapeError(WorkspaceError):
    kind = ErrorKind.PATH_ESCAPE

    def __init__(self, path: str) -> None:
        super().__init__(f"Access denied: path outside of allowed directory: {path}")
        self.path = path


class NotFoundError(WorkspaceError):
    kind = ErrorKind.NOT_FOUND


class UnknownToolError(WorkspaceError):
    kind = ErrorKind.UNKNOWN_TOOL

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class IOFailureError(WorkspaceError):
    kind = ErrorKind.IO_FAILURE


class DecodeFailureError(WorkspaceError):
    kind = ErrorKind.DECODE_FAILURE


class InvalidArgumentsError(WorkspaceError):
    kind = ErrorKind.INVALID_ARGUMENTS


class InvalidSessionError(WorkspaceError):
    kind = ErrorKind.INVALID_SESSION

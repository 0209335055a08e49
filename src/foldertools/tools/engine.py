"""Dispatch of tool calls against a session root."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from pydantic import ValidationError

from foldertools.failures import (
    ErrorKind,
    InvalidArgumentsError,
    UnknownToolError,
    WorkspaceError,
)
from foldertools.tools.base import ToolCall, ToolResult
from foldertools.tools.builtins.filesystem import filesystem_tools
from foldertools.tools.registry import ToolRegistry
from foldertools.util.logging import get_logger

logger = get_logger(__name__)


def default_registry() -> ToolRegistry:
    return ToolRegistry(filesystem_tools())


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "arguments"
        problems.append(f"{location}: {error.get('msg')}")
    return "Invalid arguments: " + "; ".join(problems)


class ToolEngine:
    """Validates tool calls and runs them, never letting a failure escape.

    Every outcome is a :class:`ToolResult`; unknown tools are rejected before
    any filesystem access.
    """

    def __init__(self, registry: ToolRegistry | None = None) -> None:
        self.registry = registry or default_registry()

    def bind_positional(self, name: str, args: Sequence[Any]) -> ToolCall:
        """Build a named call from arguments given in the tool's parameter order."""
        tool = self.registry.get(name)
        if tool is None:
            raise UnknownToolError(name)
        order = tool.parameter_order()
        if len(args) > len(order):
            raise InvalidArgumentsError(
                f"{name} takes at most {len(order)} arguments ({len(args)} given)"
            )
        return ToolCall(name=name, arguments=dict(zip(order, args)))

    def call(self, root: str | Path, name: str, *args: Any) -> ToolResult:
        try:
            tool_call = self.bind_positional(name, args)
        except WorkspaceError as exc:
            return ToolResult.from_error(exc)
        return self.dispatch(root, tool_call)

    def dispatch(self, root: str | Path, call: ToolCall) -> ToolResult:
        tool = self.registry.get(call.name)
        if tool is None:
            logger.warning("Unknown tool requested: %s", call.name)
            return ToolResult.from_error(UnknownToolError(call.name))
        logger.debug("Dispatching %s with %s", call.name, sorted(call.arguments))
        try:
            payload = tool.input_schema.model_validate(call.arguments)
            return tool.run(Path(root), payload)
        except ValidationError as exc:
            result = ToolResult.fail(_format_validation_error(exc), ErrorKind.INVALID_ARGUMENTS)
        except WorkspaceError as exc:
            result = ToolResult.from_error(exc)
        except FileNotFoundError as exc:
            result = ToolResult.fail(f"Not found: {exc.filename or exc}", ErrorKind.NOT_FOUND)
        except UnicodeDecodeError as exc:
            result = ToolResult.fail(str(exc), ErrorKind.DECODE_FAILURE)
        except OSError as exc:
            result = ToolResult.fail(exc.strerror or str(exc), ErrorKind.IO_FAILURE)
        logger.warning("Tool %s failed (%s): %s", call.name, result.error_kind.value, result.error)
        return result

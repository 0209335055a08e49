"""Base tool definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from foldertools.failures import ErrorKind, WorkspaceError
from foldertools.listing import FileEntry


class ToolInput(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class ToolCall(BaseModel):
    """A request to invoke one registered tool with named arguments."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolResult(BaseModel):
    success: bool
    message: str | None = None
    content: str | None = None
    files: list[FileEntry] | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def ok(cls, **data: Any) -> "ToolResult":
        return cls(success=True, **data)

    @classmethod
    def fail(cls, error: str, kind: ErrorKind) -> "ToolResult":
        return cls(success=False, error=error, error_kind=kind)

    @classmethod
    def from_error(cls, exc: WorkspaceError) -> "ToolResult":
        return cls.fail(str(exc), exc.kind)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON shape sent to clients, omitting unset fields."""
        return self.model_dump(mode="json", exclude_none=True)


class Tool(ABC):
    """Abstract filesystem tool bound to a session root at call time."""

    name: str
    description: str
    input_schema: type[ToolInput]

    @abstractmethod
    def run(self, root: Path, data: BaseModel | dict[str, Any]) -> ToolResult:
        """Execute the tool against ``root``."""
        raise NotImplementedError

    def parameter_order(self) -> list[str]:
        return list(self.input_schema.model_fields)

    def openai_schema(self) -> dict[str, Any]:
        """Return OpenAI-compatible tool schema."""
        schema = self.input_schema.model_json_schema()
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": schema,
            },
        }

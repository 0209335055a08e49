"""Tool registry."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable

from foldertools.tools.base import Tool


class ToolRegistry:
    """Immutable registry of tools, fixed at construction."""

    def __init__(self, tools: Iterable[Tool]) -> None:
        mapping: dict[str, Tool] = {}
        for tool in tools:
            if tool.name in mapping:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            mapping[tool.name] = tool
        self._tools = MappingProxyType(mapping)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def list(self) -> list[Tool]:
        return list(self._tools.values())

    def openai_schemas(self) -> list[dict]:
        return [tool.openai_schema() for tool in self._tools.values()]

"""Shared construction helpers for the API and CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from foldertools.config import Settings
from foldertools.extractor import extract_commands
from foldertools.runtime.workspaces import WorkspaceStore
from foldertools.tools.engine import ToolEngine, default_registry


def build_store(settings: Settings) -> WorkspaceStore:
    return WorkspaceStore(settings.upload_dir)


def build_engine() -> ToolEngine:
    return ToolEngine(default_registry())


def process_prompt(engine: ToolEngine, root: Path, prompt: str) -> list[dict[str, Any]]:
    """Run every command extracted from ``prompt`` in order."""
    results = []
    for command in extract_commands(prompt):
        result = engine.dispatch(root, command.call)
        results.append({"command": command.description, "result": result.to_payload()})
    return results

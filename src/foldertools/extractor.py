"""Best-effort extraction of tool calls from free-text prompts.

This is a keyword and regex heuristic, not a language model. Each rule looks
for its verbs and nouns anywhere in the prompt and takes the first quoted
string after them as the target path. A rule never reaches across a quoted
string to find its noun or target.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from foldertools.tools.base import ToolCall

NEW_FILE_PLACEHOLDER = "// New file created\n"

_QUOTES = "'\"‘’“”"
_QUOTED = rf"[{_QUOTES}]([^{_QUOTES}]+)[{_QUOTES}]"
_GAP = rf"[^{_QUOTES}]*?"


@dataclass(frozen=True)
class ExtractedCommand:
    call: ToolCall
    description: str


@dataclass(frozen=True)
class _Rule:
    pattern: re.Pattern[str]
    tool: str
    label: str


def _rule(verb: str, noun: str, tool: str, label: str) -> _Rule:
    pattern = re.compile(
        rf"\b{verb}\b{_GAP}\b{noun}\b{_GAP}{_QUOTED}", re.IGNORECASE
    )
    return _Rule(pattern=pattern, tool=tool, label=label)


_RULES = (
    _rule("create", "file", "create_file", "Create file"),
    _rule("delete", "file", "delete_file", "Delete file"),
    _rule("create", "director(?:y|ies)", "create_directory", "Create directory"),
    _rule("delete", "director(?:y|ies)", "delete_directory", "Delete directory"),
    _rule("read", "file", "read_file", "Read file"),
    _rule("list", "(?:files|director(?:y|ies)|folder)", "list_files", "List files"),
)


def extract_commands(prompt: str) -> list[ExtractedCommand]:
    """Return the tool calls a prompt asks for, in rule order."""
    commands: list[ExtractedCommand] = []
    for rule in _RULES:
        match = rule.pattern.search(prompt)
        if not match:
            continue
        target = match.group(1).strip()
        if rule.tool == "create_file":
            arguments = {"path": target, "content": NEW_FILE_PLACEHOLDER}
        elif rule.tool == "list_files":
            arguments = {"dir_path": target}
        else:
            arguments = {"path": target}
        commands.append(
            ExtractedCommand(
                call=ToolCall(name=rule.tool, arguments=arguments),
                description=f"{rule.label}: {target}",
            )
        )
    return commands

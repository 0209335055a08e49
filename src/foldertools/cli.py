"""Command-line interface."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Sequence

from foldertools.config import Settings
from foldertools.factory import build_engine, build_store, process_prompt
from foldertools.failures import WorkspaceError
from foldertools.ingest import UploadEntry, ingest
from foldertools.tools.base import ToolCall
from foldertools.util.logging import configure_level


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="foldertools CLI")
    parser.add_argument("--upload-dir", dest="upload_dir")
    parser.add_argument("--log-level", dest="log_level")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", dest="host")
    serve.add_argument("--port", type=int, dest="port")

    ingest_cmd = commands.add_parser("ingest", help="Upload a local directory into a session")
    ingest_cmd.add_argument("directory", type=Path)
    ingest_cmd.add_argument("--session", dest="session")

    exec_cmd = commands.add_parser("exec", help="Run one tool against a session")
    exec_cmd.add_argument("session")
    exec_cmd.add_argument("tool")
    exec_cmd.add_argument(
        "--arg", action="append", default=[], dest="arguments", metavar="KEY=VALUE"
    )

    ls_cmd = commands.add_parser("ls", help="List a directory in a session")
    ls_cmd.add_argument("session")
    ls_cmd.add_argument("path", nargs="?", default=".")

    prompt_cmd = commands.add_parser("prompt", help="Run the commands found in a prompt")
    prompt_cmd.add_argument("session")
    prompt_cmd.add_argument("text")
    return parser.parse_args(argv)


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    data: dict[str, Any] = settings.model_dump()
    if args.upload_dir:
        data["upload_dir"] = args.upload_dir
    if args.log_level:
        data["log_level"] = args.log_level
    if getattr(args, "host", None):
        data["host"] = args.host
    if getattr(args, "port", None):
        data["port"] = args.port
    return Settings(**data)


def parse_arguments(pairs: Sequence[str]) -> dict[str, str]:
    arguments: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        arguments[key] = value
    return arguments


def collect_entries(directory: Path) -> list[UploadEntry]:
    entries = []
    for path in sorted(directory.rglob("*")):
        if path.is_file():
            relative = path.relative_to(directory).as_posix()
            entries.append(UploadEntry(relative_path=relative, content=path.read_bytes()))
    return entries


def _emit(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = apply_overrides(Settings(), args)
    configure_level(settings.log_level)

    if args.command == "serve":
        import uvicorn

        from foldertools.api import create_app

        uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
        return 0

    store = build_store(settings)
    engine = build_engine()
    try:
        if args.command == "ingest":
            if not args.directory.is_dir():
                _emit({"success": False, "error": f"Not a directory: {args.directory}"})
                return 1
            result = ingest(store, collect_entries(args.directory), session_id=args.session)
            _emit(result.model_dump())
            return 0 if not (result.failed or result.error) else 1
        root = store.root_for(args.session)
        if args.command == "prompt":
            _emit({"success": True, "results": process_prompt(engine, root, args.text)})
            return 0
        if args.command == "ls":
            call = ToolCall(name="list_files", arguments={"dir_path": args.path})
        else:
            call = ToolCall(name=args.tool, arguments=parse_arguments(args.arguments))
    except (WorkspaceError, ValueError) as exc:
        _emit({"success": False, "error": str(exc)})
        return 1
    result = engine.dispatch(root, call)
    _emit(result.to_payload())
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())

"""FastAPI service."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from foldertools.config import Settings
from foldertools.factory import build_engine, build_store, process_prompt
from foldertools.failures import InvalidSessionError, UnknownToolError
from foldertools.ingest import UploadEntry, ingest
from foldertools.tools.base import ToolCall, ToolResult
from foldertools.util.logging import configure_level, get_logger

logger = get_logger(__name__)


class ExecuteRequest(BaseModel):
    tool: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class PromptRequest(BaseModel):
    prompt: str


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    configure_level(settings.log_level)
    store = build_store(settings)
    engine = build_engine()
    logger.info("Upload directory: %s", store.base_dir)

    app = FastAPI(title="foldertools")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def session_root(folder_id: str) -> Path:
        try:
            return store.root_for(folder_id)
        except InvalidSessionError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/tools")
    def list_tools() -> list[dict[str, Any]]:
        return engine.registry.openai_schemas()

    @app.post("/api/upload")
    def upload(
        files: list[UploadFile] = File(...),
        folder_id: str | None = Form(default=None, alias="folderId"),
    ) -> dict[str, Any]:
        if folder_id:
            session_root(folder_id)
        entries = [
            UploadEntry(relative_path=item.filename or "", content=item.file.read())
            for item in files
        ]
        result = ingest(store, entries, session_id=folder_id or None)
        if result.error:
            return {"success": False, "folderId": result.session_id, "error": result.error}
        return {
            "success": True,
            "folderId": result.session_id,
            "fileCount": result.file_count,
            "filePaths": result.file_paths,
            "skipped": result.skipped,
            "failed": [failure.model_dump() for failure in result.failed],
            "message": f"Successfully uploaded {result.file_count} files",
        }

    @app.get("/api/folders/{folder_id}/files")
    def list_files(folder_id: str, path: str = ".") -> dict[str, Any]:
        root = session_root(folder_id)
        result = engine.dispatch(root, ToolCall(name="list_files", arguments={"dir_path": path}))
        return result.to_payload()

    @app.get("/api/folders/{folder_id}/files/{file_path:path}")
    def read_file(folder_id: str, file_path: str) -> dict[str, Any]:
        root = session_root(folder_id)
        result = engine.dispatch(root, ToolCall(name="read_file", arguments={"path": file_path}))
        return result.to_payload()

    @app.post("/api/folders/{folder_id}/mcp-execute")
    def execute(folder_id: str, request: ExecuteRequest) -> Any:
        if request.tool not in engine.registry:
            result = ToolResult.from_error(UnknownToolError(request.tool))
            return JSONResponse(status_code=400, content=result.to_payload())
        root = session_root(folder_id)
        logger.info("Executing tool %s for folder %s", request.tool, folder_id)
        result = engine.dispatch(root, ToolCall(name=request.tool, arguments=request.arguments))
        return result.to_payload()

    @app.post("/api/folders/{folder_id}/process-prompt")
    def run_prompt(folder_id: str, request: PromptRequest) -> dict[str, Any]:
        root = session_root(folder_id)
        logger.info("Processing prompt for folder %s", folder_id)
        return {"success": True, "results": process_prompt(engine, root, request.prompt)}

    return app

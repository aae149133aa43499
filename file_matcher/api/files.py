"""File loading API endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from pydantic import BaseModel

from ..config import settings
from ..entries.local import entry_for_path
from ..entries.upload import build_upload_tree
from ..messages import translate
from ..models.user import User
from ..services.operations import OperationBusyError
from ..services.workspace_manager import Workspace, workspace_manager
from ..utils.permissions import check_path_readable
from .deps import get_language, get_workspace, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workspaces/{workspace_id}/files", tags=["files"])


class LoadDirectoryRequest(BaseModel):
    path: str


@router.post("")
async def upload_files(
    ws: Workspace = Depends(get_workspace),
    files: list[UploadFile] = File(...),
    paths: Optional[list[str]] = Form(None),
    lang: str = Depends(get_language),
):
    """Replace the workspace's files with an upload.

    Each part's filename may carry a folder prefix ("folder/sub/a.pdf"), as
    sent by a directory picker. ``paths`` overrides the filenames when given.
    """
    if paths is not None and len(paths) != len(files):
        raise HTTPException(status_code=400, detail="paths must match files one to one")

    limit = settings.max_upload_size_mb * 1024 * 1024
    uploads = []
    total = 0
    for i, upload in enumerate(files):
        data = await upload.read()
        total += len(data)
        if total > limit:
            raise HTTPException(status_code=413, detail="Upload too large")
        relative_path = paths[i] if paths is not None else (upload.filename or "")
        uploads.append((relative_path, data, upload.content_type))

    entries = build_upload_tree(uploads, batch_size=settings.batch_size)
    return await _load(ws, entries, lang)


@router.post("/load-directory")
async def load_directory(
    request: LoadDirectoryRequest,
    ws: Workspace = Depends(get_workspace),
    admin: User = Depends(require_admin),
    lang: str = Depends(get_language),
):
    """Load a directory (or single file) from the host."""
    if not check_path_readable(request.path):
        raise HTTPException(status_code=400, detail="Path is not readable")
    entry = entry_for_path(request.path, batch_size=settings.batch_size)
    logger.info(f"[{ws.id}] {admin.username} loading {request.path}")
    return await _load(ws, [entry], lang)


@router.get("")
async def list_files(
    ws: Workspace = Depends(get_workspace),
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    page = ws.files[offset:offset + limit]
    return {
        "workspace_id": ws.id,
        "total": len(ws.files),
        "offset": offset,
        "limit": limit,
        "files": page,
    }


async def _load(ws: Workspace, entries, lang: str) -> dict:
    try:
        summary = await workspace_manager.load_entries(ws.id, entries)
    except OperationBusyError:
        raise HTTPException(
            status_code=409,
            detail=translate("operation_in_progress", lang, operation="load"),
        )
    return {
        **summary.model_dump(),
        "message": translate("successfully_loaded_files", lang, count=summary.files_loaded),
    }

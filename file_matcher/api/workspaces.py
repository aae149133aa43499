"""Workspace API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from ..services.workspace_manager import Workspace, workspace_manager
from .deps import get_workspace

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


@router.post("")
async def create_workspace():
    ws = workspace_manager.create_workspace()
    return ws.summary()


@router.get("/{workspace_id}")
async def get_workspace_summary(ws: Workspace = Depends(get_workspace)):
    return ws.summary()


@router.delete("/{workspace_id}")
async def delete_workspace(workspace_id: str):
    if not workspace_manager.delete_workspace(workspace_id):
        raise HTTPException(status_code=404, detail="Workspace not found")
    return {"deleted": True}


@router.get("/{workspace_id}/progress")
async def get_progress(ws: Workspace = Depends(get_workspace)):
    return ws.progress_snapshots()

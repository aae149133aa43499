"""Aggregate all API sub-routers."""

from fastapi import APIRouter

from . import system, auth, workspaces, files, match, archive, practice, ws

api_router = APIRouter()

api_router.include_router(system.router)
api_router.include_router(auth.router)
api_router.include_router(workspaces.router)
api_router.include_router(files.router)
api_router.include_router(match.router)
api_router.include_router(archive.router)
api_router.include_router(practice.router)
api_router.include_router(ws.router)

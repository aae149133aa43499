"""System info API endpoints."""

from fastapi import APIRouter

from ..models.match import FileTypeFilter

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/health")
async def health():
    return {"status": "healthy"}


@router.get("/file-types")
async def file_types():
    return [
        {
            "value": ft.value,
            "extensions": sorted(ft.extensions) if ft.extensions is not None else [],
        }
        for ft in FileTypeFilter
    ]

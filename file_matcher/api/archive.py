"""Archive API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from ..messages import translate
from ..services.archive_manager import NothingToArchiveError, archive_manager
from ..services.operations import OperationBusyError
from ..models.archive import ArchiveStatus
from .deps import get_language

router = APIRouter(tags=["archive"])


@router.post("/workspaces/{workspace_id}/archive")
async def start_archive(workspace_id: str, lang: str = Depends(get_language)):
    try:
        job = archive_manager.create_job(workspace_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Workspace not found")
    except NothingToArchiveError:
        raise HTTPException(status_code=400, detail=translate("no_matched_files_to_download", lang))
    except OperationBusyError:
        raise HTTPException(
            status_code=409,
            detail=translate("operation_in_progress", lang, operation="archive"),
        )

    await archive_manager.start_archive(job.id)
    return {"job_id": job.id, "status": job.status}


@router.get("/archive/jobs/{job_id}")
async def get_archive_job(job_id: str, lang: str = Depends(get_language)):
    job = archive_manager.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Archive job not found")

    message = ""
    if job.status == ArchiveStatus.COMPLETED:
        message = translate("downloaded_files_as_zip", lang, count=job.progress.files_total)
    elif job.status == ArchiveStatus.FAILED:
        message = translate("error_creating_zip", lang)
    elif job.status == ArchiveStatus.RUNNING:
        message = translate("creating_zip_file", lang)
    return {**job.model_dump(mode="json"), "message": message}


@router.get("/archive/jobs/{job_id}/download")
async def download_archive(job_id: str):
    job = archive_manager.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Archive job not found")
    if job.status != ArchiveStatus.COMPLETED:
        raise HTTPException(status_code=409, detail="Archive is not ready")

    data = archive_manager.take_archive(job_id)
    if data is None:
        detail = "Archive was replaced by a newer one" if job.expired else "Archive was already downloaded"
        raise HTTPException(status_code=410, detail=detail)

    return Response(
        content=data,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{job.filename}"'},
    )

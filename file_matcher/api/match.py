"""Matching API endpoint."""

from fastapi import APIRouter, Depends, HTTPException

from ..messages import outcome_message, translate
from ..models.match import MatchRequest
from ..services.operations import OperationBusyError
from ..services.workspace_manager import Workspace, workspace_manager
from .deps import get_language, get_workspace

router = APIRouter(prefix="/workspaces/{workspace_id}", tags=["match"])


@router.post("/match")
async def match_files(
    request: MatchRequest,
    ws: Workspace = Depends(get_workspace),
    lang: str = Depends(get_language),
):
    """Match the loaded files against product codes.

    Validation problems come back as an outcome with kind
    ``validation_failure``, not as an HTTP error.
    """
    try:
        outcome = workspace_manager.match(ws.id, request.codes, request.file_type)
    except OperationBusyError:
        raise HTTPException(
            status_code=409,
            detail=translate("operation_in_progress", lang, operation="match"),
        )

    return {
        "status": outcome.status,
        "kind": outcome.kind,
        "message": outcome_message(outcome, lang, file_count=len(ws.files)),
        "codes": outcome.codes,
        "matched_files": outcome.result.matched_files,
        "unmatched_codes": outcome.result.unmatched_codes,
        "searched_count": outcome.result.searched_count,
    }

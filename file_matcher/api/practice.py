"""Practice record API endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..models.user import PracticeRecordRequest, Role, User
from ..services.practice_records import practice_records
from .deps import get_current_user

router = APIRouter(prefix="/practice", tags=["practice"])


def _scope(user: User, user_id: Optional[str]) -> Optional[str]:
    """Admins may look at anyone; students only see themselves."""
    if user.role == Role.ADMIN:
        return user_id
    return user.id


@router.post("/records")
async def add_record(request: PracticeRecordRequest, user: User = Depends(get_current_user)):
    return practice_records.record(user, request.tool_type, request.action, request.details)


@router.get("/records")
async def list_records(
    user_id: Optional[str] = None,
    day: Optional[date] = Query(None, alias="date"),
    user: User = Depends(get_current_user),
):
    scope = _scope(user, user_id)
    if day is not None:
        return practice_records.by_date(day, scope)
    return practice_records.list_records(scope)


@router.get("/stats")
async def get_stats(user_id: Optional[str] = None, user: User = Depends(get_current_user)):
    return practice_records.stats(_scope(user, user_id))

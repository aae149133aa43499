"""Shared request dependencies."""

from typing import Optional

from fastapi import Depends, Header, HTTPException, Query

from ..config import settings
from ..messages import LANGUAGES
from ..models.user import Role, User
from ..services.auth import auth_service
from ..services.workspace_manager import Workspace, workspace_manager


def get_language(lang: Optional[str] = Query(None)) -> str:
    if lang in LANGUAGES:
        return lang
    return settings.default_language


def get_session_token(x_session_token: Optional[str] = Header(None)) -> Optional[str]:
    return x_session_token


def get_current_user(token: Optional[str] = Depends(get_session_token)) -> User:
    user = auth_service.current_user(token)
    if user is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != Role.ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def get_workspace(workspace_id: str) -> Workspace:
    ws = workspace_manager.get_workspace(workspace_id)
    if ws is None:
        raise HTTPException(status_code=404, detail="Workspace not found")
    return ws

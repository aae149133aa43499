"""Sign-in and user API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..models.user import LoginForm, PublicUser, User
from ..services.auth import auth_service
from .deps import get_current_user, get_session_token, require_admin

router = APIRouter(tags=["auth"])


def _public(user: User) -> PublicUser:
    return PublicUser.model_validate(user.model_dump(exclude={"password"}))


@router.post("/auth/login")
async def login(form: LoginForm):
    session = auth_service.login(form)
    if session is None:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    token, user = session
    return {"token": token, "user": _public(user)}


@router.post("/auth/logout")
async def logout(token: Optional[str] = Depends(get_session_token)):
    return {"logged_out": bool(token) and auth_service.logout(token)}


@router.get("/auth/me")
async def me(user: User = Depends(get_current_user)):
    return _public(user)


@router.get("/users")
async def list_users(admin: User = Depends(require_admin)):
    return [_public(u) for u in auth_service.store.list_users()]

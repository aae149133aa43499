"""User, session and practice-record models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field
import uuid


class Role(str, Enum):
    ADMIN = "admin"
    STUDENT = "student"


class ToolType(str, Enum):
    CHINESE = "chinese"
    ENGLISH = "english"
    POEM = "poem"


class User(BaseModel):
    id: str
    username: str
    password: Optional[str] = None  # students sign in without one
    role: Role = Role.STUDENT
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
    last_login_at: Optional[datetime] = None


class PublicUser(BaseModel):
    id: str
    username: str
    role: Role
    created_at: datetime
    last_login_at: Optional[datetime] = None


class LoginForm(BaseModel):
    username: str = Field(min_length=1)
    password: Optional[str] = None


class PracticeRecord(BaseModel):
    id: str = Field(default_factory=lambda: f"record-{uuid.uuid4().hex[:9]}")
    user_id: str
    username: str
    tool_type: ToolType
    action: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
    details: Optional[dict[str, Any]] = None


class PracticeRecordRequest(BaseModel):
    tool_type: ToolType
    action: str = Field(min_length=1)
    details: Optional[dict[str, Any]] = None


class PracticeStats(BaseModel):
    total: int = 0
    by_tool: dict[str, int] = Field(default_factory=dict)
    by_date: dict[str, int] = Field(default_factory=dict)

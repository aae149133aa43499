"""Archive job models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
import uuid


class ArchiveStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class ArchiveProgress(BaseModel):
    files_added: int = 0
    files_total: int = 0
    bytes_added: int = 0
    current_file: str = ""
    percent: float = 0.0
    message: str = ""


class ArchiveJob(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:8])
    workspace_id: str
    filename: str = "matched_files.zip"
    status: ArchiveStatus = ArchiveStatus.PENDING
    progress: ArchiveProgress = Field(default_factory=ArchiveProgress)
    archive_size: int = 0
    downloaded: bool = False
    expired: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
    completed_at: Optional[datetime] = None
    error: Optional[str] = None

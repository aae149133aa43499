"""Workspace summary models."""

from datetime import datetime

from pydantic import BaseModel, Field

from .progress import OperationState, ProgressSnapshot


class LoadSummary(BaseModel):
    workspace_id: str
    files_loaded: int = 0
    files_skipped: int = 0
    skipped_paths: list[str] = Field(default_factory=list)
    total_size: int = 0


class WorkspaceSummary(BaseModel):
    id: str
    created_at: datetime
    file_count: int = 0
    total_size: int = 0
    matched_count: int = 0
    load_state: OperationState = OperationState.IDLE
    match_state: OperationState = OperationState.IDLE
    archive_state: OperationState = OperationState.IDLE
    progress: dict[str, ProgressSnapshot] = Field(default_factory=dict)

"""Progress and operation-state models."""

from enum import Enum

from pydantic import BaseModel


class Phase(str, Enum):
    PROCESSING_FILES = "processing_files"
    CREATING_ZIP = "creating_zip"


class OperationState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ProgressSnapshot(BaseModel):
    phase: Phase
    active: bool = False
    percent: float = 0.0
    message: str = ""

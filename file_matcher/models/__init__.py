"""Data models."""

from .common import FileDescriptor, MatchedFile
from .match import FileTypeFilter, MatchOutcome, MatchResult, MatchStatus, OutcomeKind
from .progress import OperationState, Phase, ProgressSnapshot
from .archive import ArchiveJob, ArchiveStatus
from .user import PracticeRecord, Role, ToolType, User

__all__ = [
    "FileDescriptor",
    "MatchedFile",
    "FileTypeFilter",
    "MatchOutcome",
    "MatchResult",
    "MatchStatus",
    "OutcomeKind",
    "OperationState",
    "Phase",
    "ProgressSnapshot",
    "ArchiveJob",
    "ArchiveStatus",
    "PracticeRecord",
    "Role",
    "ToolType",
    "User",
]

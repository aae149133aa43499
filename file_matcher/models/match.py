"""Matching-related models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .common import MatchedFile


class FileTypeFilter(str, Enum):
    ALL = "all"
    PDF = "pdf"
    JPEG = "jpeg"
    PNG = "png"
    EXCEL = "excel"
    WORD = "word"
    POWERPOINT = "powerpoint"
    TEXT = "text"
    CSV = "csv"

    @property
    def extensions(self) -> Optional[frozenset[str]]:
        """Allowed lowercase extensions, or None for every type."""
        return _FILTER_EXTENSIONS[self]


_FILTER_EXTENSIONS: dict[FileTypeFilter, Optional[frozenset[str]]] = {
    FileTypeFilter.ALL: None,
    FileTypeFilter.PDF: frozenset({"pdf"}),
    FileTypeFilter.JPEG: frozenset({"jpg", "jpeg"}),
    FileTypeFilter.PNG: frozenset({"png"}),
    FileTypeFilter.EXCEL: frozenset({"xlsx", "xls"}),
    FileTypeFilter.WORD: frozenset({"docx", "doc"}),
    FileTypeFilter.POWERPOINT: frozenset({"pptx", "ppt"}),
    FileTypeFilter.TEXT: frozenset({"txt"}),
    FileTypeFilter.CSV: frozenset({"csv"}),
}


class MatchStatus(str, Enum):
    NO_FILES = "no_files"
    NO_CODES = "no_codes"
    INVALID_CODES = "invalid_codes"
    NO_FILES_OF_TYPE = "no_files_of_type"
    NO_MATCH = "no_match"
    MATCHED = "matched"


class OutcomeKind(str, Enum):
    VALIDATION_FAILURE = "validation_failure"
    INFO = "info"
    PARTIAL_SUCCESS = "partial_success"
    SUCCESS = "success"
    FAILURE = "failure"


class MatchRequest(BaseModel):
    codes: str = ""
    file_type: FileTypeFilter = FileTypeFilter.ALL


class MatchResult(BaseModel):
    matched_files: list[MatchedFile] = Field(default_factory=list)
    unmatched_codes: list[str] = Field(default_factory=list)
    searched_count: int = 0


class MatchOutcome(BaseModel):
    status: MatchStatus
    codes: list[str] = Field(default_factory=list)
    result: MatchResult = Field(default_factory=MatchResult)

    @property
    def kind(self) -> OutcomeKind:
        if self.status in (
            MatchStatus.NO_FILES,
            MatchStatus.NO_CODES,
            MatchStatus.INVALID_CODES,
            MatchStatus.NO_FILES_OF_TYPE,
        ):
            return OutcomeKind.VALIDATION_FAILURE
        if self.status == MatchStatus.NO_MATCH:
            return OutcomeKind.INFO
        if self.result.unmatched_codes:
            return OutcomeKind.PARTIAL_SUCCESS
        return OutcomeKind.SUCCESS

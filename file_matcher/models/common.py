"""Core shared models."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class FileDescriptor(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    path: str
    name: str
    size: int = Field(default=0, ge=0)
    mime_type: str = "application/octet-stream"
    # internal: the entry to read bytes from, never serialized
    handle: Optional[Any] = Field(default=None, exclude=True, repr=False)


class MatchedFile(FileDescriptor):
    matched_codes: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def matched(self) -> bool:
        return len(self.matched_codes) > 0

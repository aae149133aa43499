from __future__ import annotations

import asyncio
from typing import Optional

import pytest

from file_matcher.entries.base import EntryReadError, FileEntry
from file_matcher.entries.upload import UploadedDirectoryEntry, UploadedFileEntry
from file_matcher.models.common import FileDescriptor
from file_matcher.services.archive_manager import ArchiveManager
from file_matcher.services.workspace_manager import WorkspaceManager


class BrokenFileEntry(FileEntry):
    """A file that vanished between listing and reading."""

    def __init__(self, name: str, fail_on_size: bool = True):
        self.name = name
        self.fail_on_size = fail_on_size

    @property
    def size(self) -> int:
        if self.fail_on_size:
            raise EntryReadError(f"{self.name} vanished")
        return 10

    async def read_bytes(self) -> bytes:
        raise EntryReadError(f"{self.name} vanished")


class GatedFileEntry(FileEntry):
    """A file whose read blocks until the test opens the gate."""

    def __init__(self, name: str, data: bytes, gate: asyncio.Event):
        self.name = name
        self.data = data
        self.gate = gate

    @property
    def size(self) -> int:
        return len(self.data)

    async def read_bytes(self) -> bytes:
        await self.gate.wait()
        return self.data


def make_file(name: str, data: Optional[bytes] = None, content_type: Optional[str] = None) -> UploadedFileEntry:
    return UploadedFileEntry(name, data if data is not None else name.encode(), content_type)


def make_dir(name: str, *children, batch_size: int = 1) -> UploadedDirectoryEntry:
    return UploadedDirectoryEntry(name, list(children), batch_size=batch_size)


def make_descriptor(path: str, data: Optional[bytes] = None) -> FileDescriptor:
    name = path.rsplit("/", 1)[-1]
    entry = make_file(name, data)
    return FileDescriptor(path=path, name=name, size=entry.size, handle=entry)


@pytest.fixture
def workspaces() -> WorkspaceManager:
    return WorkspaceManager()


@pytest.fixture
def archives(workspaces: WorkspaceManager) -> ArchiveManager:
    return ArchiveManager(workspaces)

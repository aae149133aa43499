"""In-memory entries built from uploaded files."""

import logging
from typing import Optional

from .base import DirectoryEntry, Entry, EntryReader, FileEntry

logger = logging.getLogger(__name__)


class UploadedFileEntry(FileEntry):
    def __init__(self, name: str, data: bytes, content_type: Optional[str] = None):
        self.name = name
        self._data = data
        self._content_type = content_type

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def content_type(self) -> Optional[str]:
        return self._content_type

    async def read_bytes(self) -> bytes:
        return self._data


class _ListReader(EntryReader):
    def __init__(self, children: list[Entry], batch_size: int):
        self._children = children
        self._batch_size = max(1, batch_size)
        self._offset = 0

    async def read_batch(self) -> list[Entry]:
        batch = self._children[self._offset:self._offset + self._batch_size]
        self._offset += len(batch)
        return batch


class UploadedDirectoryEntry(DirectoryEntry):
    def __init__(self, name: str, children: Optional[list[Entry]] = None, batch_size: int = 100):
        self.name = name
        self.children: list[Entry] = children if children is not None else []
        self.batch_size = batch_size

    def reader(self) -> EntryReader:
        return _ListReader(self.children, self.batch_size)


def split_relative_path(relative_path: str) -> list[str]:
    """Split an uploaded file name into safe path segments."""
    normalized = relative_path.replace("\\", "/")
    return [part for part in normalized.split("/") if part not in ("", ".", "..")]


def build_upload_tree(
    uploads: list[tuple[str, bytes, Optional[str]]],
    batch_size: int = 100,
) -> list[Entry]:
    """Turn (relative_path, data, content_type) triples into top-level entries.

    Files sharing a folder prefix end up under the same directory entry, in
    upload order. A repeated path keeps the last upload.
    """
    root: dict = {}

    for relative_path, data, content_type in uploads:
        parts = split_relative_path(relative_path)
        if not parts:
            logger.warning(f"Ignoring upload with empty path: {relative_path!r}")
            continue
        node = root
        for folder in parts[:-1]:
            child = node.get(folder)
            if not isinstance(child, dict):
                child = {}
                node[folder] = child
            node = child
        node[parts[-1]] = UploadedFileEntry(parts[-1], data, content_type)

    def to_entries(node: dict) -> list[Entry]:
        entries: list[Entry] = []
        for name, value in node.items():
            if isinstance(value, dict):
                entries.append(UploadedDirectoryEntry(name, to_entries(value), batch_size))
            else:
                entries.append(value)
        return entries

    return to_entries(root)

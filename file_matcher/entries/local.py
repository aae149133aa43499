"""Entries backed by a directory on the host filesystem."""

import asyncio
import os
from pathlib import Path
from typing import Optional

from .base import DirectoryEntry, Entry, EntryReadError, EntryReader, FileEntry


class LocalFileEntry(FileEntry):
    def __init__(self, path: Path):
        self.path = Path(path)
        self.name = self.path.name

    @property
    def size(self) -> int:
        try:
            return self.path.stat().st_size
        except OSError as e:
            raise EntryReadError(f"Cannot stat {self.path}: {e}") from e

    async def read_bytes(self) -> bytes:
        try:
            return await asyncio.to_thread(self.path.read_bytes)
        except OSError as e:
            raise EntryReadError(f"Cannot read {self.path}: {e}") from e


class _ScandirReader(EntryReader):
    """Lists the directory once, then hands it out in batches."""

    def __init__(self, path: Path, batch_size: int):
        self._path = path
        self._batch_size = max(1, batch_size)
        self._children: Optional[list[Entry]] = None
        self._offset = 0

    def _list(self) -> list[Entry]:
        children: list[Entry] = []
        try:
            with os.scandir(self._path) as it:
                dir_entries = sorted(it, key=lambda d: d.name)
        except OSError as e:
            raise EntryReadError(f"Cannot list {self._path}: {e}") from e
        for d in dir_entries:
            try:
                if d.is_dir(follow_symlinks=False):
                    children.append(LocalDirectoryEntry(Path(d.path), self._batch_size))
                elif d.is_file():
                    children.append(LocalFileEntry(Path(d.path)))
            except OSError:
                continue
        return children

    async def read_batch(self) -> list[Entry]:
        if self._children is None:
            self._children = await asyncio.to_thread(self._list)
        batch = self._children[self._offset:self._offset + self._batch_size]
        self._offset += len(batch)
        return batch


class LocalDirectoryEntry(DirectoryEntry):
    def __init__(self, path: Path, batch_size: int = 100):
        self.path = Path(path)
        self.name = self.path.name
        self.batch_size = batch_size

    def reader(self) -> EntryReader:
        return _ScandirReader(self.path, self.batch_size)


def entry_for_path(path: Path, batch_size: int = 100) -> Entry:
    """Wrap a host path as a file or directory entry."""
    p = Path(path)
    if p.is_dir():
        return LocalDirectoryEntry(p, batch_size)
    return LocalFileEntry(p)

"""Abstract entry interface for dropped or uploaded file trees."""

from abc import ABC, abstractmethod
from typing import AsyncIterator, Optional


class EntryReadError(Exception):
    """An entry's bytes or children could not be read."""


class Entry(ABC):
    """A file or directory handed in by the host."""

    name: str = ""

    @property
    def is_file(self) -> bool:
        return isinstance(self, FileEntry)

    @property
    def is_directory(self) -> bool:
        return isinstance(self, DirectoryEntry)


class FileEntry(Entry):
    """Leaf entry with a size and a byte source."""

    @property
    @abstractmethod
    def size(self) -> int:
        """Byte length; raises EntryReadError if the file is gone."""
        ...

    @property
    def content_type(self) -> Optional[str]:
        """Type reported by the host, if any."""
        return None

    @abstractmethod
    async def read_bytes(self) -> bytes:
        """Return the complete file content."""
        ...


class EntryReader(ABC):
    """Paginated enumeration of a directory's children."""

    @abstractmethod
    async def read_batch(self) -> list[Entry]:
        """Return the next chunk of children, or an empty list when done."""
        ...


class DirectoryEntry(Entry):
    """Entry whose children are listed through a reader."""

    @abstractmethod
    def reader(self) -> EntryReader:
        ...

    async def iter_children(self) -> AsyncIterator[Entry]:
        """Yield every child, requesting batches until one comes back empty.

        Each call starts a fresh reader, so iteration always begins at the
        first child.
        """
        reader = self.reader()
        while True:
            batch = await reader.read_batch()
            if not batch:
                return
            for child in batch:
                yield child

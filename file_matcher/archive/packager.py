"""Pack matched files into an in-memory ZIP archive."""

import io
import logging
import zipfile
from typing import AsyncIterator

from pydantic import BaseModel

from ..entries.base import EntryReadError, FileEntry
from ..models.common import FileDescriptor

logger = logging.getLogger(__name__)


class PackagingError(Exception):
    """A selected file could not be added, or the archive could not be built."""


class PackagedFile(BaseModel):
    index: int
    total: int
    path: str
    size: int


class ArchivePackager:
    def __init__(self, compression: int = zipfile.ZIP_DEFLATED):
        self._buffer = io.BytesIO()
        self._zip = zipfile.ZipFile(self._buffer, "w", compression)
        self._closed = False

    async def package(self, files: list[FileDescriptor]) -> AsyncIterator[PackagedFile]:
        """Add files in order, yielding once each is inside the archive."""
        total = len(files)
        for i, file in enumerate(files):
            data = await self._read(file)
            arcname = self.archive_path(file)
            try:
                self._zip.writestr(arcname, data)
            except (OSError, ValueError, zipfile.BadZipFile) as e:
                raise PackagingError(f"Could not add {file.path}: {e}") from e
            yield PackagedFile(index=i + 1, total=total, path=arcname, size=len(data))

    def finalize(self) -> bytes:
        """Close the archive and return its bytes."""
        if not self._closed:
            try:
                self._zip.close()
            except (OSError, ValueError) as e:
                raise PackagingError(f"Could not finalize archive: {e}") from e
            self._closed = True
        return self._buffer.getvalue()

    def discard(self) -> None:
        """Drop whatever was written so far."""
        if not self._closed:
            self._zip.close()
            self._closed = True
        self._buffer = io.BytesIO()

    @staticmethod
    def archive_path(file: FileDescriptor) -> str:
        """Archive member name: the file's relative path, never flattened."""
        return file.path.replace("\\", "/").lstrip("/") or file.name

    async def _read(self, file: FileDescriptor) -> bytes:
        handle = file.handle
        if not isinstance(handle, FileEntry):
            raise PackagingError(f"No byte source for {file.path}")
        try:
            return await handle.read_bytes()
        except (EntryReadError, OSError) as e:
            logger.error(f"Read failed for {file.path}: {e}")
            raise PackagingError(f"Could not read {file.path}: {e}") from e


"""Flatten entry trees into file descriptors."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from pydantic import BaseModel, Field

from ..entries.base import DirectoryEntry, Entry, EntryReadError, FileEntry
from ..models.common import FileDescriptor
from .classifier import guess_mime_type

logger = logging.getLogger(__name__)

WalkProgressCallback = Callable[[int, int], Awaitable[None]]


class WalkResult(BaseModel):
    files: list[FileDescriptor] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self.files)


def _join(parent_path: str, name: str) -> str:
    return f"{parent_path}/{name}" if parent_path else name


async def walk_entries(
    entries: list[Entry],
    on_progress: Optional[WalkProgressCallback] = None,
) -> WalkResult:
    """Walk every top-level entry and return once all subtrees are done.

    Unreadable entries are skipped and listed in ``WalkResult.skipped``;
    the walk itself never fails because of them.
    """
    result = WalkResult()
    total = len(entries)
    if total == 0:
        return result

    completed = 0

    async def walk_top(entry: Entry) -> WalkResult:
        nonlocal completed
        partial = WalkResult()
        await _walk(entry, "", partial)
        completed += 1
        if on_progress:
            await on_progress(completed, total)
        return partial

    partials = await asyncio.gather(*(walk_top(e) for e in entries))
    for partial in partials:
        result.files.extend(partial.files)
        result.skipped.extend(partial.skipped)

    logger.info(f"Walk done: {len(result.files)} files, {len(result.skipped)} skipped")
    return result


async def _walk(entry: Entry, parent_path: str, result: WalkResult) -> None:
    path = _join(parent_path, entry.name)

    if isinstance(entry, FileEntry):
        try:
            size = entry.size
            mime_type = guess_mime_type(entry.name, entry.content_type)
        except (EntryReadError, OSError) as e:
            logger.warning(f"Skipping unreadable file {path}: {e}")
            result.skipped.append(path)
            return
        result.files.append(FileDescriptor(
            path=path,
            name=entry.name,
            size=size,
            mime_type=mime_type,
            handle=entry,
        ))

    elif isinstance(entry, DirectoryEntry):
        try:
            async for child in entry.iter_children():
                await _walk(child, path, result)
        except (EntryReadError, OSError) as e:
            logger.warning(f"Stopped listing {path}: {e}")
            result.skipped.append(path)

    else:
        logger.debug(f"Ignoring entry of unknown kind: {path}")

"""Archive job lifecycle."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from ..archive.packager import ArchivePackager, PackagingError
from ..config import settings
from ..models.archive import ArchiveJob, ArchiveProgress, ArchiveStatus
from ..models.progress import Phase
from .workspace_manager import WorkspaceManager, workspace_manager

logger = logging.getLogger(__name__)

ArchiveListener = Callable[[ArchiveJob], Awaitable[None]]


class NothingToArchiveError(Exception):
    """The workspace has no matched files."""


class ArchiveManager:
    def __init__(self, workspaces: WorkspaceManager):
        self._workspaces = workspaces
        self._jobs: dict[str, ArchiveJob] = {}
        self._archives: dict[str, bytes] = {}
        self._tasks: dict[str, asyncio.Task] = {}
        self._progress_listeners: dict[str, list[ArchiveListener]] = {}
        workspaces.add_delete_hook(self.forget_workspace)

    def create_job(self, workspace_id: str) -> ArchiveJob:
        """Reserve the workspace's archive slot for a new job.

        Raises KeyError, NothingToArchiveError or OperationBusyError.
        """
        ws = self._workspaces.get_workspace(workspace_id)
        if ws is None:
            raise KeyError(workspace_id)
        if not ws.last_match or not ws.last_match.matched_files:
            raise NothingToArchiveError("No matched files to download")

        ws.archive_op.begin()
        job = ArchiveJob(workspace_id=workspace_id, filename=settings.archive_filename)
        job.progress = ArchiveProgress(files_total=len(ws.last_match.matched_files))
        self._jobs[job.id] = job
        return job

    def get_job(self, job_id: str) -> Optional[ArchiveJob]:
        return self._jobs.get(job_id)

    def take_archive(self, job_id: str) -> Optional[bytes]:
        """Hand out a finished archive once and drop the reference."""
        data = self._archives.pop(job_id, None)
        job = self._jobs.get(job_id)
        if data is not None and job:
            job.downloaded = True
        return data

    def forget_workspace(self, workspace_id: str) -> None:
        """Drop every job, task and stored archive owned by a workspace."""
        job_ids = [jid for jid, job in self._jobs.items() if job.workspace_id == workspace_id]
        for jid in job_ids:
            task = self._tasks.pop(jid, None)
            if task and not task.done():
                task.cancel()
            self._jobs.pop(jid, None)
            self._archives.pop(jid, None)
            self._progress_listeners.pop(jid, None)
        if job_ids:
            logger.info(f"[{workspace_id}] Released {len(job_ids)} archive job(s)")

    def add_progress_listener(self, job_id: str, callback: ArchiveListener) -> None:
        self._progress_listeners.setdefault(job_id, []).append(callback)

    def remove_progress_listener(self, job_id: str, callback: ArchiveListener) -> None:
        listeners = self._progress_listeners.get(job_id, [])
        if callback in listeners:
            listeners.remove(callback)

    async def start_archive(self, job_id: str) -> None:
        job = self._jobs.get(job_id)
        if not job:
            return
        task = asyncio.create_task(self.run_archive(job_id))
        self._tasks[job_id] = task
        task.add_done_callback(lambda _t, jid=job_id: self._tasks.pop(jid, None))

    async def run_archive(self, job_id: str) -> ArchiveJob:
        job = self._jobs[job_id]
        ws = self._workspaces.get_workspace(job.workspace_id)
        if ws is None:
            job.status = ArchiveStatus.FAILED
            job.error = "Workspace no longer exists"
            await self._notify_progress(job)
            return job

        files = list(ws.last_match.matched_files) if ws.last_match else []
        reporter = ws.progress[Phase.CREATING_ZIP]
        job.status = ArchiveStatus.RUNNING
        job.progress.files_total = len(files)
        await reporter.start("Creating ZIP file...")
        await self._notify_progress(job)

        packager = ArchivePackager()
        try:
            async for step in packager.package(files):
                job.progress.files_added = step.index
                job.progress.bytes_added += step.size
                job.progress.current_file = step.path
                job.progress.percent = step.index / step.total * 100
                job.progress.message = f"Added {step.index}/{step.total}"
                await reporter.advance(step.index, step.total, job.progress.message)
                await self._notify_progress(job)

            data = packager.finalize()
            self._release_undownloaded(job.workspace_id)
            if job.id in self._jobs:
                self._archives[job.id] = data
            job.archive_size = len(data)
            job.status = ArchiveStatus.COMPLETED
            job.completed_at = datetime.now(tz=timezone.utc)
            job.progress.percent = 100.0
            job.progress.message = f"Archive ready. {len(files)} files, {len(data)} bytes."
            ws.archive_op.succeed()
            logger.info(f"[{job.id}] Packed {len(files)} files into {len(data)} bytes")

        except asyncio.CancelledError:
            packager.discard()
            job.status = ArchiveStatus.FAILED
            job.error = "Archive cancelled"
            ws.archive_op.fail(job.error)
            logger.info(f"[{job.id}] Packaging cancelled")
            raise
        except PackagingError as e:
            packager.discard()
            job.status = ArchiveStatus.FAILED
            job.error = str(e)
            ws.archive_op.fail(str(e))
            logger.error(f"[{job.id}] Packaging failed: {e}")
        except Exception as e:
            packager.discard()
            job.status = ArchiveStatus.FAILED
            job.error = str(e)
            ws.archive_op.fail(str(e))
            logger.exception(f"[{job.id}] Unexpected packaging error")
        finally:
            await reporter.finish()

        await self._notify_progress(job)
        return job

    def _release_undownloaded(self, workspace_id: str) -> None:
        """Keep at most one stored archive per workspace."""
        for jid, job in self._jobs.items():
            if job.workspace_id == workspace_id and self._archives.pop(jid, None) is not None:
                job.expired = True
                logger.info(f"[{jid}] Replaced by a newer archive before download")

    async def _notify_progress(self, job: ArchiveJob) -> None:
        for cb in list(self._progress_listeners.get(job.id, [])):
            try:
                await cb(job)
            except Exception:
                logger.exception(f"[{job.id}] Archive listener failed")


# Singleton
archive_manager = ArchiveManager(workspace_manager)

"""Workspace lifecycle: loading files and matching codes."""

import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional
import uuid

from ..entries.base import Entry
from ..models.common import FileDescriptor
from ..models.match import FileTypeFilter, MatchOutcome, MatchResult, MatchStatus
from ..models.progress import Phase, ProgressSnapshot
from ..models.workspace import LoadSummary, WorkspaceSummary
from .matcher import evaluate
from .operations import Operation
from .progress import ProgressReporter
from .walker import walk_entries

logger = logging.getLogger(__name__)

WorkspaceListener = Callable[[str, ProgressSnapshot], Awaitable[None]]


class Workspace:
    """One user's loaded files, last match and per-phase state."""

    def __init__(self):
        self.id = uuid.uuid4().hex[:8]
        self.created_at = datetime.now(tz=timezone.utc)
        self.files: list[FileDescriptor] = []
        self.skipped: list[str] = []
        self.last_match: Optional[MatchResult] = None
        self.progress = {phase: ProgressReporter(phase) for phase in Phase}
        self.load_op = Operation("load")
        self.match_op = Operation("match")
        self.archive_op = Operation("archive")

    def progress_snapshots(self) -> dict[str, ProgressSnapshot]:
        return {phase.value: reporter.snapshot for phase, reporter in self.progress.items()}

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self.files)

    def summary(self) -> WorkspaceSummary:
        return WorkspaceSummary(
            id=self.id,
            created_at=self.created_at,
            file_count=len(self.files),
            total_size=self.total_size,
            matched_count=len(self.last_match.matched_files) if self.last_match else 0,
            load_state=self.load_op.state,
            match_state=self.match_op.state,
            archive_state=self.archive_op.state,
            progress=self.progress_snapshots(),
        )


class WorkspaceManager:
    def __init__(self):
        self._workspaces: dict[str, Workspace] = {}
        self._listeners: dict[str, list[WorkspaceListener]] = {}
        self._delete_hooks: list[Callable[[str], None]] = []

    def create_workspace(self) -> Workspace:
        ws = Workspace()
        for reporter in ws.progress.values():
            reporter.add_listener(lambda snap, wid=ws.id: self._notify_progress(wid, snap))
        self._workspaces[ws.id] = ws
        return ws

    def get_workspace(self, workspace_id: str) -> Optional[Workspace]:
        return self._workspaces.get(workspace_id)

    def delete_workspace(self, workspace_id: str) -> bool:
        self._listeners.pop(workspace_id, None)
        if self._workspaces.pop(workspace_id, None) is None:
            return False
        for hook in self._delete_hooks:
            hook(workspace_id)
        logger.info(f"[{workspace_id}] Workspace deleted")
        return True

    def add_delete_hook(self, callback: Callable[[str], None]) -> None:
        """Register a callback that releases per-workspace state on delete."""
        self._delete_hooks.append(callback)

    def add_progress_listener(self, workspace_id: str, callback: WorkspaceListener) -> None:
        self._listeners.setdefault(workspace_id, []).append(callback)

    def remove_progress_listener(self, workspace_id: str, callback: WorkspaceListener) -> None:
        listeners = self._listeners.get(workspace_id, [])
        if callback in listeners:
            listeners.remove(callback)

    async def load_entries(self, workspace_id: str, entries: list[Entry]) -> LoadSummary:
        """Walk the entries and replace the workspace's file set.

        Raises KeyError for an unknown workspace and OperationBusyError when
        a load is already running.
        """
        ws = self._require(workspace_id)
        ws.load_op.begin()
        reporter = ws.progress[Phase.PROCESSING_FILES]
        await reporter.start("Processing files...")

        async def on_walk(done: int, total: int) -> None:
            await reporter.advance(done, total)

        try:
            result = await walk_entries(entries, on_walk)
            ws.files = result.files
            ws.skipped = result.skipped
            ws.last_match = None
            ws.load_op.succeed()
            logger.info(
                f"[{ws.id}] Loaded {len(ws.files)} files "
                f"({len(ws.skipped)} skipped, {ws.total_size} bytes)"
            )
        except Exception as e:
            ws.load_op.fail(str(e))
            raise
        finally:
            await reporter.finish()

        return LoadSummary(
            workspace_id=ws.id,
            files_loaded=len(ws.files),
            files_skipped=len(ws.skipped),
            skipped_paths=list(ws.skipped),
            total_size=ws.total_size,
        )

    def match(
        self,
        workspace_id: str,
        code_text: str,
        type_filter: FileTypeFilter = FileTypeFilter.ALL,
    ) -> MatchOutcome:
        ws = self._require(workspace_id)
        ws.match_op.begin()
        try:
            outcome = evaluate(ws.files, code_text, type_filter)
        except Exception as e:
            ws.match_op.fail(str(e))
            raise
        ws.match_op.succeed()

        if outcome.status in (MatchStatus.MATCHED, MatchStatus.NO_MATCH):
            ws.last_match = outcome.result
        logger.info(
            f"[{ws.id}] Match {outcome.status.value}: "
            f"{len(outcome.result.matched_files)} files, "
            f"{len(outcome.result.unmatched_codes)} unmatched codes"
        )
        return outcome

    def _require(self, workspace_id: str) -> Workspace:
        ws = self._workspaces.get(workspace_id)
        if ws is None:
            raise KeyError(workspace_id)
        return ws

    async def _notify_progress(self, workspace_id: str, snapshot: ProgressSnapshot) -> None:
        for cb in list(self._listeners.get(workspace_id, [])):
            try:
                await cb(workspace_id, snapshot)
            except Exception:
                logger.exception(f"[{workspace_id}] Progress listener failed")


# Singleton
workspace_manager = WorkspaceManager()

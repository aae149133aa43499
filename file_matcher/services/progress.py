"""Per-phase percentage tracking with async listeners."""

import logging
from typing import Awaitable, Callable, Optional

from ..models.progress import Phase, ProgressSnapshot

logger = logging.getLogger(__name__)

ProgressListener = Callable[[ProgressSnapshot], Awaitable[None]]


class ProgressReporter:
    """Tracks a single phase.

    ``advance`` never lowers the percentage, and the value only reaches 100
    once every unit of work is done. ``finish`` puts the reporter back to 0
    whether the phase succeeded or failed.
    """

    def __init__(self, phase: Phase):
        self.phase = phase
        self._snapshot = ProgressSnapshot(phase=phase)
        self._listeners: list[ProgressListener] = []

    @property
    def snapshot(self) -> ProgressSnapshot:
        return self._snapshot.model_copy()

    @property
    def percent(self) -> float:
        return self._snapshot.percent

    @property
    def active(self) -> bool:
        return self._snapshot.active

    def add_listener(self, callback: ProgressListener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: ProgressListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    async def start(self, message: str = "") -> None:
        self._snapshot = ProgressSnapshot(phase=self.phase, active=True, message=message)
        await self._notify()

    async def advance(self, done: int, total: int, message: Optional[str] = None) -> None:
        if total <= 0:
            return
        percent = 100.0 if done >= total else done / total * 100
        if percent < self._snapshot.percent:
            return
        self._snapshot.percent = percent
        if message is not None:
            self._snapshot.message = message
        await self._notify()

    async def finish(self) -> None:
        self._snapshot = ProgressSnapshot(phase=self.phase)
        await self._notify()

    async def _notify(self) -> None:
        snapshot = self.snapshot
        for cb in list(self._listeners):
            try:
                await cb(snapshot)
            except Exception:
                logger.exception(f"[{self.phase.value}] Progress listener failed")

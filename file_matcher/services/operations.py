"""Idle -> Running -> Succeeded | Failed state machine per operation."""

from typing import Optional

from ..models.progress import OperationState


class OperationBusyError(Exception):
    """An operation of the same kind is already running."""


class Operation:
    def __init__(self, name: str):
        self.name = name
        self.state = OperationState.IDLE
        self.error: Optional[str] = None

    @property
    def is_running(self) -> bool:
        return self.state == OperationState.RUNNING

    def begin(self) -> None:
        if self.is_running:
            raise OperationBusyError(f"{self.name} is already running")
        self.state = OperationState.RUNNING
        self.error = None

    def succeed(self) -> None:
        self.state = OperationState.SUCCEEDED

    def fail(self, error: str) -> None:
        self.state = OperationState.FAILED
        self.error = error

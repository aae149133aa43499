"""Tests for progress reporting and operation state."""

from __future__ import annotations

import pytest

from file_matcher.models.progress import OperationState, Phase, ProgressSnapshot
from file_matcher.services.operations import Operation, OperationBusyError
from file_matcher.services.progress import ProgressReporter


@pytest.mark.asyncio
class TestProgressReporter:
    async def test_phase_lifecycle(self) -> None:
        reporter = ProgressReporter(Phase.CREATING_ZIP)
        seen: list[ProgressSnapshot] = []

        async def listener(snapshot: ProgressSnapshot) -> None:
            seen.append(snapshot)

        reporter.add_listener(listener)
        await reporter.start()
        for i in range(1, 4):
            await reporter.advance(i, 3)
        await reporter.finish()

        percents = [s.percent for s in seen]
        assert percents[0] == 0.0
        assert seen[0].active
        assert percents[-2] == 100.0
        assert percents[-1] == 0.0
        assert not seen[-1].active
        assert {s.phase for s in seen} == {Phase.CREATING_ZIP}
        assert percents[1:-1] == sorted(percents[1:-1])

    async def test_never_goes_backwards(self) -> None:
        reporter = ProgressReporter(Phase.PROCESSING_FILES)
        await reporter.start()
        await reporter.advance(2, 4)
        await reporter.advance(1, 4)
        assert reporter.percent == 50.0

    async def test_hundred_only_when_done(self) -> None:
        reporter = ProgressReporter(Phase.PROCESSING_FILES)
        await reporter.start()
        await reporter.advance(999, 1000)
        assert reporter.percent < 100.0
        await reporter.advance(1000, 1000)
        assert reporter.percent == 100.0

    async def test_restart_resets(self) -> None:
        reporter = ProgressReporter(Phase.PROCESSING_FILES)
        await reporter.start()
        await reporter.advance(1, 1)
        await reporter.start("again")
        assert reporter.percent == 0.0
        assert reporter.active
        assert reporter.snapshot.message == "again"

    async def test_failing_listener_does_not_break_reporting(self) -> None:
        reporter = ProgressReporter(Phase.PROCESSING_FILES)

        async def bad(snapshot: ProgressSnapshot) -> None:
            raise RuntimeError("boom")

        reporter.add_listener(bad)
        await reporter.start()
        await reporter.advance(1, 2)
        assert reporter.percent == 50.0


class TestOperation:
    def test_rejects_while_running(self) -> None:
        op = Operation("archive")
        op.begin()
        with pytest.raises(OperationBusyError):
            op.begin()

    def test_can_restart_after_finish(self) -> None:
        op = Operation("load")
        op.begin()
        op.fail("disk on fire")
        assert op.state == OperationState.FAILED
        assert op.error == "disk on fire"

        op.begin()
        assert op.error is None
        op.succeed()
        assert op.state == OperationState.SUCCEEDED

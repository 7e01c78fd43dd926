from __future__ import annotations

import asyncio

import pytest

from pymuni.scheduler import PollScheduler, SchedulerState


class _TickCounter:
    def __init__(self, *, delay: float = 0.0, fail_first: bool = False) -> None:
        self.count = 0
        self.in_flight = 0
        self.max_in_flight = 0
        self.ticked = asyncio.Event()
        self._delay = delay
        self._fail_first = fail_first

    async def __call__(self) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self._delay:
                await asyncio.sleep(self._delay)
            self.count += 1
            self.ticked.set()
            if self._fail_first and self.count == 1:
                raise RuntimeError("boom")
        finally:
            self.in_flight -= 1

    async def wait(self, timeout: float = 1.0) -> None:
        await asyncio.wait_for(self.ticked.wait(), timeout)
        self.ticked.clear()


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        PollScheduler(_TickCounter(), interval=0)


@pytest.mark.asyncio
async def test_start_ticks_immediately() -> None:
    ticks = _TickCounter()
    scheduler = PollScheduler(ticks, interval=60)
    assert scheduler.state is SchedulerState.STOPPED

    scheduler.start()
    await ticks.wait()

    assert ticks.count == 1
    assert scheduler.state is SchedulerState.ACTIVE
    await scheduler.stop()
    assert scheduler.state is SchedulerState.STOPPED


@pytest.mark.asyncio
async def test_ticks_repeat_every_interval() -> None:
    ticks = _TickCounter()
    async with PollScheduler(ticks, interval=0.01):
        await asyncio.sleep(0.1)
    count = ticks.count
    assert count >= 3

    await asyncio.sleep(0.05)
    assert ticks.count == count


@pytest.mark.asyncio
async def test_suspend_then_resume_fires_one_immediate_tick() -> None:
    ticks = _TickCounter()
    scheduler = PollScheduler(ticks, interval=60)
    scheduler.start()
    await ticks.wait()

    scheduler.set_hidden(True)
    assert scheduler.state is SchedulerState.SUSPENDED
    await asyncio.sleep(0.05)
    assert ticks.count == 1

    scheduler.set_hidden(False)
    scheduler.set_hidden(False)
    assert scheduler.state is SchedulerState.ACTIVE
    await ticks.wait()
    await asyncio.sleep(0.05)

    assert ticks.count == 2
    await scheduler.stop()


@pytest.mark.asyncio
async def test_no_ticks_while_hidden() -> None:
    ticks = _TickCounter()
    scheduler = PollScheduler(ticks, interval=0.01)
    scheduler.start()
    await ticks.wait()

    scheduler.set_hidden(True)
    count = ticks.count
    await asyncio.sleep(0.1)

    assert ticks.count == count
    await scheduler.stop()


@pytest.mark.asyncio
async def test_hiding_cancels_in_flight_tick() -> None:
    ticks = _TickCounter(delay=0.2)
    scheduler = PollScheduler(ticks, interval=60)
    scheduler.start()
    await asyncio.sleep(0.01)
    assert ticks.in_flight == 1

    scheduler.set_hidden(True)
    await asyncio.sleep(0.3)

    assert ticks.count == 0
    assert ticks.in_flight == 0
    await scheduler.stop()


@pytest.mark.asyncio
async def test_start_while_hidden_waits_for_visibility() -> None:
    ticks = _TickCounter()
    scheduler = PollScheduler(ticks, interval=60)
    scheduler.set_hidden(True)

    scheduler.start()
    await asyncio.sleep(0.05)
    assert scheduler.state is SchedulerState.SUSPENDED
    assert ticks.count == 0

    scheduler.set_hidden(False)
    await ticks.wait()
    assert ticks.count == 1
    await scheduler.stop()


@pytest.mark.asyncio
async def test_visibility_changes_ignored_when_stopped() -> None:
    ticks = _TickCounter()
    scheduler = PollScheduler(ticks, interval=60)

    scheduler.set_hidden(False)
    await asyncio.sleep(0.02)

    assert scheduler.state is SchedulerState.STOPPED
    assert ticks.count == 0


@pytest.mark.asyncio
async def test_slow_ticks_never_overlap() -> None:
    ticks = _TickCounter(delay=0.03)
    async with PollScheduler(ticks, interval=0.005):
        await asyncio.sleep(0.15)

    assert ticks.count >= 2
    assert ticks.max_in_flight == 1


@pytest.mark.asyncio
async def test_failing_tick_does_not_stop_loop() -> None:
    ticks = _TickCounter(fail_first=True)
    async with PollScheduler(ticks, interval=0.01):
        await ticks.wait()
        await ticks.wait()

    assert ticks.count >= 2

"""Poll scheduler: drives the feed cycle on a fixed period.

States:

* ``ACTIVE``: a background task ticks immediately, then every
  ``interval`` seconds.
* ``SUSPENDED``: the view is hidden; the task is cancelled, so no ticks
  fire and no requests go out. Becoming visible again ticks at once and
  restarts the period from that moment.
* ``STOPPED``: before :meth:`PollScheduler.start` and after
  :meth:`PollScheduler.stop`.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any

from pymuni._constants import DEFAULT_POLL_INTERVAL

_logger = logging.getLogger(__name__)


class SchedulerState(StrEnum):
    STOPPED = "stopped"
    ACTIVE = "active"
    SUSPENDED = "suspended"


class PollScheduler:
    """Run ``tick`` periodically while the view is visible.

    Ticks from this scheduler never overlap each other: the next sleep
    only starts once the previous tick has returned.

    Usage::

        async with PollScheduler(view.tick, interval=config.poll_interval) as scheduler:
            ...
            scheduler.set_hidden(True)
    """

    def __init__(
        self,
        tick: Callable[[], Awaitable[Any]],
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._tick = tick
        self._interval = interval
        self._state = SchedulerState.STOPPED
        self._hidden = False
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def interval(self) -> float:
        return self._interval

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> PollScheduler:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    def start(self) -> None:
        """Begin polling. Must be called from a running event loop."""
        if self._state is not SchedulerState.STOPPED:
            return
        if self._hidden:
            self._state = SchedulerState.SUSPENDED
            return
        self._state = SchedulerState.ACTIVE
        self._spawn()

    async def stop(self) -> None:
        self._state = SchedulerState.STOPPED
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def set_hidden(self, hidden: bool) -> None:
        """Feed the visibility signal into the state machine."""
        self._hidden = hidden
        if self._state is SchedulerState.STOPPED:
            return

        if hidden and self._state is SchedulerState.ACTIVE:
            _logger.debug("View hidden; suspending polling")
            self._state = SchedulerState.SUSPENDED
            self._cancel()
        elif not hidden and self._state is SchedulerState.SUSPENDED:
            _logger.debug("View visible; resuming polling")
            self._state = SchedulerState.ACTIVE
            self._spawn()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _spawn(self) -> None:
        self._cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(), name="pymuni-poll")

    def _cancel(self) -> None:
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()

    async def _run(self) -> None:
        while True:
            try:
                await self._tick()
            except Exception:
                _logger.error("Poll tick raised; will retry next period", exc_info=True)
            await asyncio.sleep(self._interval)

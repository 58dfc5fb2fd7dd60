# src/flappy/loop.py
from __future__ import annotations
import asyncio
import contextlib
import logging
from typing import Callable, Optional
from .config import TICK_S

log = logging.getLogger(__name__)


class GameLoop:
    """
    Fixed-cadence ticker on the running asyncio loop.
    - step() is called once per tick, never two at a time.
    - step() returning False ends the loop.
    - Ticks are scheduled against absolute deadlines so a slow tick doesn't
      shift every later one; a late tick runs immediately.
    """

    def __init__(self, step: Callable[[], bool], interval_s: float = TICK_S):
        assert interval_s > 0, "interval_s must be > 0"
        self.step = step
        self.interval_s = float(interval_s)
        self.ticks = 0
        self._task: Optional[asyncio.Task] = None
        self._stopping = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        if self.running:
            return False
        self._stopping = False
        self._task = asyncio.get_running_loop().create_task(self._run())
        log.debug("loop started (%.1f ms/tick)", self.interval_s * 1000.0)
        return True

    def stop(self):
        """Cancel pending ticks. Safe to call any number of times."""
        task = self._task
        if task is None or task.done():
            return
        if task is asyncio.current_task():
            # called from step(): finish this tick, keep the task until _run returns
            self._stopping = True
            return
        self._task = None
        task.cancel()
        log.debug("loop cancelled after %d ticks", self.ticks)

    async def wait(self):
        task = self._task
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self):
        loop = asyncio.get_running_loop()
        next_at = loop.time()
        while True:
            self.ticks += 1
            if not self.step() or self._stopping:
                break
            next_at += self.interval_s
            delay = next_at - loop.time()
            if delay < 0.0:  # fell behind: don't try to catch up with a burst
                next_at = loop.time()
                delay = 0.0
            await asyncio.sleep(delay)
        log.debug("loop finished after %d ticks", self.ticks)

"""Background task enforcing the retention window of the activity log."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

import anyio

logger = logging.getLogger(__name__)


class ActivityRetentionSweeper:
    """Run ``purge`` every ``interval`` seconds until stopped.

    ``purge`` is a blocking callable returning the number of deleted records;
    it runs in a worker thread so the event loop is never blocked.
    """

    def __init__(self, purge: Callable[[], int], *, interval: float) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._purge = purge
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="activity-retention-sweeper")
        logger.info("Activity retention sweeper started (every %ss)", self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Activity retention sweeper stopped")

    async def sweep_once(self) -> int:
        """Run a single purge and return how many records were removed."""

        try:
            deleted = await anyio.to_thread.run_sync(self._purge)
        except Exception as exc:
            logger.error("Activity retention sweep failed: %s", exc)
            return 0
        if deleted:
            logger.info("Removed %s expired activity records", deleted)
        return deleted

    async def _run(self) -> None:
        while True:
            await self.sweep_once()
            await asyncio.sleep(self._interval)


__all__ = ["ActivityRetentionSweeper"]

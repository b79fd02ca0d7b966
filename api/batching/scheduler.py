"""
Periodic batching scheduler.

Runs two jobs on the event loop: draining the add queue into a staged
selection update, and committing the staged update. Each tick is one
synchronous call, so it never interleaves with request handlers.
"""

import asyncio
from typing import Callable, List

from ..shared.logger import get_logger
from ..store.selection import SelectionStore
from .add_queue import AddQueue

logger = get_logger(__name__)


class BatchScheduler:
    """
    Arms and disarms the drain and commit jobs.

    ``start`` must be called from a running event loop. ``stop`` is safe to
    call at any time, any number of times.
    """

    def __init__(
        self,
        add_queue: AddQueue,
        selection_store: SelectionStore,
        add_batch_interval: float = 10.0,
        commit_interval: float = 1.0,
    ):
        """Initialize the scheduler.

        Args:
            add_queue: Queue drained on every add batch tick
            selection_store: Store whose pending update is committed
            add_batch_interval: Seconds between drains
            commit_interval: Seconds between commits
        """
        self._add_queue = add_queue
        self._selection_store = selection_store
        self._add_batch_interval = add_batch_interval
        self._commit_interval = commit_interval
        self._tasks: List[asyncio.Task] = []
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Arm both jobs on the running event loop."""
        if self._running:
            return

        self._running = True
        self._tasks = [
            asyncio.create_task(
                self._run_periodic("add batch", self._add_batch_interval, self.drain_tick)
            ),
            asyncio.create_task(
                self._run_periodic("commit", self._commit_interval, self.commit_tick)
            ),
        ]
        logger.info(
            "Batching started: add batch every %.1fs, commit every %.1fs",
            self._add_batch_interval,
            self._commit_interval,
        )

    def stop(self) -> None:
        """Disarm both jobs. No drain or commit runs afterwards."""
        was_running = self._running
        self._running = False

        for task in self._tasks:
            task.cancel()
        self._tasks = []

        if was_running:
            logger.info("Batching stopped")

    def drain_tick(self) -> None:
        """Drain the add queue once."""
        if not self._running:
            return
        self._add_queue.drain()

    def commit_tick(self) -> None:
        """Commit the pending selection update once, if any."""
        if not self._running:
            return
        committed = self._selection_store.commit_pending()
        if committed is not None:
            logger.info("Committed selection: %d items", len(committed.selected_ids))

    async def _run_periodic(self, name: str, interval: float, job: Callable[[], None]) -> None:
        while self._running:
            await asyncio.sleep(interval)
            if not self._running:
                break
            try:
                job()
            except Exception:
                # A failed tick must not stop later ticks
                logger.exception("Error in %s tick", name)

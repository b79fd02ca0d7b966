"""
Deduplicating add queue.

Ids requested for addition wait here until the scheduler drains them into a
staged selection update.
"""

from typing import Dict, List, Sequence

from ..shared.logger import get_logger
from ..store.selection import Selection, SelectionStore

logger = get_logger(__name__)


def _dedup(ids: Sequence[int]) -> List[int]:
    """Drop repeated ids, keeping first occurrences in order."""
    return list(dict.fromkeys(ids))


class AddQueue:
    """
    Staging set of ids waiting to join the selection.

    Shares the selection store's lock so enqueue and drain run to completion
    against a consistent committed selection.
    """

    def __init__(self, selection_store: SelectionStore):
        self._selection_store = selection_store
        # dict keeps insertion order; values are unused
        self._queue: Dict[int, None] = {}

    @property
    def size(self) -> int:
        with self._selection_store.lock:
            return len(self._queue)

    def enqueue(self, ids: Sequence[int]) -> List[int]:
        """Queue ids for addition.

        Ids already queued or already in the committed selection are skipped.

        Args:
            ids: Ids to add, in any range

        Returns:
            Ids that were queued by this call, in input order
        """
        accepted = []
        skipped = 0

        with self._selection_store.lock:
            selected = set(self._selection_store.read().selected_ids)
            for item_id in ids:
                if item_id in self._queue or item_id in selected:
                    skipped += 1
                    continue
                self._queue[item_id] = None
                accepted.append(item_id)

        if accepted:
            logger.info("Added %d items to queue", len(accepted))
        if skipped:
            logger.info("Skipped %d duplicates", skipped)

        return accepted

    def drain(self) -> bool:
        """Fold every queued id into a staged selection update.

        The merge base is the committed selection at drain time. The staged
        update replaces any update that was already pending.

        Returns:
            True if an update was staged, False if the queue was empty
        """
        with self._selection_store.lock:
            if not self._queue:
                return False

            batch = list(self._queue)
            current = self._selection_store.read()
            self._selection_store.stage(
                Selection(
                    selected_ids=_dedup(current.selected_ids + batch),
                    order=_dedup(current.order + batch),
                )
            )
            # Cleared only once staged, so a failed drain keeps the batch
            self._queue.clear()

        logger.info("Processing batch of %d items", len(batch))
        return True

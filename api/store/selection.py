"""
Selection store for the item picker backend.

Holds the committed selection (what readers see) and a single pending
update slot. Updates are staged and become visible when the scheduler
commits them; removals apply to the committed selection immediately.

Known gap: ``remove`` does not touch the pending update, so a staged update
that still contains a removed id brings it back on the next commit.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..shared.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Selection:
    """
    A selection snapshot.

    ``selected_ids`` carries membership, ``order`` the display order. The two
    are stored as given; ``order`` is not required to match ``selected_ids``.
    """

    selected_ids: List[int] = field(default_factory=list)
    order: List[int] = field(default_factory=list)

    def copy(self) -> "Selection":
        return Selection(selected_ids=list(self.selected_ids), order=list(self.order))

    def to_dict(self) -> Dict[str, Any]:
        return {"selectedIds": list(self.selected_ids), "order": list(self.order)}


@dataclass
class RemovalResult:
    """Outcome of a removal, with the committed selection after it."""

    removed: List[int]
    selected_ids: List[int]
    order: List[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "removed": self.removed,
            "selectedIds": self.selected_ids,
            "order": self.order,
        }


class SelectionStore:
    """
    Committed selection plus one pending update.

    Every operation holds ``lock`` for its whole duration. The lock is
    re-entrant and shared with the add queue, which reads the committed
    selection while holding it.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self._committed = Selection()
        self._pending: Optional[Selection] = None

    def read(self) -> Selection:
        """Return a copy of the committed selection."""
        with self.lock:
            return self._committed.copy()

    def stage(self, selection: Selection) -> None:
        """Stage a selection for the next commit, replacing any pending one."""
        with self.lock:
            self._pending = selection.copy()

    def pending(self) -> Optional[Selection]:
        """Return a copy of the pending update, or None."""
        with self.lock:
            return self._pending.copy() if self._pending is not None else None

    def has_pending(self) -> bool:
        with self.lock:
            return self._pending is not None

    def commit_pending(self) -> Optional[Selection]:
        """Promote the pending update to the committed selection.

        Returns:
            The committed selection, or None if nothing was pending
        """
        with self.lock:
            if self._pending is None:
                return None
            self._committed = self._pending
            self._pending = None
            return self._committed.copy()

    def write(self, selection: Selection) -> None:
        """Overwrite the committed selection without staging."""
        with self.lock:
            self._committed = selection.copy()

    def remove(self, ids: Sequence[int]) -> RemovalResult:
        """Remove ids from the committed selection.

        Only ids that were selected are reported, in input order, once each.
        Removing absent ids leaves the selection unchanged.

        Args:
            ids: Ids to remove

        Returns:
            RemovalResult with the removed ids and the resulting selection
        """
        with self.lock:
            selected = set(self._committed.selected_ids)
            removed = []
            for item_id in ids:
                if item_id in selected:
                    removed.append(item_id)
                    selected.discard(item_id)

            to_drop = set(ids)
            self._committed = Selection(
                selected_ids=[i for i in self._committed.selected_ids if i not in to_drop],
                order=[i for i in self._committed.order if i not in to_drop],
            )

            if removed:
                logger.info("Removed %d items from selection", len(removed))

            return RemovalResult(
                removed=removed,
                selected_ids=list(self._committed.selected_ids),
                order=list(self._committed.order),
            )

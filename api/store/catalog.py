"""
Item catalog for the item picker backend.

The catalog is a virtual range of synthetic items ``[1, total_items]`` plus
an overlay of explicitly appended items whose ids fall outside that range.
Synthetic items are materialized on demand and cached, so an item's
``created_at`` is stable across lookups.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..shared.logger import get_logger

logger = get_logger(__name__)


def _utc_timestamp() -> str:
    """Return the current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Item:
    """A single catalog item."""

    id: int
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert item to its wire representation."""
        return {"id": self.id, "createdAt": self.created_at}


@dataclass
class Page:
    """One page of a catalog listing."""

    total: int
    items: List[Item] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"total": self.total, "items": [item.to_dict() for item in self.items]}


class ItemCatalog:
    """
    Virtual item range with an overlay of appended items.

    Listing never includes overlay items; they are reachable through
    ``get_by_ids`` only.
    """

    def __init__(self, total_items: int):
        """Initialize the catalog.

        Args:
            total_items: Size of the synthetic id range ``[1, total_items]``
        """
        self._total_items = total_items
        self._synthetic: Dict[int, Item] = {}
        self._appended: Dict[int, Item] = {}
        self._lock = threading.Lock()

    @property
    def total_items(self) -> int:
        return self._total_items

    def in_range(self, item_id: int) -> bool:
        return 1 <= item_id <= self._total_items

    def has_id(self, item_id: int) -> bool:
        """Check whether an id is synthetic or has been appended."""
        if self.in_range(item_id):
            return True
        with self._lock:
            return item_id in self._appended

    def _materialize(self, item_id: int) -> Item:
        # Caller holds the lock.
        item = self._synthetic.get(item_id)
        if item is None:
            item = Item(id=item_id, created_at=_utc_timestamp())
            self._synthetic[item_id] = item
        return item

    def list(
        self,
        filter_id: Optional[str] = None,
        offset: int = 0,
        limit: int = 50,
        exclude_ids: Iterable[int] = (),
    ) -> Page:
        """List a page of synthetic items.

        Args:
            filter_id: Substring matched against the decimal form of each id
            offset: Number of matching items to skip
            limit: Maximum number of items to return
            exclude_ids: Ids removed from the listing before filtering

        Returns:
            Page with the total number of matches and the requested slice
        """
        excluded = set(exclude_ids)

        with self._lock:
            if not filter_id and not excluded:
                start_id = offset + 1
                end_id = min(start_id + limit, self._total_items + 1)
                items = [self._materialize(item_id) for item_id in range(start_id, end_id)]
                return Page(total=self._total_items, items=items)

            # Full scan; O(total_items) per call.
            items = []
            total = 0
            for item_id in range(1, self._total_items + 1):
                if item_id in excluded:
                    continue
                if filter_id and filter_id not in str(item_id):
                    continue

                total += 1
                if total <= offset or len(items) >= limit:
                    continue
                items.append(self._materialize(item_id))

        return Page(total=total, items=items)

    def get_by_ids(self, ids: Sequence[int]) -> List[Item]:
        """Look up items by id, omitting ids that do not exist."""
        result = []
        with self._lock:
            for item_id in ids:
                if self.in_range(item_id):
                    result.append(self._materialize(item_id))
                elif item_id in self._appended:
                    result.append(self._appended[item_id])
        return result

    def append(self, ids: Sequence[int]) -> List[int]:
        """Create overlay items for out-of-range ids.

        Ids inside the synthetic range or already appended are skipped.
        Every item created by one call shares the same ``created_at``.

        Returns:
            Ids that were newly created, in input order
        """
        now = _utc_timestamp()
        added = []

        with self._lock:
            for item_id in ids:
                if self.in_range(item_id) or item_id in self._appended:
                    continue
                self._appended[item_id] = Item(id=item_id, created_at=now)
                added.append(item_id)

        if added:
            logger.info("Appended %d items to catalog", len(added))
        return added

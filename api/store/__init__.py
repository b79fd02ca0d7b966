"""
In-memory store package.

Provides the item catalog and the selection store.
"""

from .catalog import Item, ItemCatalog, Page
from .selection import RemovalResult, Selection, SelectionStore

__all__ = [
    "Item",
    "ItemCatalog",
    "Page",
    "Selection",
    "SelectionStore",
    "RemovalResult",
]

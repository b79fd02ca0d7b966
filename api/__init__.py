"""
API package for the item picker FastAPI backend.

This package provides the REST API endpoints for:
- Item listing and lookup (items.py)
- Add queue (queue.py)
- Selection reads, updates and removals (selection.py)
- System health and info (system.py)
- In-memory catalog and selection store (store/)
- Deferred add and commit batching (batching/)
"""

from .settings import AppSettings
from .state import AppState, get_app_state

__all__ = [
    "AppSettings",
    "AppState",
    "get_app_state",
]

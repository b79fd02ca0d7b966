"""
Application state container.

One AppState owns the catalog, the selection store, the add queue and the
scheduler. It is created with the FastAPI app and reached from endpoints
through ``Depends(get_app_state)``.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from .batching import AddQueue, BatchScheduler
from .settings import AppSettings
from .shared.logger import get_logger
from .store import ItemCatalog, SelectionStore

logger = get_logger(__name__)


@dataclass
class AppState:
    """All in-memory state of one backend instance."""

    settings: AppSettings
    catalog: ItemCatalog
    selection_store: SelectionStore
    add_queue: AddQueue
    scheduler: BatchScheduler

    @classmethod
    def create(cls, settings: Optional[AppSettings] = None) -> "AppState":
        """Build a fresh, isolated state. The scheduler is not started."""
        settings = settings or AppSettings()
        catalog = ItemCatalog(settings.total_items)
        selection_store = SelectionStore()
        add_queue = AddQueue(selection_store)
        scheduler = BatchScheduler(
            add_queue,
            selection_store,
            add_batch_interval=settings.add_batch_interval,
            commit_interval=settings.commit_interval,
        )
        logger.debug("Created app state with %d catalog items", settings.total_items)
        return cls(
            settings=settings,
            catalog=catalog,
            selection_store=selection_store,
            add_queue=add_queue,
            scheduler=scheduler,
        )

    def start(self) -> None:
        """Arm the scheduler. Requires a running event loop."""
        self.scheduler.start()

    def shutdown(self) -> None:
        """Stop the scheduler. Safe to call repeatedly or before start."""
        self.scheduler.stop()


def get_app_state(request: Request) -> AppState:
    """FastAPI dependency returning the state attached to the app."""
    return request.app.state.picker

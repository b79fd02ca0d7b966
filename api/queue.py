"""Add queue API endpoints."""

from fastapi import APIRouter, Depends

from .items import IdsRequest
from .shared.validation import require_id_list
from .state import AppState, get_app_state

router = APIRouter(prefix="/queue")


@router.post("/add")
async def add_to_queue(body: IdsRequest, state: AppState = Depends(get_app_state)):
    """Queue ids for addition to the selection.

    Accepted ids join the selection after the next add batch and commit.
    """
    ids = require_id_list(body.ids, "ids", allow_empty=False)
    return {"accepted": state.add_queue.enqueue(ids)}


@router.get("/status")
async def queue_status(state: AppState = Depends(get_app_state)):
    """Report queue size and whether an update is waiting for commit."""
    return {
        "size": state.add_queue.size,
        "pending": state.selection_store.has_pending(),
        "running": state.scheduler.running,
    }

"""
Selection API routes for the item picker backend.

Reads always return the committed selection. Updates are staged and become
visible after the next commit tick; removals apply immediately.
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from .items import IdsRequest
from .shared.errors import ApiError, ErrorCode
from .shared.validation import require_id_list
from .state import AppState, get_app_state
from .store import Selection

router = APIRouter(prefix="/selection")


class SelectionUpdateRequest(BaseModel):
    """Body for a full selection replacement."""
    selectedIds: Any = None
    order: Any = None


@router.get("")
async def get_selection(state: AppState = Depends(get_app_state)):
    """Get the committed selection."""
    return state.selection_store.read().to_dict()


@router.post("/update")
async def update_selection(
    body: SelectionUpdateRequest,
    state: AppState = Depends(get_app_state),
):
    """Stage a selection replacement for the next commit."""
    # Both shapes are checked before any entries
    if not isinstance(body.selectedIds, list):
        raise ApiError(ErrorCode.INVALID_SELECTED_IDS, "selectedIds must be an array")
    if not isinstance(body.order, list):
        raise ApiError(ErrorCode.INVALID_ORDER, "order must be an array")

    selected_ids = require_id_list(
        body.selectedIds,
        "selectedIds",
        shape_code=ErrorCode.INVALID_SELECTED_IDS,
        entry_code=ErrorCode.INVALID_SELECTED_IDS,
    )
    order = require_id_list(
        body.order,
        "order",
        shape_code=ErrorCode.INVALID_ORDER,
        entry_code=ErrorCode.INVALID_ORDER_IDS,
    )
    state.selection_store.stage(Selection(selected_ids=selected_ids, order=order))
    return {"ok": True}


@router.post("/remove")
async def remove_from_selection(body: IdsRequest, state: AppState = Depends(get_app_state)):
    """Remove ids from the committed selection immediately."""
    ids = require_id_list(body.ids, "ids")
    result = state.selection_store.remove(ids)
    return {"ok": True, **result.to_dict()}

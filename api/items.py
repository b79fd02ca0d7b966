"""
Item API routes for the item picker backend.

Listing with filtering and pagination, batch lookup and appending
out-of-range items.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from .shared.errors import ApiError, ErrorCode
from .shared.validation import (
    parse_exclude_ids,
    parse_filter_id,
    parse_int_param,
    require_id_list,
)
from .state import AppState, get_app_state

router = APIRouter()

MAX_LIMIT = 1000
DEFAULT_LIMIT = 50


class IdsRequest(BaseModel):
    """Body carrying a list of ids, validated by the endpoint."""
    ids: Any = None


@router.get("/items")
async def list_items(
    request: Request,
    offset: Optional[str] = None,
    limit: Optional[str] = None,
    filter_id: Optional[str] = Query(None, alias="filterId", description="Substring of the item id"),
    state: AppState = Depends(get_app_state),
):
    """List catalog items.

    ``excludeSelectedIds`` may be a JSON array string or repeated values.
    """
    offset_value = parse_int_param(
        offset, 0, ErrorCode.INVALID_OFFSET, "offset must be a non-negative number"
    )
    if offset_value < 0:
        raise ApiError(ErrorCode.INVALID_OFFSET, "offset must be a non-negative number")

    limit_message = f"limit must be a number between 1 and {MAX_LIMIT}"
    limit_value = parse_int_param(limit, DEFAULT_LIMIT, ErrorCode.INVALID_LIMIT, limit_message)
    if not 1 <= limit_value <= MAX_LIMIT:
        raise ApiError(ErrorCode.INVALID_LIMIT, limit_message)

    exclude_ids: List[int] = parse_exclude_ids(
        request.query_params.getlist("excludeSelectedIds")
    )

    page = state.catalog.list(
        filter_id=parse_filter_id(filter_id),
        offset=offset_value,
        limit=limit_value,
        exclude_ids=exclude_ids,
    )
    return page.to_dict()


@router.post("/items/batch")
async def get_items_batch(body: IdsRequest, state: AppState = Depends(get_app_state)):
    """Fetch items by id. Unknown ids are omitted."""
    ids = require_id_list(body.ids, "ids")
    items = state.catalog.get_by_ids(ids)
    return {"items": [item.to_dict() for item in items]}


@router.post("/items/append")
async def append_items(body: IdsRequest, state: AppState = Depends(get_app_state)):
    """Create items for ids outside the synthetic range."""
    ids = require_id_list(body.ids, "ids", allow_empty=False)
    return {"added": state.catalog.append(ids)}

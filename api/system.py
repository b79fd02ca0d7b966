"""
System API routes for the item picker backend.

This module provides FastAPI routes for system health and information.
"""

import platform
import sys
from importlib import metadata
from typing import Any, Dict

from fastapi import APIRouter, Depends

from .state import AppState, get_app_state

router = APIRouter()


def _get_package_versions() -> Dict[str, str]:
    """Get versions of key packages."""
    packages = {}

    for name in ("fastapi", "pydantic", "uvicorn", "orjson"):
        try:
            packages[name] = metadata.version(name)
        except metadata.PackageNotFoundError:
            pass

    return packages


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "ok": True,
        "status": "healthy",
    }


@router.get("/system/info")
async def system_info():
    """Get system and environment information."""
    return {
        "python": {
            "version": sys.version,
            "platform": sys.platform,
        },
        "system": {
            "os": platform.system(),
            "release": platform.release(),
            "machine": platform.machine(),
        },
        "packages": _get_package_versions(),
    }


@router.get("/system/status")
async def system_status(state: AppState = Depends(get_app_state)):
    """Get current batching configuration and state."""
    settings = state.settings
    status: Dict[str, Any] = {
        "total_items": settings.total_items,
        "add_batch_interval": settings.add_batch_interval,
        "commit_interval": settings.commit_interval,
        "batching_running": state.scheduler.running,
        "queue_size": state.add_queue.size,
        "pending_update": state.selection_store.has_pending(),
        "selection_size": len(state.selection_store.read().selected_ids),
    }
    return {"status": status}

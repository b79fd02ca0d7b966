"""
FastAPI backend for the item picker webapp.

The left pane of the UI lists a large virtual catalog of synthetic items;
the right pane shows a user-curated, ordered selection. Additions go
through a deduplicating queue that is drained on a timer, and selection
updates are committed on a shorter timer.
"""

import os
from pathlib import Path
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, ORJSONResponse
from fastapi.staticfiles import StaticFiles

from api.items import router as items_router
from api.queue import router as queue_router
from api.selection import router as selection_router
from api.settings import AppSettings
from api.shared.errors import ApiError, ErrorCode
from api.shared.logger import get_logger, setup_logging
from api.state import AppState
from api.system import router as system_router

load_dotenv()

logger = get_logger(__name__)

dist_path = Path(__file__).parent / "frontend" / "dist"

_NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _json_response(request: Request, status_code: int, content: dict) -> JSONResponse:
    """Build a handler response; API paths get the no-cache headers."""
    # 500 responses are sent outside the http middleware
    headers = _NO_CACHE_HEADERS if request.url.path.startswith("/api") else None
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Create the FastAPI app with its own, isolated state.

    Args:
        settings: Settings to use, read from the environment when omitted
    """
    settings = settings or AppSettings.from_env()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Item picker API",
        description="API for the two-pane item picker webapp",
        version="1.0.0",
        default_response_class=ORJSONResponse,
    )
    app.state.picker = AppState.create(settings)

    # ============= Exception Handlers =============

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        """Return validation failures with their error code."""
        logger.debug("%s %s rejected: %s", request.method, request.url.path, exc.code.value)
        return _json_response(request, exc.status_code, exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies are reported as INVALID_INPUT."""
        return _json_response(
            request,
            400,
            {"error": "Invalid request body", "code": ErrorCode.INVALID_INPUT.value},
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Log HTTP exceptions and return JSON response."""
        # Only log 5xx errors (server errors)
        if exc.status_code >= 500:
            logger.error("%s failed: %s", request.url.path, exc.detail)
        return _json_response(request, exc.status_code, {"detail": exc.detail})

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Log unexpected exceptions and return JSON response."""
        logger.error(
            "Unhandled exception in %s %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc_info=exc,
        )
        return _json_response(
            request,
            500,
            {"error": "Internal server error", "code": ErrorCode.INTERNAL_ERROR.value},
        )

    # ============= Middleware =============

    @app.middleware("http")
    async def no_cache_api_responses(request: Request, call_next):
        """Log each request and disable caching of API responses."""
        logger.debug("%s %s", request.method, request.url.path)
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            response.headers.update(_NO_CACHE_HEADERS)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Allow all origins for local development
        allow_credentials=False,  # Must be False when using allow_origins=["*"]
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routes
    app.include_router(system_router, prefix="/api", tags=["system"])
    app.include_router(items_router, prefix="/api", tags=["items"])
    app.include_router(queue_router, prefix="/api", tags=["queue"])
    app.include_router(selection_router, prefix="/api", tags=["selection"])

    # ============= Lifecycle =============

    @app.on_event("startup")
    async def startup_event():
        """Arm the batching timers."""
        logger.info("Item picker starting with %d catalog items", settings.total_items)
        app.state.picker.start()

    @app.on_event("shutdown")
    async def shutdown_event():
        """Disarm the batching timers."""
        app.state.picker.shutdown()
        logger.info("Item picker stopped")

    _mount_frontend(app)
    return app


def _mount_frontend(app: FastAPI) -> None:
    """Serve the built frontend, falling back to index.html for SPA routes."""
    if (dist_path / "assets").exists():
        app.mount("/assets", StaticFiles(directory=str(dist_path / "assets")), name="assets")

    @app.get("/")
    async def serve_spa():
        """Serve the main SPA HTML file"""
        index_file = dist_path / "index.html"
        if index_file.exists():
            return FileResponse(str(index_file))
        return {"message": "Backend server is running"}

    # Catch-all route for SPA client-side routing
    @app.get("/{full_path:path}")
    async def serve_spa_routes(full_path: str):
        """Serve SPA for all non-API routes"""
        if full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not found")

        index_file = dist_path / "index.html"
        if index_file.exists():
            return FileResponse(str(index_file))
        raise HTTPException(status_code=404, detail="Not found")


app = create_app()


if __name__ == "__main__":
    import argparse

    env_settings = app.state.picker.settings

    parser = argparse.ArgumentParser(description="Item picker backend server")
    parser.add_argument(
        "--port",
        type=int,
        default=env_settings.port,
        help="Port to run the server on (default: 5000 or ITEMPICKER_PORT env var)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=env_settings.host,
        help="Host to bind to (default: 127.0.0.1 or ITEMPICKER_HOST env var)",
    )
    parser.add_argument(
        "--reload",
        action=argparse.BooleanOptionalAction,
        default=os.environ.get("ITEMPICKER_RELOAD", "false").lower() == "true",
        help="Enable auto-reload (default: off)",
    )
    args = parser.parse_args()

    uvicorn.run(
        "main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=env_settings.log_level.lower(),
    )

"""
Admin API for editing the catalog JSON files.

Reads are open; every write needs the shared admin key header. Validation
and lookup failures come back as JSON 4xx bodies, anything unexpected as a
500 carrying the raw error message.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..catalog.store import CatalogStore, parse_payload, resolve_category
from ..core.config import AppInfo, Category, ServerConfig, ServerSettings
from ..core.exceptions import (
    MalformedPayloadError,
    MediaShelfError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
    UnknownCategoryError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: 400,
    MalformedPayloadError: 400,
    UnauthorizedError: 401,
    NotFoundError: 404,
    UnknownCategoryError: 404,
    StorageError: 500,
}


def error_status(error: MediaShelfError) -> int:
    """HTTP status for an application error."""
    for error_type, status in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return status
    return 500


def error_body(error: MediaShelfError) -> Dict[str, Any]:
    """JSON body for an application error."""
    if isinstance(error, ValidationError):
        return {"error": error.message, "details": error.errors}
    if isinstance(error, StorageError):
        return {"error": str(error)}
    return {"error": error.message}


async def read_json_body(request: Request) -> Dict[str, Any]:
    """Parse the request body; an empty body is an empty object."""
    raw = await request.body()
    if not raw.strip():
        return {}
    return parse_payload(raw)


def create_app(settings: Optional[ServerSettings] = None) -> FastAPI:
    """Build the admin API for one data directory."""
    settings = settings or ServerSettings.from_env()
    if not settings.admin_key_configured:
        logger.warning("ADMIN_KEY not set. Using default key for development only.")

    store = CatalogStore(settings.data_dir)

    app = FastAPI(
        title=f"{AppInfo.NAME} admin API",
        version=AppInfo.VERSION,
        description=AppInfo.DESCRIPTION,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=ServerConfig.ALLOWED_METHODS,
        allow_headers=ServerConfig.ALLOWED_HEADERS,
    )

    # ── Error mapping ─────────────────────────────────────────────────────

    @app.exception_handler(MediaShelfError)
    async def handle_app_error(request: Request, error: MediaShelfError):
        status = error_status(error)
        if status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, error)
        return JSONResponse(status_code=status, content=error_body(error))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, error: StarletteHTTPException):
        return JSONResponse(status_code=error.status_code, content={"error": error.detail})

    @app.middleware("http")
    async def catch_unexpected(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception("Unexpected error handling %s %s", request.method, request.url.path)
            return JSONResponse(status_code=500, content={"error": str(e)})

    # ── Dependencies ──────────────────────────────────────────────────────

    def require_admin_key(request: Request) -> None:
        provided = request.headers.get(ServerConfig.ADMIN_KEY_HEADER)
        if provided != settings.admin_key:
            raise UnauthorizedError()

    def category_param(category: str) -> Category:
        return resolve_category(category)

    # ── Routes ────────────────────────────────────────────────────────────

    @app.get("/api/{category}")
    def list_items(category: Category = Depends(category_param)):
        return store.read_all(category)

    @app.get("/api/{category}/{item_id}")
    def get_item(item_id: str, category: Category = Depends(category_param)):
        return store.get(category, item_id)

    @app.post("/api/{category}", status_code=201, dependencies=[Depends(require_admin_key)])
    async def create_item(request: Request, category: Category = Depends(category_param)):
        body = await read_json_body(request)
        return store.create(category, body)

    @app.put("/api/{category}/{item_id}", dependencies=[Depends(require_admin_key)])
    async def update_item(
        item_id: str, request: Request, category: Category = Depends(category_param)
    ):
        body = await read_json_body(request)
        return store.update(category, item_id, body)

    @app.delete("/api/{category}/{item_id}", dependencies=[Depends(require_admin_key)])
    def delete_item(item_id: str, category: Category = Depends(category_param)):
        deleted = store.delete(category, item_id)
        return {"success": True, "deleted": deleted}

    return app

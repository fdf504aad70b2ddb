from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from userinfo_pages import __version__
from userinfo_pages.config import AppConfig, load_app_config, resolve_templates_dir
from userinfo_pages.errors import ErrorResponse, error_response
from userinfo_pages.pages import router as pages_router
from userinfo_pages.templates import load_page_templates

logger = logging.getLogger(__name__)


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the app.

    Templates are loaded here, before any server binds a socket, so a missing or
    unreadable template raises TemplateLoadError out of this call.
    """

    config = load_app_config() if config is None else config
    templates_dir = resolve_templates_dir(config)
    page_templates = load_page_templates(templates_dir)

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        logger.info("userinfo-pages %s starting up", __version__)
        yield
        logger.info("userinfo-pages shutting down")

    app = FastAPI(title="userinfo-pages", version=__version__, lifespan=_lifespan)
    app.state.config = config
    app.state.page_templates = page_templates

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException) -> ErrorResponse:
        return error_response(exc.status_code, str(exc.detail), exc.headers)

    @app.exception_handler(StarletteHTTPException)
    async def _starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> ErrorResponse:
        return error_response(
            exc.status_code,
            exc.detail if isinstance(exc.detail, str) else "HTTP error",
            exc.headers,
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> ErrorResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Internal server error")

    app.include_router(pages_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app

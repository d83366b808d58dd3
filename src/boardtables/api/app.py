"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from boardtables.api.dependencies import close_event_manager, init_event_manager, init_settings
from boardtables.api.models import APIResponse
from boardtables.api.routes import events, tables
from boardtables.board import (
    BoardError,
    ProjectNotFoundError,
    ServiceError,
    TransportError,
)
from boardtables.config import get_github_token
from boardtables.logging import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger("boardtables.api")


def _error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=error).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    setup_logging()
    graphql_url = getattr(app.state, "graphql_url", "https://api.github.com/graphql")
    token = get_github_token()
    if not token:
        logger.warning("No GITHUB_TOKEN configured; requests must supply an api_key")
    init_settings(default_token=token, graphql_url=graphql_url)
    init_event_manager()

    yield

    close_event_manager()


def create_app(graphql_url: str = "https://api.github.com/graphql") -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="boardtables API",
        description="Per-column tables of a GitHub project board with historical status",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.graphql_url = graphql_url

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ProjectNotFoundError)
    async def project_not_found_handler(
        _request: Request, exc: ProjectNotFoundError
    ) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(ServiceError)
    async def service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
        return _error_response(status.HTTP_502_BAD_GATEWAY, str(exc))

    @app.exception_handler(TransportError)
    async def transport_error_handler(_request: Request, exc: TransportError) -> JSONResponse:
        return _error_response(status.HTTP_502_BAD_GATEWAY, str(exc))

    @app.exception_handler(BoardError)
    async def board_error_handler(_request: Request, exc: BoardError) -> JSONResponse:
        logger.error("Board fetch failed: %s", exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    app.include_router(tables.router, prefix="/api/v1")
    app.include_router(events.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()

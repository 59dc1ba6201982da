"""FastAPI application factory.

Per the api layer boundary:
- Validates inputs, reads/writes DB
- Returns payloads for the dashboard UI
- Forbidden: aggregation logic (lives in scorify.aggregation)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Generator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from scorify.core.config import get_settings
from scorify.db.repo import DbSession
from scorify.db.session import get_session, init_db

logger = logging.getLogger(__name__)


def get_db_session() -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_session()
    try:
        yield session
    finally:
        session.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup."""
    init_db()
    logger.info("Scorify API started")
    yield
    logger.info("Scorify API stopped")


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Hide store failures behind a generic 500."""
    logger.exception(f"Store failure on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app() -> FastAPI:
    """Create FastAPI application.

    Returns:
        Configured FastAPI application.
    """
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Scorify API",
        description="Lead scoring, customer follow-up and sales reporting",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware for UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SQLAlchemyError, store_error_handler)

    # Include routes
    from scorify.api.routes import (
        account,
        campaigns,
        customers,
        dashboard,
        export,
        reports,
        sales,
    )

    app.include_router(reports.router, prefix="/api")
    app.include_router(customers.router, prefix="/api")
    app.include_router(campaigns.router, prefix="/api")
    app.include_router(sales.router, prefix="/api")
    app.include_router(dashboard.router, prefix="/api")
    app.include_router(export.router, prefix="/api")
    app.include_router(account.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()

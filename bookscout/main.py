"""FastAPI application factory — entry point for BookScout."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from bookscout.api.routes.auth import router as auth_router
from bookscout.api.routes.books import router as books_router
from bookscout.api.routes.interactions import router as interactions_router
from bookscout.api.routes.recommendations import router as recommendations_router
from bookscout.api.routes.wishlist import router as wishlist_router
from bookscout.config import settings
from bookscout.database import engine

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown events."""
    logger.info("BookScout starting up...")
    logger.info(
        "Recommendation weights: wishlist=%d, view=%d",
        settings.recommendation_wishlist_weight,
        settings.recommendation_view_weight,
    )
    if settings.allow_test_identity:
        logger.warning("Test identity header is enabled")
    yield
    await engine.dispose()
    logger.info("BookScout shutting down...")


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Storage failure on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal storage error"},
    )


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="BookScout",
        description="Book discovery with similar-books recommendations",
        version="1.0.0",
        lifespan=lifespan,
    )

    # ── Middleware ──────────────────────────────────
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Errors ─────────────────────────────────────
    application.add_exception_handler(SQLAlchemyError, storage_error_handler)

    # ── Routes ─────────────────────────────────────
    application.include_router(auth_router)
    application.include_router(books_router)
    application.include_router(wishlist_router)
    application.include_router(interactions_router)
    application.include_router(recommendations_router)

    # ── Health Check ───────────────────────────────
    @application.get("/health", tags=["System"])
    async def health() -> dict[str, str]:
        return {"status": "healthy", "service": "bookscout"}

    return application


app = create_app()

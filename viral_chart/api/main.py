"""
FastAPI application for the viral chart service.

This module initializes and configures the FastAPI application that serves
the leaderboard and accepts content submissions.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from viral_chart.api.endpoints import leaderboard, submissions
from viral_chart.config import get_settings
from viral_chart.core.exceptions import FeedError
from viral_chart.services import LeaderboardService, RuneLedger, SubmissionService
from viral_chart.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


async def feed_refresh_worker(service: LeaderboardService, interval_seconds: int) -> None:
    """Background worker that reloads the chart feed periodically."""
    logger.info(f"Feed refresh worker started. Refresh interval: {interval_seconds}s")
    try:
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                service.refresh()
            except FeedError as e:
                # Keep serving the last good view.
                logger.error(f"Feed refresh failed: {e.message}")
    except asyncio.CancelledError:
        logger.info("Feed refresh worker cancelled. Shutting down.")
        raise


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.

    Loads the chart feed, creates the rune ledger and the submission service,
    and starts the feed refresh worker.
    """
    settings = get_settings()
    setup_logging()
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    leaderboard_service = LeaderboardService()
    try:
        leaderboard_service.refresh()
    except FeedError as e:
        logger.error(f"Initial feed load failed: {e.message}")

    ledger = RuneLedger(settings.STARTING_RUNES)
    app.state.leaderboard_service = leaderboard_service
    app.state.ledger = ledger
    app.state.submission_service = SubmissionService(ledger)

    refresh_task: Optional[asyncio.Task] = None
    if settings.FEED_REFRESH_INTERVAL_SECONDS > 0:
        refresh_task = asyncio.create_task(
            feed_refresh_worker(leaderboard_service, settings.FEED_REFRESH_INTERVAL_SECONDS)
        )
    else:
        logger.info("Feed refresh disabled")

    yield

    logger.info("Shutting down application")
    if refresh_task:
        refresh_task.cancel()
        try:
            await refresh_task
        except asyncio.CancelledError:
            logger.info("Feed refresh task cancelled successfully")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""Viral content chart API.

        This API provides endpoints for:
        - The current period's ranked chart with movement and trending flags
        - Content submissions rewarded in runes
        - The rune reward table and current balance
        - Health monitoring""",
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_tags=[
            {"name": "leaderboard", "description": "Chart rankings"},
            {"name": "submissions", "description": "Content submissions and runes"},
            {"name": "health", "description": "Health check and monitoring"},
        ],
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS if not settings.DEBUG else ["*"],
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    app.include_router(leaderboard.router, prefix="/api/v1/leaderboard", tags=["leaderboard"])
    app.include_router(submissions.router, prefix="/api/v1", tags=["submissions"])

    @app.get("/health", tags=["health"], summary="Health Check")
    async def health_check():
        """
        Health check endpoint.

        Returns:
            dict: Service status, version, timestamp and whether a chart is loaded.
        """
        leaderboard_service = getattr(app.state, "leaderboard_service", None)
        chart_loaded = False
        if leaderboard_service is not None:
            chart_loaded = leaderboard_service.is_loaded
        return {
            "status": "healthy",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "chart_loaded": chart_loaded,
            "debug_mode": settings.DEBUG,
        }

    return app


# Create the application instance
app = create_app()

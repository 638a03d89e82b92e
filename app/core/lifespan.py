"""
FastAPI application lifespan management.

The service holds no long-lived resources; startup only configures
logging so every log line, including the request log, shares one format.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import settings
from app.core.logging import setup_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup and log the shutdown."""
    # ── Startup ──────────────────────────────────────────────
    setup_logging()
    logger.info(
        "Starting page metadata service (timeout=%ss, max_redirects=%d)",
        settings.http_timeout,
        settings.max_redirects,
    )

    yield

    # ── Shutdown ─────────────────────────────────────────────
    logger.info("Shutdown complete")

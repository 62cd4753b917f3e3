"""FastAPI application entry point.

Configures CORS, structured logging, the console session lifecycle
(initial fetch on startup, HTTP client closed on shutdown) and router
registration.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_console.core.config import settings
from user_console.core.logging import setup_logging
from user_console.routers import console, health
from user_console.services.session import build_session

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: build the session and load the list once."""
    setup_logging()
    logger.info("Application starting up")
    session = build_session(settings)
    application.state.session = session
    await session.start()
    yield
    await session.close()
    logger.info("Application shutting down")


app = FastAPI(
    title="User Records Console",
    description="Administrative console for the remote user directory",
    version="0.1.0",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# CORS Configuration
# ---------------------------------------------------------------------------
_raw_origins = settings.ALLOWED_ORIGINS.strip()
if _raw_origins == "*":
    _allowed_origins: list[str] = ["*"]
else:
    _allowed_origins = [o.strip() for o in _raw_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Router Registration
# ---------------------------------------------------------------------------
app.include_router(health.router, tags=["Health"])
app.include_router(console.router, prefix="/api/v1/console", tags=["Console"])

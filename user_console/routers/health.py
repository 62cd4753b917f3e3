"""Health check endpoint.

Reports whether the remote directory can currently be listed, plus the
state of the console's own snapshot.  Returns 503 when the directory is
unreachable.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from user_console.clients.directory import DirectoryError
from user_console.routers.console import get_session
from user_console.services.session import ConsoleSession

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(session: ConsoleSession = Depends(get_session)) -> Any:
    """Probe the directory with a list call without touching the cache."""
    directory_status = "disconnected"

    try:
        await session.client.list_users()
        directory_status = "connected"
    except DirectoryError:
        logger.warning("Health check: directory request failed", exc_info=True)

    payload: dict[str, Any] = {
        "status": "ok" if directory_status == "connected" else "degraded",
        "directory": directory_status,
        "endpoint": session.client.endpoint,
        "records_cached": len(session.cache.records),
        "refreshes_issued": session.cache.generation,
    }

    if directory_status != "connected":
        return JSONResponse(status_code=503, content=payload)

    return payload

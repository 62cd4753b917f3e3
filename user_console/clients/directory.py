"""Async HTTP client for the remote directory service.

Wraps the four calls of the ``/api/user`` contract.  The record identifier
travels as the ``id`` query parameter, never as a path segment.  Every
failure (non-2xx, transport error, malformed body) surfaces as a
``DirectoryError`` carrying the server's ``message`` when it sent one.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from user_console.models.user import Identifier, UserCreate, UserRecord, UserUpdate

logger = logging.getLogger(__name__)


class DirectoryError(Exception):
    """Raised when a directory call does not complete with a 2xx response."""

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message or f"Directory request failed (status={status_code})")


def _error_message(response: httpx.Response) -> str | None:
    """Extract ``{"message": ...}`` from an error body, if present."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class DirectoryClient:
    """Talks to the user collection at *endpoint* through *http*."""

    def __init__(self, http: httpx.AsyncClient, endpoint: str):
        self._http = http
        self.endpoint = endpoint

    async def _request(
        self,
        method: str,
        *,
        record_id: Identifier | None = None,
        body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        params = {"id": str(record_id)} if record_id is not None else None
        try:
            response = await self._http.request(
                method, self.endpoint, params=params, json=body
            )
        except httpx.HTTPError as exc:
            logger.error(
                "directory_transport_failed",
                extra={"method": method, "error_message": str(exc)},
            )
            raise DirectoryError() from exc

        if not response.is_success:
            message = _error_message(response)
            logger.warning(
                "directory_request_rejected",
                extra={
                    "method": method,
                    "status_code": response.status_code,
                    "error_message": message,
                },
            )
            raise DirectoryError(message, response.status_code)
        return response

    async def list_users(self) -> list[UserRecord]:
        """``GET /api/user``: the full collection in server order."""
        response = await self._request("GET")
        try:
            items = response.json()
            if not isinstance(items, list):
                raise ValueError("expected a JSON array of users")
            return [UserRecord.model_validate(item) for item in items]
        except (ValueError, ValidationError) as exc:
            logger.error(
                "directory_list_malformed",
                extra={"error_message": str(exc)},
            )
            raise DirectoryError(status_code=response.status_code) from exc

    async def create_user(self, payload: UserCreate) -> None:
        """``POST /api/user`` with the full create body."""
        await self._request("POST", body=payload.model_dump())

    async def update_user(self, record_id: Identifier, payload: UserUpdate) -> None:
        """``PUT /api/user?id=...``; an unset password is left out of the body."""
        await self._request("PUT", record_id=record_id, body=payload.to_body())

    async def delete_user(self, record_id: Identifier) -> None:
        """``DELETE /api/user?id=...``."""
        await self._request("DELETE", record_id=record_id)

"""Shared test fixtures.

Provides a mock directory client, a console session built on it, and a
FastAPI ``TestClient`` whose lifespan uses that session instead of a real
HTTP client.
"""

from collections.abc import Generator
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from user_console.clients.directory import DirectoryClient
from user_console.services.session import ConsoleSession

ENDPOINT = "http://directory.test/api/user"


@pytest.fixture()
def mock_directory() -> AsyncMock:
    """Directory client double; every call succeeds with an empty list by default."""
    directory = AsyncMock(spec=DirectoryClient)
    directory.endpoint = ENDPOINT
    directory.list_users.return_value = []
    return directory


@pytest.fixture()
def session(mock_directory: AsyncMock) -> ConsoleSession:
    """A console session wired to ``mock_directory``."""
    return ConsoleSession(mock_directory)


@pytest.fixture()
def test_client(session: ConsoleSession) -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient running against ``session``."""
    from user_console.main import app

    with patch("user_console.main.build_session", return_value=session):
        with TestClient(app) as client:
            yield client

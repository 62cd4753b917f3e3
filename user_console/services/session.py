"""Console session: wires the components together and renders the view.

``build_session`` is the composition root.  It is the only place that reads
the settings; every component gets the directory endpoint and HTTP client
handed to it.
"""

from __future__ import annotations

import logging

import httpx

from user_console.clients.directory import DirectoryClient
from user_console.core.config import Settings
from user_console.core.constants import EMPTY_MESSAGE, LOADING_MESSAGE
from user_console.models.console import ConsoleView, RecordRow
from user_console.services.confirmation import ConfirmationGate
from user_console.services.coordinator import MutationCoordinator
from user_console.services.form_state import FormStateMachine
from user_console.services.notices import NoticeBoard
from user_console.services.record_cache import RecordListCache

logger = logging.getLogger(__name__)


class ConsoleSession:
    """One operator's console: list cache, form, notices and coordinator."""

    def __init__(self, client: DirectoryClient, http: httpx.AsyncClient | None = None) -> None:
        self.client = client
        self._http = http
        self.notices = NoticeBoard()
        self.cache = RecordListCache(client, self.notices)
        self.form = FormStateMachine()
        self.gate = ConfirmationGate()
        self.coordinator = MutationCoordinator(
            client, self.cache, self.form, self.notices, self.gate
        )

    async def start(self) -> None:
        """Initial fetch on mount."""
        logger.info("console_session_started", extra={"endpoint": self.client.endpoint})
        await self.cache.refresh()

    async def close(self) -> None:
        if self._http is not None:
            await self._http.aclose()

    def view(self) -> ConsoleView:
        """Render the current state for the presentation layer."""
        loading = self.cache.loading
        empty = not loading and not self.cache.records
        status_message: str | None = None
        if loading:
            status_message = LOADING_MESSAGE
        elif empty:
            status_message = EMPTY_MESSAGE

        return ConsoleView(
            loading=loading,
            empty=empty,
            status_message=status_message,
            records=[
                RecordRow(
                    id=record.id,
                    fullname=record.fullname,
                    email=record.email,
                    status=record.status,
                )
                for record in self.cache.records
            ],
            form=self.form.view(),
            notices=self.notices.notices,
            pending_confirmations=self.gate.pending,
        )


def build_session(config: Settings) -> ConsoleSession:
    """Create a session talking to the directory described by *config*."""
    client_kwargs: dict = {}
    if config.DIRECTORY_TIMEOUT_SECONDS is not None:
        client_kwargs["timeout"] = config.DIRECTORY_TIMEOUT_SECONDS
    http = httpx.AsyncClient(**client_kwargs)
    return ConsoleSession(DirectoryClient(http, config.directory_endpoint), http=http)

"""Record list cache.

Holds the latest snapshot of the remote user collection plus a loading
flag.  Each ``refresh`` is tagged with a generation number; only the most
recently issued refresh may commit its outcome, so an older request that
completes late can never overwrite a newer snapshot.
"""

from __future__ import annotations

import logging

from user_console.clients.directory import DirectoryClient, DirectoryError
from user_console.core.constants import FETCH_FAILED_MESSAGE
from user_console.models.enums import NoticeKind
from user_console.models.user import Identifier, UserRecord
from user_console.services.notices import NoticeBoard

logger = logging.getLogger(__name__)


class RecordListCache:
    """Snapshot of all records, replaced wholesale by each successful refresh."""

    def __init__(self, client: DirectoryClient, notices: NoticeBoard) -> None:
        self._client = client
        self._notices = notices
        self.records: list[UserRecord] = []
        # The first fetch happens on startup; until it resolves we are loading
        self.loading: bool = True
        self.loaded: bool = False
        self.last_error: str | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        """Number of refreshes issued so far."""
        return self._generation

    async def refresh(self) -> bool:
        """Re-fetch the whole collection.

        Returns True when this call committed a fresh snapshot.  Failures are
        logged and turned into a notice; the previous snapshot is kept.
        Never raises for remote failures.
        """
        self._generation += 1
        generation = self._generation
        self.loading = True
        logger.info("refresh_started", extra={"generation": generation})

        try:
            records = await self._client.list_users()
        except DirectoryError as exc:
            if generation != self._generation:
                logger.warning(
                    "refresh_discarded_stale",
                    extra={"generation": generation, "latest": self._generation},
                )
                return False
            logger.error(
                "refresh_failed",
                extra={
                    "generation": generation,
                    "status_code": exc.status_code,
                    "error_message": str(exc),
                },
            )
            self.last_error = exc.message or FETCH_FAILED_MESSAGE
            self._notices.raise_notice(NoticeKind.fetch_failed, FETCH_FAILED_MESSAGE)
            self.loading = False
            return False

        if generation != self._generation:
            logger.warning(
                "refresh_discarded_stale",
                extra={"generation": generation, "latest": self._generation},
            )
            return False

        self.records = records
        self.loaded = True
        self.last_error = None
        self.loading = False
        logger.info(
            "refresh_completed",
            extra={"generation": generation, "records_count": len(records)},
        )
        return True

    def find(self, record_id: Identifier) -> UserRecord | None:
        """Look a record up in the current snapshot.

        Ids are compared as text since they usually arrive from a URL.
        """
        wanted = str(record_id)
        for record in self.records:
            if str(record.id) == wanted:
                return record
        return None

"""User-visible notices.

Failures are shown to the operator as soon as they happen; the board keeps
them until the presentation layer dismisses them.
"""

from __future__ import annotations

import itertools
import logging
from datetime import datetime, timezone

from user_console.models.console import Notice
from user_console.models.enums import NoticeKind

logger = logging.getLogger(__name__)


class NoticeBoard:
    """Ordered collection of notices raised during the session."""

    def __init__(self) -> None:
        self._notices: list[Notice] = []
        self._ids = itertools.count(1)

    def raise_notice(self, kind: NoticeKind, message: str) -> Notice:
        notice = Notice(
            id=next(self._ids),
            kind=kind,
            message=message,
            raised_at=datetime.now(timezone.utc),
        )
        self._notices.append(notice)
        logger.info(
            "notice_raised",
            extra={"notice_id": notice.id, "kind": kind.value, "text": message},
        )
        return notice

    @property
    def notices(self) -> list[Notice]:
        return list(self._notices)

    def dismiss(self, notice_id: int | None = None) -> int:
        """Dismiss one notice, or all of them when *notice_id* is None.

        Returns the number of notices removed.
        """
        before = len(self._notices)
        if notice_id is None:
            self._notices.clear()
        else:
            self._notices = [n for n in self._notices if n.id != notice_id]
        return before - len(self._notices)

"""Two-step confirmation gate for destructive actions.

Asking is one event (``request``), answering is another (``resolve``), so
nothing blocks while the operator decides.
"""

from __future__ import annotations

import logging
import secrets

from user_console.core.constants import DELETE_CONFIRMATION_PROMPT
from user_console.models.console import PendingConfirmation
from user_console.models.user import Identifier

logger = logging.getLogger(__name__)


class UnknownConfirmationError(Exception):
    """Raised when a token was never issued or has already been answered."""


class ConfirmationGate:
    """Tracks confirmation requests that are waiting for an answer."""

    def __init__(self, prompt: str = DELETE_CONFIRMATION_PROMPT) -> None:
        self._prompt = prompt
        self._pending: dict[str, PendingConfirmation] = {}

    def request(self, record_id: Identifier) -> PendingConfirmation:
        """Ask about *record_id*, superseding any unanswered request for it."""
        wanted = str(record_id)
        for token, stale in list(self._pending.items()):
            if str(stale.record_id) == wanted:
                del self._pending[token]
                logger.info(
                    "confirmation_superseded",
                    extra={"token": token, "record_id": wanted},
                )
        pending = PendingConfirmation(
            token=secrets.token_urlsafe(16),
            record_id=record_id,
            prompt=self._prompt,
        )
        self._pending[pending.token] = pending
        logger.info(
            "confirmation_requested",
            extra={"token": pending.token, "record_id": str(record_id)},
        )
        return pending

    def resolve(self, token: str) -> PendingConfirmation:
        """Take the pending request for *token* out of the gate."""
        try:
            return self._pending.pop(token)
        except KeyError:
            raise UnknownConfirmationError(token) from None

    @property
    def pending(self) -> list[PendingConfirmation]:
        return list(self._pending.values())

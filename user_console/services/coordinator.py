"""Mutation coordinator.

Turns a form submission or a delete request into the matching directory
call, then brings the form and the record list back in line with the
server.  Nothing is applied optimistically: the list only changes through
the refresh that follows a successful mutation.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable

from user_console.clients.directory import DirectoryClient, DirectoryError
from user_console.core.constants import (
    DELETE_FAILED_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    SUBMIT_FAILED_MESSAGE,
)
from user_console.models.console import PendingConfirmation
from user_console.models.enums import FormMode, NoticeKind, RemovalOutcome, SubmitOutcome
from user_console.models.user import Identifier, UserCreate, UserUpdate
from user_console.services.confirmation import ConfirmationGate
from user_console.services.form_state import FormStateMachine
from user_console.services.notices import NoticeBoard
from user_console.services.record_cache import RecordListCache

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[PendingConfirmation], bool | Awaitable[bool]]


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------

def build_create_payload(form: FormStateMachine) -> UserCreate:
    """Create body: every draft field, verbatim."""
    draft = form.draft
    return UserCreate(
        username=draft.username,
        email=draft.email,
        password=draft.password,
        firstname=draft.firstname,
        lastname=draft.lastname,
    )


def build_update_payload(form: FormStateMachine) -> UserUpdate:
    """Update body: profile fields, plus the password only when one was typed."""
    draft = form.draft
    return UserUpdate(
        email=draft.email,
        firstname=draft.firstname,
        lastname=draft.lastname,
        password=draft.password or None,
    )


class MutationCoordinator:
    """Routes submits and deletes to the directory and resynchronizes state."""

    def __init__(
        self,
        client: DirectoryClient,
        cache: RecordListCache,
        form: FormStateMachine,
        notices: NoticeBoard,
        gate: ConfirmationGate,
    ) -> None:
        self._client = client
        self._cache = cache
        self._form = form
        self._notices = notices
        self._gate = gate

    # -----------------------------------------------------------------------
    # Submit
    # -----------------------------------------------------------------------

    async def submit(self) -> SubmitOutcome:
        """Send the current draft as a create or an update.

        On success the form is reset and the list refreshed, in that order.
        On failure a notice is raised and the draft, mode and list stay as
        they were.
        """
        missing = self._form.missing_fields()
        if missing:
            self._notices.raise_notice(
                NoticeKind.incomplete,
                MISSING_FIELDS_MESSAGE.format(fields=", ".join(missing)),
            )
            return SubmitOutcome.incomplete

        mode = self._form.mode
        target_id = self._form.target_id
        try:
            if mode == FormMode.edit:
                await self._client.update_user(target_id, build_update_payload(self._form))
                outcome = SubmitOutcome.updated
            else:
                await self._client.create_user(build_create_payload(self._form))
                outcome = SubmitOutcome.created
        except DirectoryError as exc:
            logger.error(
                "submit_failed",
                extra={
                    "mode": mode.value,
                    "record_id": str(target_id) if target_id is not None else None,
                    "status_code": exc.status_code,
                    "error_message": str(exc),
                },
            )
            self._notices.raise_notice(
                NoticeKind.submit_failed, exc.message or SUBMIT_FAILED_MESSAGE
            )
            return SubmitOutcome.failed

        logger.info(
            "submit_completed",
            extra={
                "outcome": outcome.value,
                "record_id": str(target_id) if target_id is not None else None,
            },
        )
        self._form.reset()
        await self._cache.refresh()
        return outcome

    # -----------------------------------------------------------------------
    # Delete
    # -----------------------------------------------------------------------

    def request_removal(self, record_id: Identifier) -> PendingConfirmation:
        """First step of a delete: ask the operator. No call is issued."""
        return self._gate.request(record_id)

    async def resolve_removal(self, token: str, confirmed: bool) -> RemovalOutcome:
        """Second step of a delete: act on the operator's answer.

        Raises ``UnknownConfirmationError`` for a token that is not pending.
        """
        pending = self._gate.resolve(token)
        if not confirmed:
            logger.info("delete_declined", extra={"record_id": str(pending.record_id)})
            return RemovalOutcome.declined

        try:
            await self._client.delete_user(pending.record_id)
        except DirectoryError as exc:
            logger.error(
                "delete_failed",
                extra={
                    "record_id": str(pending.record_id),
                    "status_code": exc.status_code,
                    "error_message": str(exc),
                },
            )
            self._notices.raise_notice(
                NoticeKind.delete_failed, exc.message or DELETE_FAILED_MESSAGE
            )
            return RemovalOutcome.failed

        logger.info("delete_completed", extra={"record_id": str(pending.record_id)})
        await self._cache.refresh()
        return RemovalOutcome.deleted

    async def remove(self, record_id: Identifier, confirm: ConfirmCallback) -> RemovalOutcome:
        """Run both delete steps, asking *confirm* for the operator's answer."""
        pending = self.request_removal(record_id)
        answer = confirm(pending)
        if inspect.isawaitable(answer):
            answer = await answer
        return await self.resolve_removal(pending.token, bool(answer))

"""Unit tests for the mutation coordinator.

Covers create/update routing, the password omission rule, reset-then-refresh
ordering, failure notices, and the two-step delete protocol.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from user_console.clients.directory import DirectoryError
from user_console.models.enums import FormMode, NoticeKind, RemovalOutcome, SubmitOutcome
from user_console.models.form import DraftForm
from user_console.models.user import UserCreate, UserRecord, UserUpdate
from user_console.services.confirmation import UnknownConfirmationError
from user_console.services.coordinator import build_update_payload
from user_console.services.form_state import FormStateMachine
from user_console.services.session import ConsoleSession


def _make_record(idx: int = 1, **overrides: Any) -> UserRecord:
    """Return a realistic directory record."""
    data: dict[str, Any] = {
        "id": idx,
        "username": f"user{idx}",
        "email": f"user{idx}@example.com",
        "firstname": f"First{idx}",
        "lastname": f"Last{idx}",
    }
    data.update(overrides)
    return UserRecord.model_validate(data)


def _fill_create_draft(session: ConsoleSession) -> None:
    for name, value in {
        "username": "carol",
        "email": "carol@x.com",
        "password": "s3cret",
        "firstname": "Carol",
        "lastname": "C",
    }.items():
        session.form.update_field(name, value)


class TestUpdatePayload:
    """Password is sent only when one was typed."""

    def test_empty_password_omitted(self) -> None:
        form = FormStateMachine()
        form.begin_edit(_make_record(1))
        body = build_update_payload(form).to_body()
        assert "password" not in body
        assert "username" not in body

    def test_typed_password_sent_verbatim(self) -> None:
        form = FormStateMachine()
        form.begin_edit(_make_record(1))
        form.update_field("password", " spaced pw ")
        assert build_update_payload(form).to_body()["password"] == " spaced pw "


class TestSubmitCreate:
    """Create mode."""

    @pytest.mark.asyncio
    async def test_create_then_reset_then_refresh(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        events: list[str] = []
        draft_at_refresh: list[DraftForm] = []

        async def _create(payload: UserCreate) -> None:
            events.append("create")

        async def _list() -> list[UserRecord]:
            events.append("refresh")
            draft_at_refresh.append(session.form.draft.model_copy())
            return [_make_record(1, username="carol")]

        mock_directory.create_user.side_effect = _create
        mock_directory.list_users.side_effect = _list
        _fill_create_draft(session)

        outcome = await session.coordinator.submit()

        assert outcome == SubmitOutcome.created
        assert events == ["create", "refresh"]
        mock_directory.create_user.assert_awaited_once_with(
            UserCreate(
                username="carol",
                email="carol@x.com",
                password="s3cret",
                firstname="Carol",
                lastname="C",
            )
        )
        # The form was already reset when the refresh went out
        assert draft_at_refresh == [DraftForm()]
        assert session.form.mode == FormMode.create
        assert [r.username for r in session.cache.records] == ["carol"]

    @pytest.mark.asyncio
    async def test_whitespace_password_is_submitted(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        session.form.update_fields(
            {"username": "bob", "email": "b@x.com", "password": "   "}
        )

        outcome = await session.coordinator.submit()

        assert outcome == SubmitOutcome.created
        payload = mock_directory.create_user.await_args.args[0]
        assert payload.password == "   "

    @pytest.mark.asyncio
    async def test_missing_required_fields_issue_no_call(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        session.form.update_field("email", "x@x.com")

        outcome = await session.coordinator.submit()

        assert outcome == SubmitOutcome.incomplete
        mock_directory.create_user.assert_not_awaited()
        mock_directory.list_users.assert_not_awaited()
        assert session.form.draft.email == "x@x.com"
        notice = session.notices.notices[0]
        assert notice.kind == NoticeKind.incomplete
        assert "username" in notice.message
        assert "password" in notice.message

    @pytest.mark.asyncio
    async def test_failure_surfaces_server_message_and_keeps_draft(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        mock_directory.create_user.side_effect = DirectoryError(
            "Username already exists", 409
        )
        _fill_create_draft(session)

        outcome = await session.coordinator.submit()

        assert outcome == SubmitOutcome.failed
        assert session.form.draft.username == "carol"
        assert session.form.draft.password == "s3cret"
        assert session.form.mode == FormMode.create
        mock_directory.list_users.assert_not_awaited()
        assert session.notices.notices[0].message == "Username already exists"

    @pytest.mark.asyncio
    async def test_failure_without_message_uses_generic_text(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        mock_directory.create_user.side_effect = DirectoryError(None, 500)
        _fill_create_draft(session)

        await session.coordinator.submit()

        notice = session.notices.notices[0]
        assert notice.kind == NoticeKind.submit_failed
        assert notice.message == "Operation failed"


class TestSubmitEdit:
    """Edit mode."""

    @pytest.mark.asyncio
    async def test_alice_email_change_without_password(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        alice = UserRecord.model_validate(
            {
                "id": 1,
                "username": "alice",
                "email": "a@x.com",
                "firstname": "Alice",
                "lastname": "A",
            }
        )
        mock_directory.list_users.return_value = [alice]
        await session.cache.refresh()
        mock_directory.list_users.reset_mock()

        session.form.begin_edit(alice)
        session.form.update_field("email", "alice@new.com")
        outcome = await session.coordinator.submit()

        assert outcome == SubmitOutcome.updated
        mock_directory.update_user.assert_awaited_once()
        record_id, payload = mock_directory.update_user.await_args.args
        assert record_id == 1
        assert payload.to_body() == {
            "email": "alice@new.com",
            "firstname": "Alice",
            "lastname": "A",
        }
        mock_directory.list_users.assert_awaited_once()
        mock_directory.create_user.assert_not_awaited()
        assert session.form.mode == FormMode.create

    @pytest.mark.asyncio
    async def test_password_change_sent(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        session.form.begin_edit(_make_record(4))
        session.form.update_field("password", "n3w-pass")

        await session.coordinator.submit()

        _, payload = mock_directory.update_user.await_args.args
        assert payload == UserUpdate(
            email="user4@example.com",
            firstname="First4",
            lastname="Last4",
            password="n3w-pass",
        )

    @pytest.mark.asyncio
    async def test_edit_does_not_require_username_or_password(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        session.form.begin_edit(_make_record(4, username=""))

        outcome = await session.coordinator.submit()

        assert outcome == SubmitOutcome.updated

    @pytest.mark.asyncio
    async def test_failure_keeps_edit_mode(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        mock_directory.update_user.side_effect = DirectoryError("Invalid email", 400)
        session.form.begin_edit(_make_record(4))
        session.form.update_field("email", "not-an-email")

        outcome = await session.coordinator.submit()

        assert outcome == SubmitOutcome.failed
        assert session.form.mode == FormMode.edit
        assert session.form.target_id == 4
        assert session.form.draft.email == "not-an-email"
        assert session.notices.notices[0].message == "Invalid email"


class TestRemoval:
    """Two-step delete."""

    @pytest.mark.asyncio
    async def test_request_issues_no_call(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        pending = session.coordinator.request_removal(3)

        assert pending.record_id == 3
        assert pending.prompt == "Are you sure you want to delete this user?"
        assert session.gate.pending == [pending]
        mock_directory.delete_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_declined_issues_zero_calls_and_changes_nothing(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        mock_directory.list_users.return_value = [_make_record(3)]
        await session.cache.refresh()
        mock_directory.list_users.reset_mock()
        session.form.update_field("email", "draft@x.com")

        outcome = await session.coordinator.remove(3, lambda pending: False)

        assert outcome == RemovalOutcome.declined
        mock_directory.delete_user.assert_not_awaited()
        mock_directory.list_users.assert_not_awaited()
        assert [r.id for r in session.cache.records] == [3]
        assert session.form.draft.email == "draft@x.com"
        assert session.notices.notices == []
        assert session.gate.pending == []

    @pytest.mark.asyncio
    async def test_confirmed_deletes_then_refreshes(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        async def _yes(pending: Any) -> bool:
            return True

        outcome = await session.coordinator.remove("abc", _yes)

        assert outcome == RemovalOutcome.deleted
        mock_directory.delete_user.assert_awaited_once_with("abc")
        mock_directory.list_users.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failure_leaves_cache_untouched(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        mock_directory.list_users.return_value = [_make_record(3)]
        await session.cache.refresh()
        mock_directory.list_users.reset_mock()
        mock_directory.delete_user.side_effect = DirectoryError(None, 500)

        pending = session.coordinator.request_removal(3)
        outcome = await session.coordinator.resolve_removal(pending.token, True)

        assert outcome == RemovalOutcome.failed
        mock_directory.list_users.assert_not_awaited()
        assert [r.id for r in session.cache.records] == [3]
        notice = session.notices.notices[0]
        assert notice.kind == NoticeKind.delete_failed
        assert notice.message == "Delete failed"

    @pytest.mark.asyncio
    async def test_token_answered_only_once(self, session: ConsoleSession) -> None:
        pending = session.coordinator.request_removal(3)
        await session.coordinator.resolve_removal(pending.token, False)

        with pytest.raises(UnknownConfirmationError):
            await session.coordinator.resolve_removal(pending.token, True)

    @pytest.mark.asyncio
    async def test_new_request_supersedes_unanswered_one_for_same_record(
        self, session: ConsoleSession, mock_directory: AsyncMock
    ) -> None:
        first = session.coordinator.request_removal(3)
        other = session.coordinator.request_removal(4)
        second = session.coordinator.request_removal("3")

        assert session.gate.pending == [other, second]
        with pytest.raises(UnknownConfirmationError):
            await session.coordinator.resolve_removal(first.token, True)
        mock_directory.delete_user.assert_not_awaited()

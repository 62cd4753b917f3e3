"""Console endpoints: the presentation layer's window onto the session.

Remote failures never turn into HTTP errors here; they come back as
notices inside the returned view.  Only requests that make no sense
(unknown record, unknown field, unknown confirmation token) are rejected.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from user_console.models.console import (
    ConfirmationAnswer,
    ConsoleView,
    PendingConfirmation,
    RemovalResponse,
    SubmitResponse,
)
from user_console.services.confirmation import UnknownConfirmationError
from user_console.services.session import ConsoleSession

logger = logging.getLogger(__name__)

router = APIRouter()


def get_session(request: Request) -> ConsoleSession:
    """Return the session created by the application lifespan."""
    return request.app.state.session


# ---------------------------------------------------------------------------
# Record list
# ---------------------------------------------------------------------------

@router.get("", response_model=ConsoleView)
async def read_console(session: ConsoleSession = Depends(get_session)) -> ConsoleView:
    """Current records, form and notices."""
    return session.view()


@router.post("/refresh", response_model=ConsoleView)
async def refresh_records(session: ConsoleSession = Depends(get_session)) -> ConsoleView:
    """Re-fetch the collection from the directory."""
    await session.cache.refresh()
    return session.view()


# ---------------------------------------------------------------------------
# Form
# ---------------------------------------------------------------------------

@router.patch("/form", response_model=ConsoleView)
async def update_form(
    fields: dict[str, str] = Body(..., examples=[{"email": "user@example.com"}]),
    session: ConsoleSession = Depends(get_session),
) -> ConsoleView:
    """Set one or more draft fields."""
    try:
        session.form.update_fields(fields)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.view()


@router.post("/form/edit/{record_id}", response_model=ConsoleView)
async def begin_edit(
    record_id: str, session: ConsoleSession = Depends(get_session)
) -> ConsoleView:
    """Load a listed record into the form."""
    record = session.cache.find(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Record not listed: {record_id}")
    session.form.begin_edit(record)
    return session.view()


@router.post("/form/reset", response_model=ConsoleView)
async def reset_form(session: ConsoleSession = Depends(get_session)) -> ConsoleView:
    """Discard the draft and return to create mode."""
    session.form.reset()
    return session.view()


@router.post("/form/submit", response_model=SubmitResponse)
async def submit_form(session: ConsoleSession = Depends(get_session)) -> SubmitResponse:
    """Create or update a record from the draft."""
    outcome = await session.coordinator.submit()
    return SubmitResponse(outcome=outcome, view=session.view())


# ---------------------------------------------------------------------------
# Delete (two-step)
# ---------------------------------------------------------------------------

@router.post(
    "/records/{record_id}/delete",
    status_code=202,
    response_model=PendingConfirmation,
)
async def request_delete(
    record_id: str, session: ConsoleSession = Depends(get_session)
) -> PendingConfirmation:
    """Ask for confirmation before deleting a listed record."""
    record = session.cache.find(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Record not listed: {record_id}")
    return session.coordinator.request_removal(record.id)


@router.post("/confirmations/{token}", response_model=RemovalResponse)
async def answer_confirmation(
    token: str,
    answer: ConfirmationAnswer,
    session: ConsoleSession = Depends(get_session),
) -> RemovalResponse:
    """Deliver the operator's yes/no answer to a pending delete."""
    try:
        outcome = await session.coordinator.resolve_removal(token, answer.confirmed)
    except UnknownConfirmationError as exc:
        raise HTTPException(status_code=404, detail="Unknown confirmation") from exc
    return RemovalResponse(outcome=outcome, view=session.view())


# ---------------------------------------------------------------------------
# Notices
# ---------------------------------------------------------------------------

@router.delete("/notices", response_model=ConsoleView)
async def dismiss_notices(session: ConsoleSession = Depends(get_session)) -> ConsoleView:
    """Dismiss every notice currently shown."""
    dismissed = session.notices.dismiss()
    logger.debug("notices_dismissed", extra={"count": dismissed})
    return session.view()

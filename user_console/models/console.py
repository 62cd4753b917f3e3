"""Response models for the console surface: notices, confirmations, views."""

from datetime import datetime

from pydantic import BaseModel

from user_console.models.enums import NoticeKind, RemovalOutcome, SubmitOutcome
from user_console.models.form import FormView
from user_console.models.user import Identifier


class Notice(BaseModel):
    """A user-visible notice raised by a failed operation."""
    id: int
    kind: NoticeKind
    message: str
    raised_at: datetime


class PendingConfirmation(BaseModel):
    """A destructive action waiting for the operator's yes/no answer."""
    token: str
    record_id: Identifier
    prompt: str


class RecordRow(BaseModel):
    """One row of the records table."""
    id: Identifier
    fullname: str
    email: str
    status: str


class ConsoleView(BaseModel):
    """Everything the presentation layer needs to render the console."""
    loading: bool
    empty: bool
    status_message: str | None = None
    records: list[RecordRow]
    form: FormView
    notices: list[Notice]
    pending_confirmations: list[PendingConfirmation]


class SubmitResponse(BaseModel):
    outcome: SubmitOutcome
    view: ConsoleView


class RemovalResponse(BaseModel):
    outcome: RemovalOutcome
    view: ConsoleView


class ConfirmationAnswer(BaseModel):
    """Body of ``POST /confirmations/{token}``."""
    confirmed: bool

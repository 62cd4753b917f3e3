"""Client-owned form models: the editable draft and the edit session."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

from user_console.models.enums import FormMode
from user_console.models.user import Identifier


class DraftForm(BaseModel):
    """Uncommitted edit buffer for one record (new or existing)."""
    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    username: str = ""
    email: str = ""
    password: str = ""
    firstname: str = ""
    lastname: str = ""


DRAFT_FIELDS: tuple[str, ...] = tuple(DraftForm.model_fields)


class EditSession(BaseModel):
    """Mode flag plus the identity of the record being edited.

    ``target_id`` is set if and only if ``mode`` is ``edit``.
    """
    model_config = ConfigDict(frozen=True)

    mode: FormMode = FormMode.create
    target_id: Identifier | None = None

    @model_validator(mode="after")
    def _target_matches_mode(self) -> EditSession:
        if (self.mode == FormMode.create) != (self.target_id is None):
            raise ValueError("target_id must be set exactly when mode is 'edit'")
        return self


class FormView(BaseModel):
    """Render-ready form state; the password value is never echoed."""
    mode: FormMode
    target_id: Identifier | None = None
    title: str
    submit_label: str
    password_label: str
    username_visible: bool
    can_reset: bool
    focus_requested: bool
    username: str
    email: str
    firstname: str
    lastname: str
    password_set: bool
    missing_fields: list[str]

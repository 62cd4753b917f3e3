"""Form state machine.

Two states: *Idle* (create mode, empty draft) and *Editing* (edit mode with
a target record and a populated draft).  ``begin_edit`` enters Editing,
``reset`` returns to Idle; there is no terminal state.  A submit in flight
does not lock the draft.
"""

from __future__ import annotations

import logging

from user_console.core.constants import FORM_TITLES, PASSWORD_LABELS, SUBMIT_LABELS
from user_console.models.enums import FormMode
from user_console.models.form import DRAFT_FIELDS, DraftForm, EditSession, FormView
from user_console.models.user import Identifier, UserRecord

logger = logging.getLogger(__name__)


class FormStateMachine:
    """Single editable draft plus the edit session it belongs to."""

    def __init__(self) -> None:
        self.draft = DraftForm()
        self.session = EditSession()
        self.focus_requested = False

    @property
    def mode(self) -> FormMode:
        return self.session.mode

    @property
    def target_id(self) -> Identifier | None:
        return self.session.target_id

    @property
    def is_editing(self) -> bool:
        return self.session.mode == FormMode.edit

    def begin_edit(self, record: UserRecord) -> None:
        """Load *record* into the draft and switch to edit mode.

        The username is carried along but hidden; the password starts empty,
        meaning "keep the stored one".
        """
        self.session = EditSession(mode=FormMode.edit, target_id=record.id)
        self.draft = DraftForm(
            username=record.username,
            email=record.email,
            password="",
            firstname=record.firstname,
            lastname=record.lastname,
        )
        # Bring the form into view on the next render
        self.focus_requested = True
        logger.info("form_edit_started", extra={"record_id": str(record.id)})

    def reset(self) -> None:
        """Back to Idle: create mode, no target, all-empty draft."""
        self.session = EditSession()
        self.draft = DraftForm()
        self.focus_requested = False
        logger.debug("form_reset")

    def update_field(self, name: str, value: str) -> None:
        """Set a single draft field."""
        if name not in DRAFT_FIELDS:
            raise ValueError(f"Unknown form field: {name}")
        setattr(self.draft, name, value)

    def update_fields(self, fields: dict[str, str]) -> None:
        """Set several draft fields at once; nothing changes if any name is unknown."""
        unknown = [name for name in fields if name not in DRAFT_FIELDS]
        if unknown:
            raise ValueError(f"Unknown form field: {', '.join(unknown)}")
        for name, value in fields.items():
            setattr(self.draft, name, value)

    def missing_fields(self) -> list[str]:
        """Required fields that are still empty for the current mode.

        Only the email is trimmed, the way an email input normalizes its value.
        """
        missing = []
        if self.mode == FormMode.create and not self.draft.username:
            missing.append("username")
        if not self.draft.email.strip():
            missing.append("email")
        if self.mode == FormMode.create and not self.draft.password:
            missing.append("password")
        return missing

    def can_reset(self) -> bool:
        return self.is_editing or bool(self.draft.username)

    def view(self, consume_focus: bool = True) -> FormView:
        """Render-ready snapshot of the form.

        Reading the view consumes the pending focus request unless
        *consume_focus* is False.
        """
        mode = self.mode.value
        focus = self.focus_requested
        if consume_focus:
            self.focus_requested = False
        return FormView(
            mode=self.mode,
            target_id=self.target_id,
            title=FORM_TITLES[mode],
            submit_label=SUBMIT_LABELS[mode],
            password_label=PASSWORD_LABELS[mode],
            username_visible=not self.is_editing,
            can_reset=self.can_reset(),
            focus_requested=focus,
            username=self.draft.username,
            email=self.draft.email,
            firstname=self.draft.firstname,
            lastname=self.draft.lastname,
            password_set=bool(self.draft.password),
            missing_fields=self.missing_fields(),
        )

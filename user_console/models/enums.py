"""Enum types shared by the console state machine and its HTTP surface."""

from enum import Enum


class FormMode(str, Enum):
    """Whether the draft describes a new record or an existing one."""
    create = "create"
    edit = "edit"


class NoticeKind(str, Enum):
    """Category of a user-visible notice."""
    fetch_failed = "fetch_failed"
    submit_failed = "submit_failed"
    delete_failed = "delete_failed"
    incomplete = "incomplete"


class SubmitOutcome(str, Enum):
    """Result of a form submission."""
    created = "created"
    updated = "updated"
    failed = "failed"
    incomplete = "incomplete"


class RemovalOutcome(str, Enum):
    """Result of resolving a delete confirmation."""
    deleted = "deleted"
    declined = "declined"
    failed = "failed"

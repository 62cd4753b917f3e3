"""Pydantic models for the remote ``user`` collection.

``UserRecord`` is the read side as returned by ``GET /api/user``; the
directory owns every field.  ``UserCreate`` and ``UserUpdate`` are the
request bodies for ``POST`` and ``PUT``.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from user_console.core.constants import DEFAULT_STATUS

# Opaque record identifier, echoed back to the directory as given
Identifier = int | str


class UserRecord(BaseModel):
    """One user as stored by the directory service."""
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: Identifier = Field(validation_alias=AliasChoices("id", "_id"))
    username: str = ""
    email: str = ""
    firstname: str = ""
    lastname: str = ""
    status: str = DEFAULT_STATUS  # display-only

    @field_validator("username", "email", "firstname", "lastname", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        return value or DEFAULT_STATUS

    @property
    def fullname(self) -> str:
        return f"{self.firstname} {self.lastname}".strip()


class UserCreate(BaseModel):
    """Payload for ``POST /api/user``, sent verbatim from the draft."""
    username: str
    email: str
    password: str
    firstname: str
    lastname: str


class UserUpdate(BaseModel):
    """Payload for ``PUT /api/user?id=...``.

    ``password`` is ``None`` when the stored password must stay unchanged;
    ``to_body`` then leaves the key out entirely.  ``username`` is never
    part of an update.
    """
    email: str
    firstname: str
    lastname: str
    password: str | None = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

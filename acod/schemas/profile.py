# acod/schemas/profile.py
import uuid
from datetime import datetime

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from acod.models.enums import Role


class ProfileRead(SQLModel):
    """Response schema returned to clients."""

    id: uuid.UUID
    user_id: uuid.UUID
    email: str | None
    display_name: str | None
    role: Role
    created_at: datetime
    updated_at: datetime


class ClientOption(SQLModel):
    """
    Entry of the client selector shown to agency users.

    `id` is the auth id, i.e. the value to send as `client_id`.
    """

    id: uuid.UUID
    email: str
    display_name: str


class ProfileUpdate(SQLModel):
    """
    Display-name edit.

    Used both for the caller's own profile and by agency users
    editing another profile.
    """

    model_config = ConfigDict(extra="forbid")

    display_name: str = Field(max_length=200)

    @field_validator("display_name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return v.strip()


class ProfileRoleUpdate(SQLModel):
    """
    Agency-only role update schema.
    """

    model_config = ConfigDict(extra="forbid")
    role: Role


class InviteCreate(SQLModel):
    """
    Payload of the invite-user maintenance operation.

    `email` is required; a missing or malformed email never reaches
    Supabase Auth.
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    role: Role = Role.CLIENT
    display_name: str = Field(default="", max_length=200)

    @field_validator("display_name", mode="before")
    @classmethod
    def normalize_name(cls, v: str | None) -> str:
        if v is None:
            return ""
        return v.strip()


class InviteRead(SQLModel):
    """Identity created by an invite."""

    user_id: uuid.UUID
    email: str
    role: Role
    display_name: str

# acod/models/profile.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field

from acod.models.enums import Role


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Profile(SQLModel, table=True):
    """
    Application profile for a Supabase Auth identity.

    Identity:
      - id: row id of the profile itself
      - user_id: MUST match Supabase auth.users.id (UUID from JWT "sub")

    The two ids are distinct. Maintenance endpoints (delete-user) take
    the auth id, never the profile row id.

    Role:
      - "agencia" | "cliente"
      - new profiles are always "cliente"; only an agency can promote.
    """

    __tablename__ = "profiles"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        unique=True,
        index=True,
        description="Matches Supabase auth.users.id",
    )

    email: str | None = Field(
        default=None,
        index=True,
        description="Email from Supabase auth.users",
    )

    display_name: str | None = Field(
        default=None,
        max_length=200,
        description="Name shown in client selectors and user management",
    )

    role: str = Field(
        default=Role.CLIENT.value,
        index=True,
        description="Application role: agencia | cliente",
    )

    created_at: datetime = Field(
        default_factory=_utcnow,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=_utcnow,
        sa_column_kwargs={"onupdate": _utcnow},
        description="Last update timestamp (UTC)",
    )

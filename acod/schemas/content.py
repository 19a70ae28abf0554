# acod/schemas/content.py
import datetime as dt
import uuid
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from acod.models.enums import ContentStatus, GuidelineApproval

Objective = Literal["conversao", "awareness", "engajamento", "consideracao", "retencao"]

# Offered on write
ContentTypeInput = Literal["estatico", "carrossel", "reels"]
CaptureInput = Literal["s_necessidade", "pela_agencia", "pelo_cliente"]

# Accepted on read (storage enum is a superset of what we write)
ContentType = Literal[
    "estatico", "carrossel", "reels", "post", "story", "reel", "video", "outro"
]
Capture = Literal[
    "s_necessidade",
    "pela_agencia",
    "pelo_cliente",
    "fotografia",
    "video",
    "design",
    "redacao",
]

ViewMode = Literal["themes", "contents"]


def _strip_optional(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    return v or None


class ThemeCreate(SQLModel):
    """
    Theme-mode creation ("Novo Tema").

    Backend derives:
      - day_of_week from date
      - approved_guidelines = 'pendente'
      - content_status = 'pendente'
      - user_id from token
      - client_id from token for clients; required from agency callers
    """

    model_config = ConfigDict(extra="forbid")

    date: dt.date
    feed_theme: str
    objective: Objective | None = None
    content_type: ContentTypeInput = "estatico"
    observations: str | None = None
    client_id: uuid.UUID | None = None

    @field_validator("feed_theme")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("feed_theme cannot be empty")
        return v

    @field_validator("observations")
    @classmethod
    def normalize_observations(cls, v: str | None) -> str | None:
        return _strip_optional(v)


class ContentCreate(SQLModel):
    """
    Content-mode creation ("Novo Conteúdo").

    `content_status` is honored for agency callers only; clients
    always start at 'pendente'. The guideline track is pre-cleared.
    """

    model_config = ConfigDict(extra="forbid")

    date: dt.date
    feed_theme: str
    content_type: ContentTypeInput = "estatico"
    content_capture: CaptureInput = "s_necessidade"
    content_status: ContentStatus = ContentStatus.PENDING
    caption: str | None = None
    content_body: str | None = None
    observations: str | None = None
    client_id: uuid.UUID | None = None

    @field_validator("feed_theme")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("feed_theme cannot be empty")
        return v

    @field_validator("caption", "content_body", "observations")
    @classmethod
    def normalize_text(cls, v: str | None) -> str | None:
        return _strip_optional(v)


class ContentUpdate(SQLModel):
    """
    Agency edit of descriptive fields.

    Status columns and observations are not editable here: statuses go
    through the tagged status routes, observations are append-only.

    `objective` may be set on any item. Content-mode creation leaves it
    empty, but the stored row does not record which mode created it.
    """

    model_config = ConfigDict(extra="forbid")

    date: dt.date | None = None
    feed_theme: str | None = None
    objective: Objective | None = None
    content_type: ContentTypeInput | None = None
    content_capture: CaptureInput | None = None
    caption: str | None = None
    content_body: str | None = None
    client_id: uuid.UUID | None = None

    @field_validator("feed_theme")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("feed_theme cannot be empty")
        return v


class GuidelineApprovalUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    value: GuidelineApproval


class ContentStatusUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    value: ContentStatus


class RejectionCreate(SQLModel):
    """
    Confirmed rejection draft: the reason typed in the reject dialog.
    """

    model_config = ConfigDict(extra="forbid")

    reason: str = Field(default="", max_length=5000)

    @field_validator("reason", mode="before")
    @classmethod
    def normalize_reason(cls, v: str | None) -> str:
        if v is None:
            return ""
        return v.strip()


class ContentRead(SQLModel):
    """
    Content item as shown to callers.

    `observations` is the rendered log: creation text followed by one
    "[Rejeição - dd/mm/yyyy]: reason" entry per rejection.
    """

    id: uuid.UUID
    date: dt.date
    day_of_week: str
    feed_theme: str
    objective: str | None
    content_type: ContentType | None
    content_capture: Capture | None
    approved_guidelines: GuidelineApproval | None
    content_status: ContentStatus | None
    caption: str | None
    content_body: str | None
    observations: str | None
    user_id: uuid.UUID
    client_id: uuid.UUID | None
    created_at: dt.datetime
    updated_at: dt.datetime

# acod/models/content.py
import datetime as dt
import uuid

from sqlmodel import SQLModel, Field

from acod.models.enums import ContentStatus, GuidelineApproval


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Content(SQLModel, table=True):
    """
    A scheduled content item, tracked on two independent status columns:

      - approved_guidelines: theme / brief approval
            indefinido | pendente | aprovado | rejeitado
      - content_status: production / finished-asset approval
            pendente | em_producao | aguardando_aprovacao |
            aprovado | rejeitado | publicado

    `observations` only holds the text written at creation. Rejection
    reasons live in `content_rejections` and are appended at read time.
    """

    __tablename__ = "contents"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    date: dt.date = Field(
        index=True,
        description="Scheduled publication date",
    )

    # Always derived from `date`; see services.calendar.day_of_week
    day_of_week: str = Field(
        description="Weekday name of `date` (Domingo..Sábado)",
    )

    feed_theme: str = Field(
        description="Theme / headline of the post",
    )

    # conversao | awareness | engajamento | consideracao | retencao
    objective: str | None = Field(default=None)

    # estatico | carrossel | reels (post, story, reel, video, outro accepted on read)
    content_type: str | None = Field(default=None)

    # s_necessidade | pela_agencia | pelo_cliente
    content_capture: str | None = Field(
        default=None,
        description="Who sources the raw material",
    )

    approved_guidelines: str | None = Field(
        default=GuidelineApproval.UNDEFINED.value,
        index=True,
    )

    content_status: str | None = Field(
        default=ContentStatus.PENDING.value,
        index=True,
    )

    caption: str | None = Field(default=None)
    content_body: str | None = Field(
        default=None,
        description="On-asset copy / art text",
    )
    observations: str | None = Field(default=None)

    user_id: uuid.UUID = Field(
        index=True,
        description="Auth id of the creator",
    )

    client_id: uuid.UUID | None = Field(
        default=None,
        index=True,
        description="Auth id of the client this item is scoped to",
    )

    created_at: dt.datetime = Field(
        default_factory=_utcnow,
        description="Creation timestamp (UTC)",
    )

    updated_at: dt.datetime = Field(
        default_factory=_utcnow,
        sa_column_kwargs={"onupdate": _utcnow},
        description="Last update timestamp (UTC)",
    )


class ContentRejection(SQLModel, table=True):
    """
    One row per rejection of either track.

    Append-only. The integer id gives the display order of the entries.
    """

    __tablename__ = "content_rejections"

    id: int | None = Field(default=None, primary_key=True)

    content_id: uuid.UUID = Field(
        foreign_key="contents.id",
        index=True,
    )

    # approved_guidelines | content_status
    track: str = Field(description="Which status column was rejected")

    reason: str = Field(default="")

    author_id: uuid.UUID = Field(
        description="Auth id of the caller who rejected",
    )

    rejected_on: dt.date = Field(
        description="Local calendar date shown in the observations log",
    )

    created_at: dt.datetime = Field(
        default_factory=_utcnow,
        description="Creation timestamp (UTC)",
    )

# acod/services/content_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from acod.core.config import get_settings
from acod.models.content import Content, ContentRejection
from acod.models.enums import ContentStatus, GuidelineApproval, Track
from acod.models.profile import Profile
from acod.repositories.content_repo import ContentRepository
from acod.repositories.profile_repo import ProfileRepository
from acod.schemas.content import (
    ContentCreate,
    ContentRead,
    ContentUpdate,
    ThemeCreate,
)
from acod.services import access_policy, views, workflow
from acod.services.calendar import day_of_week, local_today

settings = get_settings()


class ContentService:
    """
    Business logic for content items.

    Responsibilities:
      - apply the access policy (visibility, capabilities, client scope)
      - apply creation defaults and the transition tables
      - record rejections in the append-only log
      - render observations and partition views for reads
    """

    def __init__(self, repo: ContentRepository, profile_repo: ProfileRepository):
        self.repo = repo
        self.profile_repo = profile_repo

    # -------- Helpers --------

    def _get_visible(self, session: Session, caller: Profile, content_id: uuid.UUID) -> Content:
        """
        Load an item the caller can see.

        Raises:
            HTTPException(404): missing, or outside the caller's scope.
        """
        content = self.repo.get_by_id(session, content_id)
        if not content or not access_policy.can_view(caller, content):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Content not found",
            )
        return content

    def _resolve_client(
        self,
        session: Session,
        caller: Profile,
        requested: uuid.UUID | None,
    ) -> uuid.UUID:
        try:
            client_id = access_policy.resolve_client_id(caller, requested)
        except access_policy.MissingClientSelection as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
            )
        if client_id != caller.user_id and not self.profile_repo.get_by_user_id(session, client_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unknown client_id",
            )
        return client_id

    def _to_read(self, content: Content, rejections: list[ContentRejection]) -> ContentRead:
        observations = workflow.render_observations(
            content.observations,
            [(r.rejected_on, r.reason) for r in rejections],
        )
        data = content.model_dump()
        data["observations"] = observations
        return ContentRead(**data)

    def _read_one(self, session: Session, content: Content) -> ContentRead:
        rejections = self.repo.rejections_for(session, [content.id])
        return self._to_read(content, rejections.get(content.id, []))

    # -------- Creation --------

    def create_theme(self, session: Session, caller: Profile, payload: ThemeCreate) -> ContentRead:
        """
        Theme mode: both tracks start at 'pendente' whatever the caller sent.
        """
        content = Content(
            date=payload.date,
            day_of_week=day_of_week(payload.date),
            feed_theme=payload.feed_theme,
            objective=payload.objective,
            content_type=payload.content_type,
            observations=payload.observations,
            user_id=caller.user_id,
            client_id=self._resolve_client(session, caller, payload.client_id),
            **workflow.theme_defaults(),
        )
        content = self.repo.create(session, content)
        return self._to_read(content, [])

    def create_content(self, session: Session, caller: Profile, payload: ContentCreate) -> ContentRead:
        """
        Content mode: guideline track pre-cleared, no objective.
        """
        content = Content(
            date=payload.date,
            day_of_week=day_of_week(payload.date),
            feed_theme=payload.feed_theme,
            objective=None,
            content_type=payload.content_type,
            content_capture=payload.content_capture,
            caption=payload.caption,
            content_body=payload.content_body,
            observations=payload.observations,
            user_id=caller.user_id,
            client_id=self._resolve_client(session, caller, payload.client_id),
            **workflow.content_defaults(
                payload.content_status,
                caller_is_agency=access_policy.is_agency(caller),
            ),
        )
        content = self.repo.create(session, content)
        return self._to_read(content, [])

    # -------- Reads --------

    def list_contents(
        self,
        session: Session,
        caller: Profile,
        view_mode: str,
        month: str = views.ALL,
        client_id: str = views.ALL,
    ) -> list[ContentRead]:
        """
        Visible items for one view, newest date first.

        The client filter only applies to agency callers; a client's
        visible set is already limited to their own items.
        """
        try:
            views.parse_month(month)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="month must be 'all' or 1-12",
            )
        if not access_policy.is_agency(caller):
            client_id = views.ALL
        elif client_id != views.ALL:
            try:
                uuid.UUID(client_id)
            except ValueError:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="client_id must be 'all' or a user id",
                )

        visible = self.repo.list_visible(
            session, client_id=access_policy.visible_client_filter(caller)
        )
        selected = views.build_view(visible, view_mode, month=month, client_id=client_id)

        rejections = self.repo.rejections_for(session, [c.id for c in selected])
        return [self._to_read(c, rejections.get(c.id, [])) for c in selected]

    def get_content(self, session: Session, caller: Profile, content_id: uuid.UUID) -> ContentRead:
        content = self._get_visible(session, caller, content_id)
        return self._read_one(session, content)

    # -------- Edits --------

    def update_content(
        self,
        session: Session,
        caller: Profile,
        content_id: uuid.UUID,
        payload: ContentUpdate,
    ) -> ContentRead:
        """
        Partial edit of descriptive fields (agency only).

        Changing `date` recomputes `day_of_week`.
        """
        content = self._get_visible(session, caller, content_id)
        if not access_policy.can_edit(caller, content):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Agency access required",
            )

        data = payload.model_dump(exclude_unset=True)
        if "client_id" in data:
            data["client_id"] = self._resolve_client(session, caller, data["client_id"])
        for required in ("date", "feed_theme"):
            if required in data and data[required] is None:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"{required} cannot be empty",
                )

        for field, value in data.items():
            setattr(content, field, value)
        if "date" in data:
            content.day_of_week = day_of_week(content.date)

        content = self.repo.update(session, content)
        return self._read_one(session, content)

    # -------- Status tracks --------

    def _apply_status(
        self,
        session: Session,
        caller: Profile,
        content_id: uuid.UUID,
        track: Track,
        value: str,
    ) -> ContentRead:
        content = self._get_visible(session, caller, content_id)
        if not access_policy.can_set_track(caller, content, track):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not allowed to change {track.value}",
            )

        current = getattr(content, track.value)
        try:
            workflow.ensure_transition(track, current, value)
        except workflow.InvalidTransition as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=str(exc),
            )

        setattr(content, track.value, value)
        content = self.repo.update(session, content)
        return self._read_one(session, content)

    def set_guideline_approval(
        self,
        session: Session,
        caller: Profile,
        content_id: uuid.UUID,
        value: GuidelineApproval,
    ) -> ContentRead:
        return self._apply_status(session, caller, content_id, Track.GUIDELINES, value.value)

    def set_content_status(
        self,
        session: Session,
        caller: Profile,
        content_id: uuid.UUID,
        value: ContentStatus,
    ) -> ContentRead:
        return self._apply_status(session, caller, content_id, Track.CONTENT, value.value)

    def reject(
        self,
        session: Session,
        caller: Profile,
        content_id: uuid.UUID,
        track: Track,
        reason: str,
    ) -> ContentRead:
        """
        Reject one track with a reason.

        Steps (single commit):
          1. Load the item; 404 aborts before any write.
          2. Check capability and transition to 'rejeitado'.
          3. Set the track to 'rejeitado'.
          4. Append a dated entry to the rejection log.

        Earlier observations are never rewritten; the new entry shows
        up last when observations are rendered.
        """
        content = self._get_visible(session, caller, content_id)
        if not access_policy.can_set_track(caller, content, track):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not allowed to reject {track.value}",
            )

        target = workflow.rejected_value(track)
        try:
            workflow.ensure_transition(track, getattr(content, track.value), target)
        except workflow.InvalidTransition as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=str(exc),
            )

        setattr(content, track.value, target)
        self.repo.add_rejection(
            session,
            ContentRejection(
                content_id=content.id,
                track=track.value,
                reason=reason,
                author_id=caller.user_id,
                rejected_on=local_today(settings.LOCAL_TIMEZONE),
            ),
        )
        content = self.repo.update(session, content)
        return self._read_one(session, content)

    # -------- Delete --------

    def delete_content(self, session: Session, caller: Profile, content_id: uuid.UUID) -> None:
        content = self._get_visible(session, caller, content_id)
        if not access_policy.can_delete(caller, content):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Agency access required",
            )
        self.repo.delete(session, content)

# acod/repositories/content_repo.py
import uuid
from collections import defaultdict

from sqlmodel import Session, col, select

from acod.models.content import Content, ContentRejection


class ContentRepository:
    """
    Data access layer for contents and content_rejections.

    NOTE:
      - No visibility rules here; callers pass the owner filter
        computed by the access policy.
      - Rejections are written in the same transaction as the status
        change, so `add_rejection` does not commit.
    """

    # ---- Contents ----

    def get_by_id(self, session: Session, content_id: uuid.UUID) -> Content | None:
        return session.get(Content, content_id)

    def list_visible(
        self,
        session: Session,
        client_id: uuid.UUID | None = None,
    ) -> list[Content]:
        """
        List contents newest date first.

        Args:
            client_id: restrict to one client; None returns every row.
        """
        stmt = select(Content).order_by(Content.date.desc(), Content.created_at.desc())
        if client_id is not None:
            stmt = stmt.where(Content.client_id == client_id)
        return session.exec(stmt).all()

    def list_owned_by(self, session: Session, user_id: uuid.UUID) -> list[Content]:
        stmt = select(Content).where(Content.user_id == user_id)
        return session.exec(stmt).all()

    def create(self, session: Session, content: Content) -> Content:
        session.add(content)
        session.commit()
        session.refresh(content)
        return content

    def update(self, session: Session, content: Content) -> Content:
        session.add(content)
        session.commit()
        session.refresh(content)
        return content

    def delete(self, session: Session, content: Content) -> None:
        """Delete a content item together with its rejection log."""
        self._delete_rejections(session, [content.id])
        session.delete(content)
        session.commit()

    def delete_owned_by(self, session: Session, user_id: uuid.UUID) -> int:
        """
        Delete every content item created by `user_id`.

        Returns:
            Number of content rows removed (0 when already clean).
        """
        owned = self.list_owned_by(session, user_id)
        ids = [c.id for c in owned]
        if not ids:
            return 0
        self._delete_rejections(session, ids)
        for content in owned:
            session.delete(content)
        session.commit()
        return len(ids)

    # ---- Rejection log ----

    def add_rejection(self, session: Session, rejection: ContentRejection) -> None:
        session.add(rejection)

    def rejections_for(
        self,
        session: Session,
        content_ids: list[uuid.UUID],
    ) -> dict[uuid.UUID, list[ContentRejection]]:
        """
        Rejection rows grouped by content id, oldest first.
        """
        grouped: dict[uuid.UUID, list[ContentRejection]] = defaultdict(list)
        if not content_ids:
            return grouped
        stmt = (
            select(ContentRejection)
            .where(col(ContentRejection.content_id).in_(content_ids))
            .order_by(ContentRejection.id)
        )
        for row in session.exec(stmt).all():
            grouped[row.content_id].append(row)
        return grouped

    def _delete_rejections(self, session: Session, content_ids: list[uuid.UUID]) -> None:
        stmt = select(ContentRejection).where(
            col(ContentRejection.content_id).in_(content_ids)
        )
        for row in session.exec(stmt).all():
            session.delete(row)
        # FK: log rows must be gone before their content row
        session.flush()

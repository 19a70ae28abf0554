# acod/repositories/profile_repo.py
import uuid

from sqlmodel import Session, select

from acod.models.profile import Profile


class ProfileRepository:
    """
    Data access layer for Profile.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Basic CRUD -----

    def get_by_id(self, session: Session, profile_id: uuid.UUID) -> Profile | None:
        """Return a Profile by its row id, or None if not found."""
        return session.get(Profile, profile_id)

    def get_by_user_id(self, session: Session, user_id: uuid.UUID) -> Profile | None:
        """Return the Profile linked to a Supabase auth id, or None."""
        stmt = select(Profile).where(Profile.user_id == user_id)
        return session.exec(stmt).first()

    def list_all(self, session: Session) -> list[Profile]:
        """All profiles ordered by email."""
        stmt = select(Profile).order_by(Profile.email)
        return session.exec(stmt).all()

    def list_by_role(self, session: Session, role: str) -> list[Profile]:
        stmt = select(Profile).where(Profile.role == role).order_by(Profile.email)
        return session.exec(stmt).all()

    def create(self, session: Session, profile: Profile) -> Profile:
        """
        Insert a new Profile and return the persisted row.

        Raises:
            sqlalchemy.exc.IntegrityError: if user_id already has a profile.
        """
        session.add(profile)
        session.commit()
        session.refresh(profile)
        return profile

    def update(self, session: Session, profile: Profile) -> Profile:
        """Persist changes to an existing Profile."""
        session.add(profile)
        session.commit()
        session.refresh(profile)
        return profile

    def delete(self, session: Session, profile: Profile) -> None:
        """Delete a Profile."""
        session.delete(profile)
        session.commit()

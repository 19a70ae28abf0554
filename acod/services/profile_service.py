# acod/services/profile_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from acod.core.identity import IdentityProviderError, SupabaseIdentityProvider
from acod.models.enums import Role
from acod.models.profile import Profile
from acod.repositories.content_repo import ContentRepository
from acod.repositories.profile_repo import ProfileRepository
from acod.schemas.profile import (
    ClientOption,
    InviteCreate,
    InviteRead,
    ProfileRoleUpdate,
    ProfileUpdate,
)

logger = logging.getLogger(__name__)


class ProfileService:
    """
    Business logic for profiles and the user maintenance operations.

    Responsibilities:
      - first-access profile provisioning (race-safe)
      - display-name and role edits
      - invite-user / delete-user against Supabase Auth
      - map provider errors to HTTP errors
    """

    def __init__(self, repo: ProfileRepository, content_repo: ContentRepository):
        self.repo = repo
        self.content_repo = content_repo

    # ----- Provisioning -----

    def get_or_create_for_identity(
        self,
        session: Session,
        user_id: uuid.UUID,
        email: str | None,
    ) -> Profile:
        """
        Return the caller's profile, creating it on first access.

        New profiles always get role="cliente". If a concurrent request
        created the row between our read and our insert, the unique
        constraint on user_id fires and we simply re-read it.
        """
        profile = self.repo.get_by_user_id(session, user_id)
        if profile is not None:
            return profile

        try:
            return self.repo.create(
                session,
                Profile(user_id=user_id, email=email, role=Role.CLIENT.value),
            )
        except IntegrityError:
            session.rollback()
            logger.info("Profile for %s created concurrently, re-reading", user_id)

        profile = self.repo.get_by_user_id(session, user_id)
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not provision profile",
            )
        return profile

    # ----- Self profile -----

    def update_me(self, session: Session, current: Profile, payload: ProfileUpdate) -> Profile:
        """Only the display name is editable by the owner."""
        current.display_name = payload.display_name
        return self.repo.update(session, current)

    # ----- Agency operations -----

    def list_profiles(self, session: Session) -> list[Profile]:
        return self.repo.list_all(session)

    def list_clients(self, session: Session) -> list[ClientOption]:
        """
        Options for the client selector / client filter.

        Falls back to the email (or a placeholder) when a client has no
        display name yet.
        """
        return [
            ClientOption(
                id=p.user_id,
                email=p.email or "Sem email",
                display_name=p.display_name or p.email or "Sem nome",
            )
            for p in self.repo.list_by_role(session, Role.CLIENT.value)
        ]

    def get_profile(self, session: Session, profile_id: uuid.UUID) -> Profile:
        """
        Raises:
            HTTPException(404): if not found.
        """
        profile = self.repo.get_by_id(session, profile_id)
        if not profile:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Profile not found",
            )
        return profile

    def rename(self, session: Session, profile_id: uuid.UUID, payload: ProfileUpdate) -> Profile:
        profile = self.get_profile(session, profile_id)
        profile.display_name = payload.display_name
        return self.repo.update(session, profile)

    def change_role(
        self,
        session: Session,
        profile_id: uuid.UUID,
        payload: ProfileRoleUpdate,
    ) -> Profile:
        """
        Change a profile's role.

        Applies from the next request on; data already fetched by that
        user is not re-filtered.
        """
        profile = self.get_profile(session, profile_id)
        profile.role = payload.role.value
        return self.repo.update(session, profile)

    # ----- Maintenance: invite / delete -----

    def invite_user(
        self,
        session: Session,
        provider: SupabaseIdentityProvider,
        payload: InviteCreate,
        redirect_to: str | None = None,
    ) -> InviteRead:
        """
        Invite a new user by email and create the matching profile.

        Steps:
          1. Supabase Auth creates an 'invited' identity and sends the email.
          2. Upsert the profile row keyed by the new auth id.

        A failing step 2 is only logged: the profile is auto-provisioned
        on the user's first request anyway.

        Raises:
            HTTPException(400): email already registered, delivery failure.
        """
        try:
            identity = provider.invite_user_by_email(
                payload.email,
                role=payload.role.value,
                display_name=payload.display_name,
                redirect_to=redirect_to,
            )
        except IdentityProviderError as exc:
            logger.warning("Invite for %s failed: %s", payload.email, exc)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
            )

        try:
            profile = self.repo.get_by_user_id(session, identity.id)
            if profile is None:
                profile = Profile(user_id=identity.id)
            profile.email = payload.email
            profile.role = payload.role.value
            profile.display_name = payload.display_name
            self.repo.update(session, profile)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Invite for %s sent but profile upsert failed", payload.email)

        logger.info("Invited %s as %s", payload.email, payload.role.value)
        return InviteRead(
            user_id=identity.id,
            email=payload.email,
            role=payload.role,
            display_name=payload.display_name,
        )

    def delete_user(
        self,
        session: Session,
        provider: SupabaseIdentityProvider,
        user_id: uuid.UUID,
    ) -> None:
        """
        Remove an identity and everything it owns.

        `user_id` is the Supabase auth id, not the profile row id.

        Steps, in order, each skipped when already done so a retry after
        a partial failure converges:
          1. Delete content items created by the identity.
          2. Delete the profile. Failure is logged and we keep going;
             the identity is the source of truth.
          3. Delete the identity unless Supabase Auth no longer has it.

        Raises:
            HTTPException(400): the identity step failed. Steps 1-2 may
            already be committed.
        """
        removed = self.content_repo.delete_owned_by(session, user_id)
        logger.info("delete-user %s: removed %d content items", user_id, removed)

        try:
            profile = self.repo.get_by_user_id(session, user_id)
            if profile is not None:
                self.repo.delete(session, profile)
                logger.info("delete-user %s: profile removed", user_id)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("delete-user %s: profile removal failed, continuing", user_id)

        try:
            if provider.exists(user_id):
                provider.delete_user(user_id)
                logger.info("delete-user %s: identity removed", user_id)
        except IdentityProviderError as exc:
            logger.error("delete-user %s: identity removal failed: %s", user_id, exc)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
            )

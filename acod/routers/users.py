# acod/routers/users.py
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlmodel import Session

from acod.core.auth import require_agency
from acod.core.config import get_settings
from acod.core.identity import SupabaseIdentityProvider, get_identity_provider
from acod.database import get_session
from acod.repositories.content_repo import ContentRepository
from acod.repositories.profile_repo import ProfileRepository
from acod.schemas.profile import InviteCreate, InviteRead
from acod.services.profile_service import ProfileService

router = APIRouter(
    prefix="/users",
    tags=["User maintenance"],
    dependencies=[Depends(require_agency)],
)

settings = get_settings()
service = ProfileService(ProfileRepository(), ContentRepository())


def _invite_redirect(request: Request) -> str | None:
    if settings.INVITE_REDIRECT_URL:
        return settings.INVITE_REDIRECT_URL
    origin = request.headers.get("origin")
    if not origin:
        return None
    return f"{origin}/auth?setup_password=true"


@router.post(
    "/invite",
    response_model=InviteRead,
    status_code=status.HTTP_201_CREATED,
)
def invite_user(
    payload: InviteCreate,
    request: Request,
    session: Session = Depends(get_session),
    provider: SupabaseIdentityProvider = Depends(get_identity_provider),
):
    """
    Invite a user by email (agency only).

    Creates the Supabase Auth identity (invite email sent by Supabase)
    and the matching profile row with the chosen role and name.
    """
    return service.invite_user(
        session,
        provider,
        payload,
        redirect_to=_invite_redirect(request),
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: uuid.UUID,
    confirm: bool = False,
    session: Session = Depends(get_session),
    provider: SupabaseIdentityProvider = Depends(get_identity_provider),
):
    """
    Delete a user's content items, profile and auth identity (agency only).

    `user_id` is the auth id (profiles.user_id), not the profile row id.
    Requires `?confirm=true`.

    A 400 means the identity step failed; content and profile may
    already be gone. Calling again finishes the cleanup.
    """
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Confirmation required",
        )
    service.delete_user(session, provider, user_id)

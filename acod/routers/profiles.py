# acod/routers/profiles.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from acod.core.auth import require_auth, require_agency
from acod.database import get_session
from acod.models.profile import Profile
from acod.repositories.content_repo import ContentRepository
from acod.repositories.profile_repo import ProfileRepository
from acod.schemas.profile import (
    ClientOption,
    ProfileRead,
    ProfileRoleUpdate,
    ProfileUpdate,
)
from acod.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["Profiles"])

service = ProfileService(ProfileRepository(), ContentRepository())


# -------- Self profile --------


@router.get("/me", response_model=ProfileRead)
def read_me(current: Profile = Depends(require_auth)):
    """
    Return the caller's profile.

    The row is created on first access with role="cliente".
    """
    return current


@router.patch("/me", response_model=ProfileRead)
def update_me(
    payload: ProfileUpdate,
    session: Session = Depends(get_session),
    current: Profile = Depends(require_auth),
):
    """
    Update the caller's display name.
    """
    return service.update_me(session, current, payload)


# -------- Agency endpoints --------


@router.get(
    "",
    response_model=list[ProfileRead],
    dependencies=[Depends(require_agency)],
)
def list_profiles(session: Session = Depends(get_session)):
    """
    List all profiles (agency only), ordered by email.
    """
    return service.list_profiles(session)


@router.get(
    "/clients",
    response_model=list[ClientOption],
    dependencies=[Depends(require_agency)],
)
def list_clients(session: Session = Depends(get_session)):
    """
    Client options for the creation form and the client filter.

    `id` is the client's auth id (the value stored in contents.client_id).
    """
    return service.list_clients(session)


@router.patch(
    "/{profile_id}",
    response_model=ProfileRead,
    dependencies=[Depends(require_agency)],
)
def rename_profile(
    profile_id: uuid.UUID,
    payload: ProfileUpdate,
    session: Session = Depends(get_session),
):
    """
    Edit another user's display name (agency only).
    """
    return service.rename(session, profile_id, payload)


@router.patch(
    "/{profile_id}/role",
    response_model=ProfileRead,
    dependencies=[Depends(require_agency)],
)
def change_role(
    profile_id: uuid.UUID,
    payload: ProfileRoleUpdate,
    session: Session = Depends(get_session),
):
    """
    Update a profile's role (agency only).

    Allowed roles: agencia, cliente.
    """
    return service.change_role(session, profile_id, payload)

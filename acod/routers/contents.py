# acod/routers/contents.py
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from acod.core.auth import require_auth
from acod.database import get_session
from acod.models.enums import Track
from acod.models.profile import Profile
from acod.repositories.content_repo import ContentRepository
from acod.repositories.profile_repo import ProfileRepository
from acod.schemas.content import (
    ContentCreate,
    ContentRead,
    ContentStatusUpdate,
    ContentUpdate,
    GuidelineApprovalUpdate,
    RejectionCreate,
    ThemeCreate,
    ViewMode,
)
from acod.services.content_service import ContentService

router = APIRouter(prefix="/contents", tags=["Contents"])

service = ContentService(ContentRepository(), ProfileRepository())


# -------- Listing / creation --------


@router.get("", response_model=list[ContentRead])
def list_contents(
    view: ViewMode = "themes",
    month: str = "all",
    client_id: str = "all",
    session: Session = Depends(get_session),
    current: Profile = Depends(require_auth),
):
    """
    Items of one view ("themes" or "contents"), newest date first.

    Query params:
      - month: "all" or 1-12 (any year)
      - client_id: "all" or a client's auth id (agency callers only;
        ignored for clients, who only ever see their own items)
    """
    return service.list_contents(session, current, view, month=month, client_id=client_id)


@router.post("/themes", response_model=ContentRead, status_code=status.HTTP_201_CREATED)
def create_theme(
    payload: ThemeCreate,
    session: Session = Depends(get_session),
    current: Profile = Depends(require_auth),
):
    """
    Create an item in theme mode.

    Both tracks start at 'pendente'. Agency callers must send client_id.
    """
    return service.create_theme(session, current, payload)


@router.post("", response_model=ContentRead, status_code=status.HTTP_201_CREATED)
def create_content(
    payload: ContentCreate,
    session: Session = Depends(get_session),
    current: Profile = Depends(require_auth),
):
    """
    Create an item in content mode.

    approved_guidelines is set to 'aprovado'; content_status is taken
    from the payload for agency callers and forced to 'pendente' for
    clients.
    """
    return service.create_content(session, current, payload)


# -------- Single item --------


@router.get("/{content_id}", response_model=ContentRead)
def get_content(
    content_id: uuid.UUID,
    session: Session = Depends(get_session),
    current: Profile = Depends(require_auth),
):
    return service.get_content(session, current, content_id)


@router.patch("/{content_id}", response_model=ContentRead)
def update_content(
    content_id: uuid.UUID,
    payload: ContentUpdate,
    session: Session = Depends(get_session),
    current: Profile = Depends(require_auth),
):
    """
    Edit descriptive fields (agency only). Statuses and observations
    are not editable here.
    """
    return service.update_content(session, current, content_id, payload)


@router.delete("/{content_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_content(
    content_id: uuid.UUID,
    confirm: bool = False,
    session: Session = Depends(get_session),
    current: Profile = Depends(require_auth),
):
    """
    Delete an item (agency only). Requires `?confirm=true`.
    """
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Confirmation required",
        )
    service.delete_content(session, current, content_id)


# -------- Guideline track --------


@router.patch("/{content_id}/guidelines", response_model=ContentRead)
def set_guideline_approval(
    content_id: uuid.UUID,
    payload: GuidelineApprovalUpdate,
    session: Session = Depends(get_session),
    current: Profile = Depends(require_auth),
):
    """
    Set approved_guidelines (agency only).

      indefinido -> pendente
      pendente   -> aprovado, rejeitado
      aprovado   -> rejeitado, pendente
      rejeitado  -> pendente
    """
    return service.set_guideline_approval(session, current, content_id, payload.value)


@router.post("/{content_id}/guidelines/reject", response_model=ContentRead)
def reject_guidelines(
    content_id: uuid.UUID,
    payload: RejectionCreate,
    session: Session = Depends(get_session),
    current: Profile = Depends(require_auth),
):
    """
    Reject the theme with a reason (agency only).
    """
    return service.reject(session, current, content_id, Track.GUIDELINES, payload.reason)


# -------- Content track --------


@router.patch("/{content_id}/status", response_model=ContentRead)
def set_content_status(
    content_id: uuid.UUID,
    payload: ContentStatusUpdate,
    session: Session = Depends(get_session),
    current: Profile = Depends(require_auth),
):
    """
    Set content_status (agency, or the item's client).
    """
    return service.set_content_status(session, current, content_id, payload.value)


@router.post("/{content_id}/status/reject", response_model=ContentRead)
def reject_content(
    content_id: uuid.UUID,
    payload: RejectionCreate,
    session: Session = Depends(get_session),
    current: Profile = Depends(require_auth),
):
    """
    Reject the finished content with a reason (agency, or the item's client).

    The reason is appended to observations as
    "[Rejeição - dd/mm/yyyy]: <reason>".
    """
    return service.reject(session, current, content_id, Track.CONTENT, payload.reason)

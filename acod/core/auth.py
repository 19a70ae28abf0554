# acod/core/auth.py
import uuid
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from acod.core.config import get_settings
from acod.database import get_session
from acod.models.profile import Profile
from acod.repositories.content_repo import ContentRepository
from acod.repositories.profile_repo import ProfileRepository
from acod.services.access_policy import is_agency
from acod.services.profile_service import ProfileService

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => a missing Authorization header does not raise here,
#   require_auth turns it into a 401.
bearer_scheme = HTTPBearer(auto_error=False)

profile_service = ProfileService(ProfileRepository(), ContentRepository())


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (JWT).

    Verification:
      - signature (HS256 using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Args:
        token: raw JWT from the Authorization header.

    Returns:
        Decoded JWT claims.

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_current_profile(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> Profile | None:
    """
    Resolve the caller's profile from a Supabase JWT.

    Flow:
      1. If no Authorization header => anonymous => return None.
      2. Decode JWT => extract 'sub' (auth user id) and 'email'.
      3. Convert 'sub' to UUID to match Profile.user_id.
      4. Load the profile, auto-provisioning it (role 'cliente') if missing.

    The stored role is used as-is.

    Raises:
        HTTPException(401): if token is malformed or missing 'sub'.
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")
    email = payload.get("email")

    if not sub:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub",
        )

    # Supabase provides sub as a string; enforce UUID
    try:
        sub_uuid = uuid.UUID(sub)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    return profile_service.get_or_create_for_identity(session, sub_uuid, email)


def require_auth(profile: Profile | None = Depends(get_current_profile)) -> Profile:
    """
    Enforce authentication.

    Raises:
        HTTPException(401): if there is no valid token.
    """
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return profile


def require_agency(profile: Profile = Depends(require_auth)) -> Profile:
    """
    Enforce agency role (role='agencia').

    Raises:
        HTTPException(403): for client callers.
    """
    if not is_agency(profile):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Agency access required",
        )
    return profile

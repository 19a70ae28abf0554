# acod/core/identity.py
"""
Identity Provider wrapper around Supabase Auth admin API.

Only the privileged operations the backend needs are exposed:
  - invite a user by email (creates an 'invited' auth identity)
  - check whether an identity still exists
  - hard-delete an identity

Every Supabase Auth failure is re-raised as IdentityProviderError so
services can map it to an HTTP error without knowing the client library.
"""
import uuid
from dataclasses import dataclass

from supabase import AuthApiError, AuthError, Client

from acod.core.supabase_client import supabase_admin


class IdentityProviderError(RuntimeError):
    """Raised when Supabase Auth rejects or fails an admin operation."""


@dataclass
class IdentityUser:
    id: uuid.UUID
    email: str | None = None


class SupabaseIdentityProvider:
    """
    Thin adapter over `client.auth.admin`.

    The client MUST be created with the service role key.
    """

    def __init__(self, client: Client):
        self.client = client

    def invite_user_by_email(
        self,
        email: str,
        *,
        role: str,
        display_name: str,
        redirect_to: str | None = None,
    ) -> IdentityUser:
        """
        Send a Supabase invite email and return the created identity.

        Role and display name travel as user metadata, so a DB trigger on
        auth.users (if configured) sees the same values as our profile row.

        Raises:
            IdentityProviderError: already registered, delivery failure, etc.
        """
        options: dict = {"data": {"role": role, "display_name": display_name}}
        if redirect_to:
            options["redirect_to"] = redirect_to

        try:
            response = self.client.auth.admin.invite_user_by_email(email, options)
        except AuthError as exc:
            raise IdentityProviderError(exc.message) from exc

        if response.user is None:
            raise IdentityProviderError("Invite did not return a user")

        return IdentityUser(id=uuid.UUID(str(response.user.id)), email=response.user.email)

    def exists(self, user_id: uuid.UUID) -> bool:
        """Return False if Supabase Auth reports the identity as not found."""
        try:
            response = self.client.auth.admin.get_user_by_id(str(user_id))
        except AuthApiError as exc:
            if exc.status == 404:
                return False
            raise IdentityProviderError(exc.message) from exc
        except AuthError as exc:
            raise IdentityProviderError(exc.message) from exc
        return response.user is not None

    def delete_user(self, user_id: uuid.UUID) -> None:
        """Hard-delete an identity (no soft delete)."""
        try:
            self.client.auth.admin.delete_user(str(user_id))
        except AuthError as exc:
            raise IdentityProviderError(exc.message) from exc


def get_identity_provider() -> SupabaseIdentityProvider:
    """
    FastAPI dependency returning the admin-backed identity provider.

    Tests override this with an in-memory fake.
    """
    return SupabaseIdentityProvider(supabase_admin())

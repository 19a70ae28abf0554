# acod/services/access_policy.py
"""
Role-based capabilities.

agencia:
  - sees every content item (optionally narrowed by the client filter)
  - may set / reject either track, edit and delete any item
  - manages profiles (invite, rename, role change, delete)
  - must pick a client when creating an item

cliente:
  - sees only items whose client_id is their own auth id
  - may set / reject the content_status track of visible items only
  - is always the client of the items they create

The stored profile role is the only input; there is no override.
"""
import uuid

from acod.models.content import Content
from acod.models.enums import Role, Track
from acod.models.profile import Profile


class MissingClientSelection(ValueError):
    """Agency caller created an item without choosing a client."""


def is_agency(profile: Profile) -> bool:
    return profile.role == Role.AGENCY.value


def visible_client_filter(profile: Profile) -> uuid.UUID | None:
    """
    Owner filter for list queries: None means "every row".
    """
    if is_agency(profile):
        return None
    return profile.user_id


def can_view(profile: Profile, content: Content) -> bool:
    return is_agency(profile) or content.client_id == profile.user_id


def can_set_track(profile: Profile, content: Content, track: Track) -> bool:
    """Covers both direct status updates and rejections."""
    if not can_view(profile, content):
        return False
    if is_agency(profile):
        return True
    return track is Track.CONTENT


def can_edit(profile: Profile, content: Content) -> bool:
    return is_agency(profile)


def can_delete(profile: Profile, content: Content) -> bool:
    return is_agency(profile)


def can_manage_profiles(profile: Profile) -> bool:
    return is_agency(profile)


def resolve_client_id(profile: Profile, requested: uuid.UUID | None) -> uuid.UUID:
    """
    Client scope for a new item.

    Raises:
        MissingClientSelection: agency caller did not choose a client.
    """
    if not is_agency(profile):
        return profile.user_id
    if requested is None:
        raise MissingClientSelection("Selecione um cliente: client_id is required")
    return requested

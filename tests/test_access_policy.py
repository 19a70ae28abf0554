"""Role capabilities, checked without HTTP."""
import uuid
from datetime import date

import pytest

from acod.models.content import Content
from acod.models.enums import Role, Track
from acod.models.profile import Profile
from acod.services import access_policy


def _profile(role: Role) -> Profile:
    return Profile(user_id=uuid.uuid4(), email="x@example.com", role=role.value)


def _content(client_id: uuid.UUID) -> Content:
    return Content(
        date=date(2024, 3, 15),
        day_of_week="Sexta",
        feed_theme="Spring Launch",
        user_id=uuid.uuid4(),
        client_id=client_id,
    )


@pytest.fixture
def agency() -> Profile:
    return _profile(Role.AGENCY)


@pytest.fixture
def cliente() -> Profile:
    return _profile(Role.CLIENT)


def test_new_profile_defaults_to_client():
    profile = Profile(user_id=uuid.uuid4())
    assert profile.role == "cliente"
    assert not access_policy.is_agency(profile)


def test_agency_sees_everything(agency):
    assert access_policy.visible_client_filter(agency) is None
    assert access_policy.can_view(agency, _content(uuid.uuid4()))


def test_client_sees_only_own_items(cliente):
    assert access_policy.visible_client_filter(cliente) == cliente.user_id
    assert access_policy.can_view(cliente, _content(cliente.user_id))
    assert not access_policy.can_view(cliente, _content(uuid.uuid4()))


def test_agency_can_set_both_tracks(agency):
    item = _content(uuid.uuid4())
    assert access_policy.can_set_track(agency, item, Track.GUIDELINES)
    assert access_policy.can_set_track(agency, item, Track.CONTENT)


def test_client_can_set_only_content_track_of_own_items(cliente):
    own = _content(cliente.user_id)
    other = _content(uuid.uuid4())

    assert access_policy.can_set_track(cliente, own, Track.CONTENT)
    assert not access_policy.can_set_track(cliente, own, Track.GUIDELINES)
    assert not access_policy.can_set_track(cliente, other, Track.CONTENT)


def test_only_agency_edits_deletes_and_manages(agency, cliente):
    item = _content(cliente.user_id)
    assert access_policy.can_delete(agency, item)
    assert access_policy.can_edit(agency, item)
    assert access_policy.can_manage_profiles(agency)

    assert not access_policy.can_delete(cliente, item)
    assert not access_policy.can_edit(cliente, item)
    assert not access_policy.can_manage_profiles(cliente)


def test_client_is_always_their_own_client(cliente):
    assert access_policy.resolve_client_id(cliente, None) == cliente.user_id
    assert access_policy.resolve_client_id(cliente, uuid.uuid4()) == cliente.user_id


def test_agency_must_choose_client(agency):
    chosen = uuid.uuid4()
    assert access_policy.resolve_client_id(agency, chosen) == chosen
    with pytest.raises(access_policy.MissingClientSelection):
        access_policy.resolve_client_id(agency, None)

"""Pytest configuration and fixtures for the approval API tests."""
import os
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# Set test env BEFORE any app imports
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-testing")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

# Clear config cache so get_settings picks up test env
from acod.core.config import get_settings

get_settings.cache_clear()

from acod.core.identity import IdentityProviderError, IdentityUser, get_identity_provider
from acod.database import get_session
from acod.main import app
from acod.models.enums import Role
from acod.models.profile import Profile

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    echo=False,
)


class FakeIdentityProvider:
    """In-memory stand-in for Supabase Auth admin calls."""

    def __init__(self):
        self.users: dict[uuid.UUID, IdentityUser] = {}
        self.invites: list[dict] = []
        self.invite_error: str | None = None
        self.delete_error: str | None = None
        self.on_delete: Callable[[uuid.UUID], None] | None = None

    def add_user(self, email: str, user_id: uuid.UUID | None = None) -> IdentityUser:
        user = IdentityUser(id=user_id or uuid.uuid4(), email=email)
        self.users[user.id] = user
        return user

    def invite_user_by_email(self, email, *, role, display_name, redirect_to=None):
        if self.invite_error:
            raise IdentityProviderError(self.invite_error)
        if any(u.email == email for u in self.users.values()):
            raise IdentityProviderError(
                "A user with this email address has already been registered"
            )
        self.invites.append(
            {
                "email": email,
                "role": role,
                "display_name": display_name,
                "redirect_to": redirect_to,
            }
        )
        return self.add_user(email)

    def exists(self, user_id):
        return user_id in self.users

    def delete_user(self, user_id):
        if self.on_delete is not None:
            self.on_delete(user_id)
        if self.delete_error:
            raise IdentityProviderError(self.delete_error)
        self.users.pop(user_id, None)


def make_token(user_id: uuid.UUID, email: str | None = None) -> str:
    """Mint a Supabase-style access token signed with the test secret."""
    claims = {
        "sub": str(user_id),
        "aud": "authenticated",
        "role": "authenticated",
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    if email:
        claims["email"] = email
    return jwt.encode(claims, get_settings().SUPABASE_JWT_SECRET, algorithm="HS256")


def auth_headers(user_id: uuid.UUID, email: str | None = None) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, email)}"}


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create tables and yield a test database session."""
    SQLModel.metadata.create_all(test_engine)
    with Session(test_engine) as session:
        yield session
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def client(
    db_session: Session,
    identity_provider: FakeIdentityProvider,
) -> Generator[TestClient, None, None]:
    """Test client with DB session and identity provider overridden."""

    def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def make_profile(db_session: Session) -> Callable[..., Profile]:
    """Insert a profile row directly and return it."""

    def _make(role: Role = Role.CLIENT, email: str | None = None, display_name: str | None = None) -> Profile:
        user_id = uuid.uuid4()
        profile = Profile(
            user_id=user_id,
            email=email or f"{user_id.hex[:8]}@example.com",
            display_name=display_name,
            role=role.value,
        )
        db_session.add(profile)
        db_session.commit()
        db_session.refresh(profile)
        return profile

    return _make


@pytest.fixture
def agency(make_profile) -> Profile:
    return make_profile(Role.AGENCY, email="agencia@acod.com.br", display_name="Acod")


@pytest.fixture
def client_x(make_profile) -> Profile:
    return make_profile(Role.CLIENT, email="cliente.x@example.com", display_name="Cliente X")


@pytest.fixture
def client_y(make_profile) -> Profile:
    return make_profile(Role.CLIENT, email="cliente.y@example.com", display_name="Cliente Y")


@pytest.fixture
def agency_headers(agency: Profile) -> dict:
    return auth_headers(agency.user_id, agency.email)


@pytest.fixture
def client_x_headers(client_x: Profile) -> dict:
    return auth_headers(client_x.user_id, client_x.email)


@pytest.fixture
def client_y_headers(client_y: Profile) -> dict:
    return auth_headers(client_y.user_id, client_y.email)


@pytest.fixture
def headers_for() -> Callable[..., dict]:
    """Build Authorization headers for an arbitrary auth id."""
    return auth_headers

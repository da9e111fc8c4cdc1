"""Test fixtures for the invite service tests."""

from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient

from company_invites.api.invites import get_invite_handler
from company_invites.config import Settings
from company_invites.core.errors import InviteProviderError, PersistenceError
from company_invites.main import app
from company_invites.schemas.invite import AllowedEmail, AuthUser, InviteMetadata, Membership
from company_invites.services.backend import Backend
from company_invites.services.invite_handler import InviteHandler

ADMIN_TOKEN = "admin-token"
MEMBER_TOKEN = "member-token"
LONER_TOKEN = "loner-token"


class FakeIdentityService:
    def __init__(self):
        self.users = {
            ADMIN_TOKEN: AuthUser(id="u-admin", email="admin@x.com"),
            MEMBER_TOKEN: AuthUser(id="u-member", email="member@x.com"),
            LONER_TOKEN: AuthUser(id="u-loner", email="loner@x.com"),
        }
        self.invites: list[tuple[str, str, InviteMetadata]] = []
        self.invite_error: str | None = None
        self.verify_calls = 0

    async def verify_token(self, token: str) -> AuthUser | None:
        self.verify_calls += 1
        return self.users.get(token)

    async def invite_user_by_email(self, email, redirect_to, data) -> None:
        self.invites.append((email, redirect_to, data))
        if self.invite_error is not None:
            raise InviteProviderError(self.invite_error)


class FakeRecordStore:
    def __init__(self):
        self.memberships = {
            "u-admin": Membership(company_id="c1", is_admin=True),
            "u-member": Membership(company_id="c1", is_admin=False),
        }
        # keyed on (company_id, email), like the table's unique constraint
        self.allowed_emails: dict[tuple[str, str], AllowedEmail] = {}
        self.upsert_error: str | None = None
        self.lookup_error: str | None = None
        self.calls = 0

    async def find_membership(self, user_id: str) -> Membership | None:
        self.calls += 1
        if self.lookup_error is not None:
            raise PersistenceError(self.lookup_error)
        return self.memberships.get(user_id)

    async def upsert_allowed_email(self, entry: AllowedEmail) -> None:
        self.calls += 1
        if self.upsert_error is not None:
            raise PersistenceError(self.upsert_error)
        self.allowed_emails[(entry.company_id, entry.email)] = entry


@pytest.fixture
def identity() -> FakeIdentityService:
    return FakeIdentityService()


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        supabase_url="https://project.supabase.co",
        supabase_service_role_key="service-role-key",
    )


@pytest.fixture
def handler(test_settings, identity, store) -> InviteHandler:
    @asynccontextmanager
    async def fake_backend(_settings):
        yield Backend(identity=identity, store=store)

    return InviteHandler(test_settings, backend_factory=fake_backend)


@pytest.fixture
async def client(handler: InviteHandler) -> AsyncClient:
    """Get an HTTP client with the fake backend injected."""
    app.dependency_overrides[get_invite_handler] = lambda: handler
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}

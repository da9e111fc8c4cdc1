"""Tests for capability mapping, token extraction and error helpers."""

from company_invites.core.authorization import Capability, resolve_capability
from company_invites.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    InviteProviderError,
    MethodNotAllowedError,
    PersistenceError,
    ValidationError,
    is_already_registered_error,
)
from company_invites.core.security import extract_bearer_token
from company_invites.schemas.invite import Membership
from company_invites.services.invite_handler import normalize_email, parse_invite_request


class TestResolveCapability:
    def test_no_membership(self):
        assert resolve_capability(None) is Capability.NOT_FOUND

    def test_membership_without_company(self):
        assert resolve_capability(Membership(company_id=None, is_admin=True)) is Capability.NOT_FOUND

    def test_member(self):
        assert resolve_capability(Membership(company_id="c1", is_admin=False)) is Capability.MEMBER

    def test_admin(self):
        assert resolve_capability(Membership(company_id="c1", is_admin=True)) is Capability.ADMIN


class TestExtractBearerToken:
    def test_bearer_prefix_removed(self):
        assert extract_bearer_token("Bearer abc.def") == "abc.def"

    def test_missing_header(self):
        assert extract_bearer_token(None) == ""

    def test_prefix_only(self):
        assert extract_bearer_token("Bearer ") == ""

    def test_raw_token_kept(self):
        assert extract_bearer_token("abc.def") == "abc.def"


class TestAlreadyRegistered:
    def test_matches_provider_wording(self):
        assert is_already_registered_error(
            "A user with this email address has already been registered"
        )

    def test_case_insensitive(self):
        assert is_already_registered_error("Already Been Registered")

    def test_other_errors(self):
        assert not is_already_registered_error("Email rate limit exceeded")
        assert not is_already_registered_error("")
        assert not is_already_registered_error(None)


def test_error_status_codes():
    assert MethodNotAllowedError("x").status_code == 405
    assert ConfigurationError("x").status_code == 500
    assert AuthenticationError("x").status_code == 401
    assert AuthorizationError("x").status_code == 403
    assert ValidationError("x").status_code == 400
    assert PersistenceError("x").status_code == 400
    assert InviteProviderError("x").status_code == 400
    assert InviteProviderError("x", status_code=502).status_code == 502


def test_parse_invite_request():
    assert parse_invite_request(b'{"email": "a@b.com", "extra": 1}').email == "a@b.com"
    assert parse_invite_request(b"{broken").email is None
    assert parse_invite_request(b"\xff\xfe").email is None
    assert parse_invite_request(b"null").email is None
    assert parse_invite_request(b'{"email": ["a@b.com"]}').email is None


def test_normalize_email():
    assert normalize_email("  Jane.Doe@Example.COM\n") == "jane.doe@example.com"
    assert normalize_email(None) == ""

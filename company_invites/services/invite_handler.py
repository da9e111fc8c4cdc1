"""Invite-a-user orchestration: authenticate, authorize, allow-list, invite."""

import json
import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from company_invites.config import (
    ALREADY_REGISTERED_WARNING,
    DASHBOARD_URL,
    LOGIN_URL,
    MANAGE_URL,
    SET_PASSWORD_URL,
    USERS_URL,
    Settings,
)
from company_invites.core.authorization import Capability, resolve_capability
from company_invites.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    InviteProviderError,
    PersistenceError,
    ValidationError,
    is_already_registered_error,
)
from company_invites.core.security import extract_bearer_token
from company_invites.logging_config import log_context
from company_invites.schemas.invite import (
    AllowedEmail,
    InviteMetadata,
    InviteRequest,
    InviteResult,
)
from company_invites.services.backend import Backend, open_backend

logger = logging.getLogger(__name__)

BackendFactory = Callable[[Settings], AbstractAsyncContextManager[Backend]]

INVITE_METADATA = InviteMetadata(
    login_url=LOGIN_URL,
    manage_url=MANAGE_URL,
    dashboard_url=DASHBOARD_URL,
    users_url=USERS_URL,
)


def parse_invite_request(raw_body: bytes) -> InviteRequest:
    """Parse the request body leniently; anything unusable becomes an empty request."""
    try:
        body = json.loads(raw_body) if raw_body else {}
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    email = body.get("email")
    return InviteRequest(email=email if isinstance(email, str) else None)


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


class InviteHandler:
    """Handles one invite submission per call; holds no state between requests."""

    def __init__(self, settings: Settings, backend_factory: BackendFactory = open_backend):
        self.settings = settings
        self._backend_factory = backend_factory

    async def invite(self, authorization: str | None, raw_body: bytes) -> InviteResult:
        if not self.settings.backend_configured:
            logger.error("Invite rejected: Supabase URL or service role key not configured")
            raise ConfigurationError("Missing server config")

        token = extract_bearer_token(authorization)
        if not token:
            raise AuthenticationError("Missing auth token")

        async with self._backend_factory(self.settings) as backend:
            user = await backend.identity.verify_token(token)
            if user is None:
                raise AuthenticationError("Unauthorized")

            email = normalize_email(parse_invite_request(raw_body).email)
            if not email:
                raise ValidationError("Email is required")

            try:
                membership = await backend.store.find_membership(user.id)
            except PersistenceError as exc:
                logger.warning(
                    f"Membership lookup failed for user {user.id}: {exc.message}",
                    extra=log_context(user_id=user.id),
                )
                membership = None

            capability = resolve_capability(membership)
            if capability is Capability.NOT_FOUND:
                raise AuthorizationError("Company not found")
            if capability is not Capability.ADMIN:
                logger.warning(
                    f"Non-admin user {user.id} attempted an invite",
                    extra=log_context(user_id=user.id, company_id=membership.company_id),
                )
                raise AuthorizationError("Admin access required")

            company_id = membership.company_id
            log_extra = log_context(user_id=user.id, company_id=company_id)

            await backend.store.upsert_allowed_email(
                AllowedEmail(company_id=company_id, email=email, is_admin=False)
            )
            logger.info(f"Allow-listed {email} for company {company_id}", extra=log_extra)

            try:
                await backend.identity.invite_user_by_email(
                    email, redirect_to=SET_PASSWORD_URL, data=INVITE_METADATA
                )
            except InviteProviderError as exc:
                if is_already_registered_error(exc.message):
                    logger.info(f"{email} already registered; access granted", extra=log_extra)
                    return InviteResult(warning=ALREADY_REGISTERED_WARNING)
                logger.error(f"Invite for {email} failed: {exc.message}", extra=log_extra)
                raise

        logger.info(f"Invite sent to {email}", extra=log_extra)
        return InviteResult()

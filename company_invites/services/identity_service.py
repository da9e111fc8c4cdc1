"""Supabase Auth (GoTrue) calls: token verification and email invites."""

import logging

import httpx

from company_invites.core.errors import InviteProviderError
from company_invites.schemas.invite import AuthUser, InviteMetadata
from company_invites.services.supabase_client import AUTH_PATH, error_message

logger = logging.getLogger(__name__)


class IdentityService:
    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def verify_token(self, token: str) -> AuthUser | None:
        """Resolve a user access token to its identity, or None if invalid/expired."""
        resp = await self._client.get(
            f"{AUTH_PATH}/user",
            headers={"Authorization": f"Bearer {token}"},
        )
        if resp.status_code != 200:
            logger.info(f"Token verification rejected: {resp.status_code}")
            return None
        try:
            data = resp.json()
        except ValueError:
            logger.warning("Token verification returned a non-JSON body")
            return None
        if not isinstance(data, dict) or not data.get("id"):
            return None
        return AuthUser.model_validate(data)

    async def invite_user_by_email(
        self, email: str, redirect_to: str, data: InviteMetadata
    ) -> None:
        """Ask the provider to create (or look up) the user and send an invite email.

        Raises InviteProviderError with the provider's message on failure.
        """
        resp = await self._client.post(
            f"{AUTH_PATH}/invite",
            params={"redirect_to": redirect_to},
            json={"email": email, "data": data.model_dump()},
        )
        if resp.status_code >= 400:
            raise InviteProviderError(error_message(resp, "Invite failed"))

"""PostgREST access to company membership and allow-list tables."""

import logging

import httpx

from company_invites.core.errors import PersistenceError
from company_invites.schemas.invite import AllowedEmail, Membership
from company_invites.services.supabase_client import REST_PATH, error_message

logger = logging.getLogger(__name__)

COMPANY_USERS_TABLE = "company_users"
ALLOWED_EMAILS_TABLE = "company_allowed_emails"
ALLOWED_EMAILS_CONFLICT_KEY = "company_id,email"


class RecordStore:
    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def find_membership(self, user_id: str) -> Membership | None:
        """Look up the caller's company membership.

        Returns None when the user belongs to no company. More than one
        matching row is a lookup error.
        """
        resp = await self._client.get(
            f"{REST_PATH}/{COMPANY_USERS_TABLE}",
            params={"select": "company_id,is_admin", "user_id": f"eq.{user_id}"},
        )
        if resp.status_code != 200:
            raise PersistenceError(error_message(resp, "Membership lookup failed"))

        rows = resp.json()
        if not rows:
            return None
        if len(rows) > 1:
            raise PersistenceError(
                "JSON object requested, multiple (or no) rows returned"
            )
        return Membership.model_validate(rows[0])

    async def upsert_allowed_email(self, entry: AllowedEmail) -> None:
        """Insert the allow-list entry, or update it if (company_id, email) exists."""
        resp = await self._client.post(
            f"{REST_PATH}/{ALLOWED_EMAILS_TABLE}",
            params={"on_conflict": ALLOWED_EMAILS_CONFLICT_KEY},
            headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
            json=[entry.model_dump()],
        )
        if resp.status_code >= 400:
            logger.error(f"Allow-list upsert failed: {resp.status_code} {resp.text}")
            raise PersistenceError(error_message(resp, "Upsert failed"))

"""Shared Supabase REST constants and client factory."""

import httpx

from company_invites.config import HTTP_TIMEOUT, Settings

AUTH_PATH = "/auth/v1"
REST_PATH = "/rest/v1"


def get_supabase_client(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """Create an httpx client authenticated with the service role key."""
    key = settings.supabase_service_role_key
    return httpx.AsyncClient(
        base_url=settings.supabase_url.rstrip("/"),
        headers={"apikey": key, "Authorization": f"Bearer {key}"},
        timeout=HTTP_TIMEOUT,
        transport=transport,
    )


def error_message(resp: httpx.Response, default: str) -> str:
    """Pull a human-readable message out of a GoTrue or PostgREST error body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text or default
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return default


"""Request-scoped access to the Supabase collaborators."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from company_invites.config import Settings
from company_invites.services.identity_service import IdentityService
from company_invites.services.record_store import RecordStore
from company_invites.services.supabase_client import get_supabase_client


@dataclass
class Backend:
    identity: IdentityService
    store: RecordStore


@asynccontextmanager
async def open_backend(settings: Settings) -> AsyncIterator[Backend]:
    """Open one Supabase client shared by both collaborators for a single request."""
    async with get_supabase_client(settings) as client:
        yield Backend(identity=IdentityService(client), store=RecordStore(client))

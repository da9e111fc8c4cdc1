from fastapi import APIRouter

from company_invites.api.invites import router as invites_router

api_router = APIRouter(prefix="/api")

api_router.include_router(invites_router)

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from company_invites.config import settings
from company_invites.core.errors import MethodNotAllowedError
from company_invites.services.invite_handler import InviteHandler

router = APIRouter(tags=["invites"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_invite_handler() -> InviteHandler:
    return InviteHandler(settings)


@router.api_route("/invite-user", methods=ROUTED_METHODS, summary="Invite User")
async def invite_user(request: Request, handler: InviteHandler = Depends(get_invite_handler)):
    """Allow-list an email for the caller's company and send it an invitation."""
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_204_NO_CONTENT, headers=CORS_HEADERS)
    if request.method != "POST":
        raise MethodNotAllowedError("Method not allowed")

    result = await handler.invite(request.headers.get("Authorization"), await request.body())
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=result.model_dump(exclude_none=True),
        headers=CORS_HEADERS,
    )

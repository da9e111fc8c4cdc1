from pydantic import BaseModel

# company_users.company_id may be a uuid/text or a bigint column
CompanyId = str | int


class AuthUser(BaseModel):
    id: str
    email: str | None = None

    model_config = {"extra": "ignore"}


class Membership(BaseModel):
    company_id: CompanyId | None = None
    is_admin: bool | None = False

    model_config = {"extra": "ignore"}


class AllowedEmail(BaseModel):
    company_id: CompanyId
    email: str
    is_admin: bool = False


class InviteMetadata(BaseModel):
    """User metadata embedded in the invitation for the invitee's later use."""

    login_url: str
    manage_url: str
    dashboard_url: str
    users_url: str


class InviteRequest(BaseModel):
    email: str | None = None

    model_config = {"extra": "ignore"}


class InviteResult(BaseModel):
    ok: bool = True
    warning: str | None = None


class ErrorResponse(BaseModel):
    error: str

import enum

from company_invites.schemas.invite import Membership


class Capability(str, enum.Enum):
    NOT_FOUND = "not_found"
    MEMBER = "member"
    ADMIN = "admin"


def resolve_capability(membership: Membership | None) -> Capability:
    """Map a caller's company membership to what they may do in that company."""
    if membership is None or not membership.company_id:
        return Capability.NOT_FOUND
    if membership.is_admin:
        return Capability.ADMIN
    return Capability.MEMBER

"""Error taxonomy for the invite endpoint.

Every error is terminal for the request. The HTTP layer renders
``{"error": exc.message}`` with ``exc.status_code``.
"""

from fastapi import status

ALREADY_REGISTERED_MARKER = "already been registered"


class InviteServiceError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MethodNotAllowedError(InviteServiceError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED


class ConfigurationError(InviteServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class AuthenticationError(InviteServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(InviteServiceError):
    status_code = status.HTTP_403_FORBIDDEN


class ValidationError(InviteServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class PersistenceError(InviteServiceError):
    """Record store rejected a read or write; message comes from the store."""

    status_code = status.HTTP_400_BAD_REQUEST


class InviteProviderError(InviteServiceError):
    """Identity provider refused the invite; message comes from the provider."""

    status_code = status.HTTP_400_BAD_REQUEST


def is_already_registered_error(message: str | None) -> bool:
    """Whether an invite failure means the user already has an account.

    Matches on the provider's wording, which is not a stable contract.
    """
    if not message:
        return False
    return ALREADY_REGISTERED_MARKER in message.lower()

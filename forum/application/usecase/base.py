"""Helpers shared by use cases."""

from uuid import UUID

from forum.domain.error import AuthenticationRequiredError, ValidationError
from forum.domain.value import AuthContext, UserId


def parse_uuid(value: str, field: str) -> UUID:
    """Parse an identifier received from a caller.

    Args:
        value: UUID string
        field: Field name used in the error message

    Returns:
        Parsed UUID

    Raises:
        ValidationError: If the value is not a UUID
    """
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}: {value!r}")


def require_requester(auth: AuthContext, action: str) -> UserId:
    """Return the requester of an authenticated context.

    Args:
        auth: Authentication context of the request
        action: What the caller tried to do (for the error message)

    Returns:
        The requester's user ID

    Raises:
        AuthenticationRequiredError: If the context is not authenticated
    """
    if not auth.is_authenticated or auth.requester_id is None:
        raise AuthenticationRequiredError(action)
    return auth.requester_id

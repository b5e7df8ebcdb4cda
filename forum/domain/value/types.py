"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import model_validator

from forum.domain.value.common import ValueObject
from forum.domain.value.identifiers import UserId


class ErrorKind(str, Enum):
    """Stable category carried by every domain error.

    Callers map the kind to a transport-level status.
    """

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    AUTHORIZATION = "authorization"
    AUTHENTICATION = "authentication"
    STORE_TIMEOUT = "store_timeout"
    STORE_UNAVAILABLE = "store_unavailable"


class AuthContext(ValueObject):
    """Authentication context attached to every comment operation.

    Credentials are checked by the interface layer; the core only uses
    ``requester_id`` for authorization decisions.
    """

    is_authenticated: bool = False
    requester_id: UserId | None = None

    @model_validator(mode="after")
    def validate_requester(self) -> "AuthContext":
        """An authenticated context must name its requester."""
        if self.is_authenticated and self.requester_id is None:
            raise ValueError("Authenticated context requires a requester_id")
        return self

    @classmethod
    def anonymous(cls) -> "AuthContext":
        """Context for a request without valid credentials."""
        return cls(is_authenticated=False, requester_id=None)

    @classmethod
    def for_user(cls, user_id: UserId) -> "AuthContext":
        """Context for an authenticated user."""
        return cls(is_authenticated=True, requester_id=user_id)

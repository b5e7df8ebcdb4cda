"""Domain layer errors.

Every error carries a stable ``kind`` so the interface layer can map it to
a transport status without inspecting messages.
"""

from forum.domain.value import ErrorKind


class DomainError(Exception):
    """Base domain error."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Domain validation error (empty content, bad paging, missing field)."""

    kind = ErrorKind.VALIDATION


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AuthorizationError(DomainError):
    """Raised when a user acts on content they don't own."""

    kind = ErrorKind.AUTHORIZATION

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class AuthenticationRequiredError(AuthorizationError):
    """Raised when an operation is attempted without an authenticated user."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, action: str):
        self.action = action
        DomainError.__init__(self, f"Authentication required to {action}")


class StoreError(DomainError):
    """Base error for record store failures."""

    kind = ErrorKind.STORE_UNAVAILABLE


class StoreTimeout(StoreError):
    """The record store did not answer before the deadline."""

    kind = ErrorKind.STORE_TIMEOUT

    def __init__(self, operation: str, timeout: float):
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"Store operation {operation} timed out after {timeout:.2f}s")


class StoreUnavailable(StoreError):
    """The record store could not be reached or rejected the operation."""

    kind = ErrorKind.STORE_UNAVAILABLE

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Store operation {operation} failed: {reason}")

"""JWT token domain service."""

from uuid import UUID

import logfire

from forum.config import AuthSettings
from forum.domain.value import AuthContext, UserId
from forum.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations.

    Tokens are issued by the account service; this service only verifies
    them and turns them into an ``AuthContext``.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            return create_token(user_id, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.debug("JWT token verified", user_id=payload.user_id)
                return payload
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Extract user ID from JWT token without raising exceptions.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token).user_id
        except JWTError:
            # Invalid or expired token, treat as unauthenticated
            return None

    def auth_context(self, token: str | None) -> AuthContext:
        """Build the authentication context for a request.

        Args:
            token: JWT token string (optional)

        Returns:
            Authenticated context for a valid token, anonymous otherwise
        """
        user_id = self.get_user_id_from_token(token)
        if not user_id:
            return AuthContext.anonymous()

        try:
            return AuthContext.for_user(UserId(UUID(user_id)))
        except ValueError:
            logfire.warn("JWT token carries a malformed user id", user_id=user_id)
            return AuthContext.anonymous()

"""JWT bearer authentication backend for Django REST Framework.

Access tokens are issued by the auth service and validated locally against
the shared ``JWT_SECRET``.
"""

from typing import Any

from django.conf import settings

import jwt
import structlog
from rest_framework import authentication, exceptions

logger = structlog.get_logger(__name__)


class AuthenticatedUser:
    """Container for the claims of a validated access token.

    This is not a Django User model.
    """

    def __init__(self, user_id: str, client_id: str | None, scopes: list[str]):
        """Initialize the authenticated user.

        Args:
            user_id: Subject of the token
            client_id: OAuth2 client the token was issued to
            scopes: Granted scopes
        """
        self.id = user_id
        self.user_id = user_id
        self.client_id = client_id
        self.scopes = scopes
        self.is_authenticated = True

    def has_scope(self, scope: str) -> bool:
        """Check if the token grants ``scope``."""
        return scope in self.scopes

    def has_any_scope(self, *scopes: str) -> bool:
        """Check if the token grants at least one of ``scopes``."""
        return any(scope in self.scopes for scope in scopes)

    def __str__(self):
        """String representation."""
        return f"AuthenticatedUser(user_id={self.user_id}, client_id={self.client_id})"


class JWTAuthentication(authentication.BaseAuthentication):
    """Bearer token authentication with locally verified JWTs."""

    def authenticate(self, request):
        """Authenticate the request from its ``Authorization`` header.

        Returns:
            Tuple of (user, token) or None if no credentials were sent

        Raises:
            AuthenticationFailed: If the header or the token is invalid
        """
        auth_header = request.headers.get("authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise exceptions.AuthenticationFailed("Invalid authorization header format")

        token = parts[1]
        claims = self._decode(token)

        user_id = claims.get("sub") or claims.get("user_id")
        if not user_id:
            raise exceptions.AuthenticationFailed("Token has no subject")

        scopes = claims.get("scopes", [])
        if isinstance(scopes, str):
            scopes = scopes.split()

        user = AuthenticatedUser(
            user_id=str(user_id),
            client_id=claims.get("client_id"),
            scopes=list(scopes),
        )
        return (user, token)

    def _decode(self, token: str) -> dict[str, Any]:
        if not settings.JWT_SECRET:
            logger.error("jwt_secret_not_configured")
            raise exceptions.AuthenticationFailed("JWT validation not configured")

        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=settings.JWT_ALGORITHMS,
                options={
                    "verify_signature": True,
                    "verify_exp": True,
                    "verify_iat": True,
                    "verify_nbf": True,
                },
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("jwt_expired")
            raise exceptions.AuthenticationFailed("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("jwt_invalid", error=str(e))
            raise exceptions.AuthenticationFailed("Invalid token") from e

        token_type = payload.get("type")
        if token_type != "access_token":
            logger.warning("jwt_wrong_type", token_type=token_type)
            raise exceptions.AuthenticationFailed(f"Invalid token type: {token_type}")
        return payload

    def authenticate_header(self, _request):
        """Return WWW-Authenticate header value for 401 responses."""
        return "Bearer"

"""Authentication for the reminder API."""

from reminders.auth.jwt_authentication import AuthenticatedUser, JWTAuthentication

__all__ = ["AuthenticatedUser", "JWTAuthentication"]

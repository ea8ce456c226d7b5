"""JWT token utilities.

Tokens are minted by the identity provider; this service verifies them to
learn who is calling and which capabilities they hold.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from civic.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    handle: str | None = None
    permissions: list[str] = []
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    settings: AuthSettings,
    handle: str | None = None,
    permissions: list[str] | None = None,
) -> str:
    """Create a JWT token for the user.

    Used by tooling and tests; production tokens come from the identity provider.

    Args:
        user_id: User ID
        settings: Authentication settings
        handle: Display handle
        permissions: Capability names granted to the user

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "handle": handle,
        "permissions": permissions or [],
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    try:
        return TokenPayload(**payload)
    except ValueError:
        raise JWTError("Malformed token payload")

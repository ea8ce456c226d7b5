"""Caller identity resolved from the request's JWT."""

from dataclasses import dataclass, field

from civic.domain.service import JWTService
from civic.domain.value import Capability, UserId
from civic.interface.error import UnauthenticatedError


@dataclass(frozen=True)
class Identity:
    """Authenticated caller."""

    user_id: UserId
    handle: str | None = None
    permissions: frozenset[str] = field(default_factory=frozenset)

    @property
    def can_moderate(self) -> bool:
        return Capability.MODERATE_COMMENTS.value in self.permissions


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def resolve_identity(
    jwt_service: JWTService,
    authorization: str | None = None,
    auth_token: str | None = None,
) -> Identity | None:
    """Resolve the caller from the Authorization header or the auth cookie.

    The header wins when both are sent. Invalid or expired tokens yield an
    anonymous caller.

    Args:
        jwt_service: JWT service for token verification
        authorization: Authorization header value
        auth_token: auth_token cookie value

    Returns:
        Identity, or None for anonymous callers
    """
    payload = jwt_service.get_payload_from_token(
        _bearer_token(authorization) or auth_token
    )
    if payload is None or not payload.user_id:
        return None
    return Identity(
        user_id=UserId(payload.user_id),
        handle=payload.handle,
        permissions=frozenset(payload.permissions),
    )


def require_identity(
    jwt_service: JWTService,
    action: str,
    authorization: str | None = None,
    auth_token: str | None = None,
) -> Identity:
    """Resolve the caller, rejecting anonymous requests.

    Raises:
        UnauthenticatedError: If no valid token was sent
    """
    identity = resolve_identity(jwt_service, authorization, auth_token)
    if identity is None:
        raise UnauthenticatedError(action)
    return identity

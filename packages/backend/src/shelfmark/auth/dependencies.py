"""FastAPI auth dependencies.

get_current_user is attached to every protected router. It extracts the
Bearer token from the Authorization header, verifies it, and resolves it
to a CurrentIdentity. Route handlers pass that identity explicitly into
the service layer; there is no global "current user".
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Header, Request

from shelfmark.auth.jwt import verify_token
from shelfmark.config import settings
from shelfmark.errors import AuthError

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class CurrentIdentity:
    """The authenticated caller making the request."""

    user_id: str


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token from an `Authorization: Bearer <token>` header.

    Any other shape (missing header, other scheme, bare token, extra
    whitespace) is rejected before the token is looked at.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthError("Authentication required")
    token = authorization[len(BEARER_PREFIX):]
    if not token or any(ch.isspace() for ch in token):
        raise AuthError("Authentication required")
    return token


def authenticate_header(
    authorization: Optional[str],
    secret: str,
    algorithm: str = "HS256",
) -> CurrentIdentity:
    """Resolve an Authorization header into the caller's identity."""
    token = extract_bearer_token(authorization)
    claims = verify_token(token, secret, algorithm)
    user_id = claims.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise AuthError("Invalid token")
    return CurrentIdentity(user_id=user_id)


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> CurrentIdentity:
    """Extract current identity (required — 401 if missing or invalid)."""
    identity = authenticate_header(
        authorization, settings.jwt_secret, settings.jwt_algorithm
    )
    request.state.user_id = identity.user_id
    structlog.contextvars.bind_contextvars(user_id=identity.user_id)
    return identity

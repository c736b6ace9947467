"""JWT token creation and verification.

Tokens are short-lived HS256 JWTs: {"sub": user_id, "iat": ..., "exp": ...}.
There are no refresh tokens; a client signs in again once a token expires.
"""

from datetime import datetime, timedelta, timezone

import jwt

from shelfmark.errors import AuthError

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenError(AuthError):
    """Raised when a token is malformed, tampered with, or expired."""


def sign_token(
    claims: dict,
    secret: str,
    ttl: timedelta,
    algorithm: str = "HS256",
) -> str:
    """Sign `claims` with an issued-at/expiry window."""
    now = datetime.now(timezone.utc)
    payload = {**claims, "iat": now, "exp": now + ttl}
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> dict:
    """Verify and decode a JWT token.

    Returns the payload dict on success.
    Raises TokenError on failure.
    """
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError:
        raise TokenError("Invalid token")

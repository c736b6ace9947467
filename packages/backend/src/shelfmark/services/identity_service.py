"""Identity service — signup, signin, and "who am I".

Service layer separates business logic from HTTP routing: routes build a
service around the request's stores and translate nothing themselves;
domain errors propagate to the app's exception handler.

Signin deliberately reports an unknown email and a wrong password with
the same AuthError so callers can't probe which emails are registered.
"""

import asyncio
import re
from datetime import timedelta
from functools import lru_cache
from typing import Optional

import structlog

from shelfmark.auth.jwt import sign_token
from shelfmark.auth.password import hash_password, verify_password
from shelfmark.db.stores import DuplicateKeyError, InvalidIdentifierError, UserStore
from shelfmark.errors import AuthError, ConflictError, NotFoundError, ValidationError

logger = structlog.get_logger()

EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
INVALID_CREDENTIALS = "Invalid credentials"


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    """A throwaway hash at the configured cost, for unknown-email signins."""
    return hash_password("shelfmark-unknown-account", rounds)


def _verify_unknown(password: str, rounds: int) -> bool:
    return verify_password(password, _dummy_hash(rounds))


class IdentityService:
    """Credential lifecycle: hash-and-store on signup, verify-and-issue on signin."""

    def __init__(
        self,
        users: UserStore,
        secret: str,
        algorithm: str = "HS256",
        token_ttl: timedelta = timedelta(minutes=60),
        bcrypt_rounds: int = 10,
    ):
        self.users = users
        self.secret = secret
        self.algorithm = algorithm
        self.token_ttl = token_ttl
        self.bcrypt_rounds = bcrypt_rounds

    async def signup(
        self,
        fname: Optional[str],
        lname: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> dict:
        if any(_blank(v) for v in (fname, lname, email, password)):
            raise ValidationError("Please provide all required fields")
        if not EMAIL_PATTERN.fullmatch(email):
            raise ValidationError("email must be an email")

        if await self.users.find_by_email(email):
            raise ConflictError("user already exists")

        password_hash = await asyncio.to_thread(
            hash_password, password, self.bcrypt_rounds
        )
        try:
            user = await self.users.insert(
                fname=fname, lname=lname, email=email, password_hash=password_hash
            )
        except DuplicateKeyError:
            # Lost a race with a concurrent signup for the same email
            raise ConflictError("user already exists")

        logger.info("identity.signed_up", user_id=str(user.id))
        return {"msg": "User created successfully", "email": user.email}

    async def signin(self, email: Optional[str], password: Optional[str]) -> dict:
        if _blank(email) or _blank(password):
            raise ValidationError("Email and password are required")

        user = await self.users.find_by_email(email)
        if user is None:
            # Unknown emails pay the same bcrypt cost as a real check
            await asyncio.to_thread(_verify_unknown, password, self.bcrypt_rounds)
            logger.info("identity.signin_failed", reason="unknown_email")
            raise AuthError(INVALID_CREDENTIALS)

        matches = await asyncio.to_thread(
            verify_password, password, user.password_hash
        )
        if not matches:
            logger.info(
                "identity.signin_failed", reason="bad_password", user_id=str(user.id)
            )
            raise AuthError(INVALID_CREDENTIALS)

        token = sign_token(
            {"sub": str(user.id)}, self.secret, self.token_ttl, self.algorithm
        )
        logger.info("identity.signed_in", user_id=str(user.id))
        return {
            "msg": "Signed In!",
            "token": token,
            "token_type": "bearer",
            "expires_in": int(self.token_ttl.total_seconds()),
        }

    async def who_am_i(self, user_id: str) -> dict:
        try:
            user = await self.users.find_by_id(user_id)
        except InvalidIdentifierError:
            raise AuthError("Invalid token")
        if user is None:
            raise NotFoundError("User not found")
        return {
            "user_id": str(user.id),
            "email": user.email,
            "fname": user.fname,
            "lname": user.lname,
        }

"""Auth API — signup and signin.

- POST /auth/signup → create a user account
- POST /auth/signin → email/password → bearer token

Both routes are open; everything else requires a token.
"""

from datetime import timedelta

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shelfmark.config import settings
from shelfmark.db.engine import get_db
from shelfmark.db.stores import UserStore
from shelfmark.schemas.auth import (
    SigninRequest,
    SigninResponse,
    SignupRequest,
    SignupResponse,
)
from shelfmark.services.identity_service import IdentityService

router = APIRouter(prefix="/auth")


def identity_service(db: AsyncSession = Depends(get_db)) -> IdentityService:
    return IdentityService(
        UserStore(db),
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        token_ttl=timedelta(minutes=settings.access_token_expire_minutes),
        bcrypt_rounds=settings.bcrypt_rounds,
    )


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(
    body: SignupRequest, svc: IdentityService = Depends(identity_service)
):
    """Create a new user account."""
    return await svc.signup(
        fname=body.fname, lname=body.lname, email=body.email, password=body.password
    )


@router.post("/signin", response_model=SigninResponse)
async def signin(
    body: SigninRequest, svc: IdentityService = Depends(identity_service)
):
    """Sign in with email and password → bearer token."""
    return await svc.signin(email=body.email, password=body.password)

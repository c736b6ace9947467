"""Current-user route."""

from fastapi import APIRouter, Depends

from shelfmark.api.auth import identity_service
from shelfmark.auth.dependencies import CurrentIdentity, get_current_user
from shelfmark.schemas.auth import UserMe
from shelfmark.services.identity_service import IdentityService

router = APIRouter(prefix="/users")


@router.get("/me", response_model=UserMe)
async def get_me(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: IdentityService = Depends(identity_service),
):
    """Get the current authenticated user's info."""
    return await svc.who_am_i(identity.user_id)

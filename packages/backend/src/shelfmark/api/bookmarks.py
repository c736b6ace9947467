"""Bookmark API routes.

Routes resolve the caller via get_current_user and hand the identity to
BookmarkService, which applies the ownership gate. Domain errors raised
by the service are rendered by the app-level exception handler.

bookmark_id is taken as a plain string so a malformed id is reported by
the service as a 400 rather than by FastAPI's path validation.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from shelfmark.auth.dependencies import CurrentIdentity, get_current_user
from shelfmark.db.engine import get_db
from shelfmark.db.stores import BookmarkStore
from shelfmark.schemas.bookmark import BookmarkCreate, BookmarkRead, BookmarkUpdate
from shelfmark.services.bookmark_service import BookmarkService

router = APIRouter(prefix="/bookmarks")


def _svc(db: AsyncSession = Depends(get_db)) -> BookmarkService:
    return BookmarkService(BookmarkStore(db))


@router.get("", response_model=list[BookmarkRead])
async def list_bookmarks(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: BookmarkService = Depends(_svc),
):
    """List all bookmarks owned by the caller."""
    return await svc.list_bookmarks(identity.user_id)


@router.post("", response_model=BookmarkRead, status_code=201)
async def create_bookmark(
    body: Optional[BookmarkCreate] = None,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: BookmarkService = Depends(_svc),
):
    """Create a bookmark. Every field is optional, and so is the body."""
    body = body or BookmarkCreate()
    return await svc.create_bookmark(
        identity.user_id, body.model_dump(exclude_unset=True)
    )


@router.get("/{bookmark_id}", response_model=BookmarkRead)
async def get_bookmark(
    bookmark_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: BookmarkService = Depends(_svc),
):
    return await svc.get_bookmark(identity.user_id, bookmark_id)


@router.api_route(
    "/{bookmark_id}", methods=["PATCH", "PUT"], response_model=BookmarkRead
)
async def update_bookmark(
    bookmark_id: str,
    body: BookmarkUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: BookmarkService = Depends(_svc),
):
    """Merge the supplied fields into the bookmark (PUT behaves like PATCH)."""
    return await svc.update_bookmark(
        identity.user_id, bookmark_id, body.model_dump(exclude_unset=True)
    )


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: BookmarkService = Depends(_svc),
):
    await svc.delete_bookmark(identity.user_id, bookmark_id)
    return Response(status_code=204)

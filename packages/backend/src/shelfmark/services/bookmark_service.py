"""Bookmark service — ownership-gated CRUD.

Every operation takes the authenticated caller's user id first. Reads,
updates, and deletes go through the same gate:

1. the id must be well formed            → ValidationError
2. the bookmark must exist               → NotFoundError
3. the caller must own it                → ForbiddenError

Existence is always checked before ownership, so a missing bookmark
reports "not found" no matter whose it would have been.
"""

from typing import Any, Mapping

import structlog

from shelfmark.db.models import Bookmark
from shelfmark.db.stores import BookmarkStore, InvalidIdentifierError, parse_id
from shelfmark.errors import AuthError, ForbiddenError, NotFoundError, ValidationError

logger = structlog.get_logger()

EDITABLE_FIELDS = frozenset({"title", "description", "link"})


def _check_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    unknown = set(fields) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(
            f"Unknown bookmark field(s): {', '.join(sorted(unknown))}"
        )
    return dict(fields)


class BookmarkService:
    """Business logic for a caller's bookmarks."""

    def __init__(self, bookmarks: BookmarkStore):
        self.bookmarks = bookmarks

    async def list_bookmarks(self, caller: str) -> list[Bookmark]:
        return await self.bookmarks.find_by_owner(self._owner_key(caller))

    async def get_bookmark(self, caller: str, bookmark_id: str) -> Bookmark:
        return await self._load_owned(caller, bookmark_id)

    async def create_bookmark(
        self, caller: str, fields: Mapping[str, Any]
    ) -> Bookmark:
        values = _check_fields(fields)
        bookmark = await self.bookmarks.insert(self._owner_key(caller), values)
        logger.info("bookmark.created", bookmark_id=str(bookmark.id))
        return bookmark

    async def update_bookmark(
        self, caller: str, bookmark_id: str, fields: Mapping[str, Any]
    ) -> Bookmark:
        values = _check_fields(fields)
        bookmark = await self._load_owned(caller, bookmark_id)
        if not values:
            return bookmark

        updated = await self.bookmarks.update_by_id(bookmark.id, values)
        if updated is None:
            # Deleted between the ownership check and the write
            raise NotFoundError("Bookmark not found")
        logger.info(
            "bookmark.updated",
            bookmark_id=str(updated.id),
            fields=sorted(values),
        )
        return updated

    async def delete_bookmark(self, caller: str, bookmark_id: str) -> None:
        bookmark = await self._load_owned(caller, bookmark_id)
        if not await self.bookmarks.delete_by_id(bookmark.id):
            raise NotFoundError("Bookmark not found")
        logger.info("bookmark.deleted", bookmark_id=str(bookmark.id))

    # ─── Ownership gate ─────────────────────────────────

    async def _load_owned(self, caller: str, bookmark_id: str) -> Bookmark:
        try:
            bookmark = await self.bookmarks.find_by_id(bookmark_id)
        except InvalidIdentifierError:
            raise ValidationError("Invalid bookmark id")

        if bookmark is None:
            raise NotFoundError("Bookmark not found")

        if str(bookmark.owner_id) != str(self._owner_key(caller)):
            logger.warning("bookmark.access_denied", bookmark_id=str(bookmark.id))
            raise ForbiddenError("Access to resource denied")

        return bookmark

    @staticmethod
    def _owner_key(caller: str):
        try:
            return parse_id(caller)
        except InvalidIdentifierError:
            raise AuthError("Invalid token")

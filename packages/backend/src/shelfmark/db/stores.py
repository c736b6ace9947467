"""Persistence interface for users and bookmarks.

Each store wraps the request's AsyncSession and exposes one awaitable
call per persistence operation. Writes commit their own unit of work,
so a single store call is a complete logical operation.

Failures surface as StoreError subclasses; the service layer maps them
onto the domain error taxonomy.
"""

import uuid
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shelfmark.db.models import Bookmark, User


class StoreError(Exception):
    """Base class for persistence failures."""


class InvalidIdentifierError(StoreError):
    """An identifier is not in the store's id format."""


class DuplicateKeyError(StoreError):
    """A unique constraint rejected the write."""


def parse_id(raw: Any) -> uuid.UUID:
    """Parse an opaque identifier into the store's UUID key."""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError) as e:
        raise InvalidIdentifierError(f"Malformed identifier: {raw!r}") from e


class UserStore:
    """Credential store: user identity plus password hash."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def find_by_id(self, user_id: Any) -> Optional[User]:
        return await self.db.get(User, parse_id(user_id))

    async def insert(
        self, fname: str, lname: str, email: str, password_hash: str
    ) -> User:
        """Persist a new user. Raises DuplicateKeyError if the email is taken."""
        user = User(
            fname=fname,
            lname=lname,
            email=email,
            password_hash=password_hash,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateKeyError(f"Duplicate email: {email}") from e
        return user


class BookmarkStore:
    """Bookmark records keyed by id, each tagged with an owner id."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, bookmark_id: Any) -> Optional[Bookmark]:
        return await self.db.get(Bookmark, parse_id(bookmark_id))

    async def find_by_owner(self, owner_id: Any) -> list[Bookmark]:
        result = await self.db.execute(
            select(Bookmark)
            .where(Bookmark.owner_id == parse_id(owner_id))
            .order_by(Bookmark.created_at, Bookmark.id)
        )
        return list(result.scalars().all())

    async def insert(self, owner_id: Any, fields: dict[str, Any]) -> Bookmark:
        bookmark = Bookmark(owner_id=parse_id(owner_id), **fields)
        self.db.add(bookmark)
        await self.db.commit()
        return bookmark

    async def update_by_id(
        self, bookmark_id: Any, fields: dict[str, Any]
    ) -> Optional[Bookmark]:
        """Merge `fields` into the stored record. Returns None if it's gone."""
        bookmark = await self.find_by_id(bookmark_id)
        if bookmark is None:
            return None
        if not fields:
            return bookmark
        for name, value in fields.items():
            setattr(bookmark, name, value)
        await self.db.commit()
        return bookmark

    async def delete_by_id(self, bookmark_id: Any) -> bool:
        """Remove the record permanently. Returns False if it didn't exist."""
        bookmark = await self.find_by_id(bookmark_id)
        if bookmark is None:
            return False
        await self.db.delete(bookmark)
        await self.db.commit()
        return True

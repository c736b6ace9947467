"""SQLAlchemy ORM models — single source of truth for the database schema.

SQLAlchemy 2.0 declarative style (Mapped[] + mapped_column). Alembic
compares these models against the live schema when generating migrations.

Primary keys use the portable Uuid type: native UUID on PostgreSQL,
CHAR(32) elsewhere.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_uuid() -> uuid.UUID:
    return uuid.uuid4()


class User(Base):
    """A registered user. Created on signup; never mutated afterwards."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=new_uuid
    )
    # Case-sensitive as stored; uniqueness is enforced by the database.
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    fname: Mapped[str] = mapped_column(String(100), nullable=False)
    lname: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    bookmarks: Mapped[list["Bookmark"]] = relationship(
        back_populates="owner", passive_deletes=True
    )


class Bookmark(Base):
    """A bookmark owned by exactly one user.

    owner_id is set once at creation and never reassigned; every read,
    update, and delete is checked against it.
    """

    __tablename__ = "bookmarks"
    __table_args__ = (
        Index("ix_bookmarks_owner_id", "owner_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=new_uuid
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    link: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    owner: Mapped["User"] = relationship(back_populates="bookmarks")

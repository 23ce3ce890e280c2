"""Data access for users and their embedded saved books."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .database.connection import get_async_session
from .dbmodels import Users
from .errors import ValidationError
from .logging import get_logger

logger = get_logger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]

# Unique constraint name -> field reported back to the caller
UNIQUE_FIELDS = {
    "users_username_key": "username",
    "users_email_key": "email",
}


def parse_user_id(value: str | UUID) -> UUID | None:
    """Return ``value`` as a UUID, or None if it is not one."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


def duplicate_field(error: IntegrityError) -> str | None:
    message = str(error.orig)
    for constraint, field in UNIQUE_FIELDS.items():
        if constraint in message:
            return field
    return None


class UserRepository:
    """Reads and writes user documents.

    Every method runs in its own session from ``session_factory``, so each
    call is a single transaction.
    """

    def __init__(self, session_factory: SessionFactory = get_async_session):
        self._session = session_factory

    async def find_user(self, id: str | UUID | None = None, username: str | None = None) -> Users | None:
        """Find one user whose id OR username matches.

        Returns None without querying when neither identifier is usable.
        """
        conditions = []
        if id is not None:
            user_id = parse_user_id(id)
            if user_id is None:
                logger.debug("Ignoring malformed user id", id=str(id))
            else:
                conditions.append(Users.id == user_id)
        if username is not None:
            conditions.append(Users.username == username)

        if not conditions:
            return None

        async with self._session() as session:
            stmt = select(Users).where(or_(*conditions)).order_by(Users.created_at).limit(1)
            result = await session.execute(stmt)
            return result.scalars().first()

    async def find_by_username_or_email(self, username_or_email: str) -> Users | None:
        value = username_or_email.strip()
        async with self._session() as session:
            stmt = (
                select(Users)
                .where(or_(Users.username == value, Users.email == value.lower()))
                .order_by(Users.created_at)
                .limit(1)
            )
            result = await session.execute(stmt)
            return result.scalars().first()

    async def create_user(self, *, username: str, email: str, password_hash: str) -> Users:
        """Insert a new user with an empty saved list.

        Raises:
            ValidationError: If the username or email is already taken
        """
        async with self._session() as session:
            user = Users(
                username=username,
                email=email,
                password_hash=password_hash,
                saved_books=[],
            )
            session.add(user)
            try:
                await session.flush()
            except IntegrityError as e:
                field = duplicate_field(e)
                logger.info("Rejected duplicate user", field=field)
                if field is None:
                    raise ValidationError("User violates a uniqueness constraint") from e
                raise ValidationError(f"A user with that {field} already exists") from e

            await session.refresh(user)
            return user

    async def add_saved_book(self, user_id: UUID, book: dict[str, Any]) -> Users | None:
        """Add ``book`` to the user's saved list unless an equal document is there.

        The row is locked for the duration of the transaction so concurrent
        saves on one user are applied one after another.
        """
        async with self._session() as session:
            user = await self._lock_user(session, user_id)
            if user is None:
                return None

            current = list(user.saved_books or [])
            if book in current:
                logger.debug("Book already saved", user_id=str(user_id), book_id=book.get("bookId"))
                return user

            user.saved_books = [*current, book]
            user.updated_at = datetime.now(UTC)
            return user

    async def pull_saved_books(self, user_id: UUID, book_id: str) -> Users | None:
        """Remove every saved book whose bookId equals ``book_id``."""
        async with self._session() as session:
            user = await self._lock_user(session, user_id)
            if user is None:
                return None

            current = list(user.saved_books or [])
            remaining = [book for book in current if book.get("bookId") != book_id]
            if len(remaining) != len(current):
                user.saved_books = remaining
                user.updated_at = datetime.now(UTC)
            return user

    async def _lock_user(self, session: AsyncSession, user_id: UUID) -> Users | None:
        stmt = select(Users).where(Users.id == user_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

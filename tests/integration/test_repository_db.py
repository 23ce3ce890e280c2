"""
Integration tests for UserRepository against a migrated PostgreSQL database.
"""

import asyncio

import pytest

from bookshelf.database.connection import get_async_session
from bookshelf.errors import ValidationError
from bookshelf.repository import UserRepository

pytestmark = [pytest.mark.requires_db, pytest.mark.integration]


def book(book_id, title="T"):
    return {
        "bookId": book_id,
        "title": title,
        "authors": [],
        "description": None,
        "image": None,
        "link": None,
    }


@pytest.fixture
def repository(db_session):
    _ = db_session
    return UserRepository(session_factory=get_async_session)


class TestUserRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_create_and_find(self, repository):
        created = await repository.create_user(
            username="ada", email="ada@example.com", password_hash="hash"
        )

        assert created.id is not None
        assert created.saved_books == []

        by_id = await repository.find_user(id=str(created.id))
        by_name = await repository.find_user(username="ada")
        by_either = await repository.find_user(id="not-a-uuid", username="ada")
        by_email = await repository.find_by_username_or_email("ADA@example.com")

        assert by_id.id == by_name.id == by_either.id == by_email.id == created.id

    @pytest.mark.asyncio
    async def test_unique_username_and_email(self, repository):
        await repository.create_user(username="ada", email="ada@example.com", password_hash="h")

        with pytest.raises(ValidationError, match="username"):
            await repository.create_user(username="ada", email="x@example.com", password_hash="h")
        with pytest.raises(ValidationError, match="email"):
            await repository.create_user(username="bob", email="ada@example.com", password_hash="h")

    @pytest.mark.asyncio
    async def test_saved_books_set_semantics(self, repository):
        user = await repository.create_user(
            username="ada", email="ada@example.com", password_hash="h"
        )

        await repository.add_saved_book(user.id, book("b1"))
        await repository.add_saved_book(user.id, book("b1"))
        await repository.add_saved_book(user.id, book("b1", title="Other"))
        updated = await repository.add_saved_book(user.id, book("b2"))

        assert [b["bookId"] for b in updated.saved_books] == ["b1", "b1", "b2"]

        pulled = await repository.pull_saved_books(user.id, "b1")

        assert pulled.saved_books == [book("b2")]

    @pytest.mark.asyncio
    async def test_concurrent_saves_are_not_lost(self, repository):
        user = await repository.create_user(
            username="ada", email="ada@example.com", password_hash="h"
        )

        await asyncio.gather(
            *(repository.add_saved_book(user.id, book(f"b{i}")) for i in range(5))
        )

        stored = await repository.find_user(id=user.id)
        assert sorted(b["bookId"] for b in stored.saved_books) == [f"b{i}" for i in range(5)]

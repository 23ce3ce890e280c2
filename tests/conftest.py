"""
Shared pytest fixtures and configuration for all tests.
"""

import os
import shutil
import sys
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from psycopg import Connection  # type: ignore[import]

# Import types only for type checking, not at runtime
from pytest_postgresql.executor import PostgreSQLExecutor  # type: ignore[import]

# Add src directory to path so imports work
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from alembic import command
from alembic.config import Config

from bookshelf.auth.tokens import TokenIssuer
from bookshelf.dbmodels import Users
from bookshelf.errors import ValidationError
from bookshelf.services import Services

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"


def _dsn(postgresql: Connection[Any]) -> str:
    info = postgresql.info
    return (
        f"postgresql://{info.user}:{getattr(info, 'password', '')}"
        f"@{info.host}:{info.port}/{info.dbname}"
    )


@pytest.fixture(scope="function", autouse=False)
def alembic_migrate(
    postgresql_proc: PostgreSQLExecutor, postgresql: Connection[Any]
) -> Generator[None, None, None]:
    """Run Alembic upgrade to head against the pytest-postgresql instance."""
    os.environ["BOOKSHELF_DATABASE_URL"] = _dsn(postgresql)
    cfg = Config(str(Path(__file__).parent.parent / "alembic.ini"))
    command.upgrade(cfg, "head")
    yield
    command.downgrade(cfg, "base")


@pytest.fixture(scope="function")
def test_database(
    postgresql: Connection[Any],
) -> Generator[tuple[str, str], None, None]:
    """Return the DSN for the running pytest-postgresql database."""
    yield _dsn(postgresql), postgresql.info.dbname


@pytest.fixture(scope="function")
def reset_shared_db_connections(test_database: tuple[str, str]) -> Generator[None, None, None]:
    """Reset and configure shared database connections for the test database."""
    from bookshelf.database.connection import init_database, reset_database

    dsn, _ = test_database

    reset_database()
    init_database(dsn, force_reinit=True)

    yield

    reset_database()


@pytest_asyncio.fixture(scope="function")
async def db_session(
    alembic_migrate: None, reset_shared_db_connections: None, test_database: tuple[str, str]
) -> Any:
    """Provide an async SQLAlchemy session for testing."""
    _ = alembic_migrate, reset_shared_db_connections

    from bookshelf.database.connection import get_test_db_session

    dsn, _ = test_database
    async with get_test_db_session(dsn) as session:
        yield session


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


class InMemoryUserRepository:
    """UserRepository stand-in keeping users in a dict.

    Mirrors the matching and saved-list rules of the SQL repository so
    schema-level tests can run without PostgreSQL.
    """

    def __init__(self):
        self.users: dict[uuid.UUID, Users] = {}
        self.find_calls = 0

    async def find_user(self, id=None, username=None):
        self.find_calls += 1
        for user in self.users.values():
            if (id is not None and str(user.id) == str(id)) or (
                username is not None and user.username == username
            ):
                return user
        return None

    async def find_by_username_or_email(self, username_or_email):
        value = username_or_email.strip()
        for user in self.users.values():
            if user.username == value or user.email == value.lower():
                return user
        return None

    async def create_user(self, *, username, email, password_hash):
        for user in self.users.values():
            if user.username == username:
                raise ValidationError("A user with that username already exists")
            if user.email == email:
                raise ValidationError("A user with that email already exists")

        user = Users(
            id=uuid.uuid4(),
            username=username,
            email=email,
            password_hash=password_hash,
            saved_books=[],
        )
        self.users[user.id] = user
        return user

    async def add_saved_book(self, user_id, book):
        user = self.users.get(user_id)
        if user is None:
            return None
        if book not in user.saved_books:
            user.saved_books = [*user.saved_books, book]
        return user

    async def pull_saved_books(self, user_id, book_id):
        user = self.users.get(user_id)
        if user is None:
            return None
        user.saved_books = [b for b in user.saved_books if b.get("bookId") != book_id]
        return user


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(secret_key=TEST_SECRET)


@pytest.fixture
def user_store() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def services(user_store: InMemoryUserRepository, token_issuer: TokenIssuer) -> Services:
    return Services(users=user_store, tokens=token_issuer)  # type: ignore[arg-type]


def _postgres_available() -> bool:
    # pytest-postgresql finds pg_ctl on PATH or through pg_config --bindir
    return bool(shutil.which("pg_ctl") or shutil.which("pg_config"))


def pytest_collection_modifyitems(config: Any, items: list[Any]) -> None:
    if _postgres_available():
        return
    skip_db = pytest.mark.skip(reason="PostgreSQL binaries not available")
    for item in items:
        if "requires_db" in item.keywords:
            item.add_marker(skip_db)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(  # type: ignore[reportUnknownMemberType]
        "markers", "requires_db: mark test as requiring database connection"
    )
    config.addinivalue_line("markers", "integration: mark test as integration test")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "unit: mark test as unit test")  # type: ignore[reportUnknownMemberType]

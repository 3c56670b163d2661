"""Test configuration and fixtures for the library API."""

import os

# Settings are read at import time, so the test environment goes first.
os.environ["ENVIRONMENT"] = "local"
os.environ["POSTGRES_URI"] = "sqlite+aiosqlite:///:memory:"
os.environ["CREATE_DATABASE_ON_STARTUP"] = "false"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["LOG_FILE_ENABLED"] = "false"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

# mypy: disable-error-code="import-untyped"
from testcontainers.core.docker_client import DockerClient  # noqa: E402
from testcontainers.postgres import PostgresContainer  # noqa: E402

from library_api.infrastructure.database.session import Base, async_session, enable_sqlite_foreign_keys  # noqa: E402
from library_api.infrastructure.logging import configure_testing_logging  # noqa: E402
from library_api.interfaces.main import app  # noqa: E402
from library_api.modules.book.models import Book  # noqa: E402
from library_api.modules.book_borrow.models import BookBorrow  # noqa: E402
from library_api.modules.user.models import User  # noqa: E402

SQLITE_TEST_URL = "sqlite+aiosqlite:///:memory:"
USE_POSTGRES = os.environ.get("TEST_DATABASE", "sqlite").lower() == "postgres"


def is_docker_running() -> bool:
    """Check if Docker daemon is running."""
    try:
        DockerClient()
        return True
    except Exception:
        return False


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Keep test output free of application logs."""
    configure_testing_logging()


@pytest.fixture(scope="session")
def pg_container():
    """Create a PostgreSQL container for testing."""
    if not is_docker_running():
        pytest.skip("Docker is required, but not running")

    with PostgresContainer("postgres:16-alpine", driver="asyncpg") as pg:
        yield pg


@pytest.fixture(scope="function")
def test_db_url(request) -> str:
    """Database URL for the test run: in-memory SQLite unless TEST_DATABASE=postgres."""
    if not USE_POSTGRES:
        return SQLITE_TEST_URL

    pg_container = request.getfixturevalue("pg_container")
    return pg_container.get_connection_url()


@pytest_asyncio.fixture(scope="function")
async def test_db_engine(test_db_url: str):
    """Create a SQLAlchemy engine with a fresh schema for each test."""
    if test_db_url.startswith("sqlite"):
        engine = create_async_engine(
            test_db_url,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(test_db_url, echo=False)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_db_engine):
    return async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory):
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_factory):
    """Create a test client whose requests each get their own session on the test engine."""
    app.dependency_overrides = {}

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[async_session] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


async def book_quantity(session_factory, book_id: int) -> int:
    """Read a book's stored quantity through a fresh session."""
    async with session_factory() as session:
        result = await session.execute(select(Book.quantity).where(Book.id == book_id))
        return result.scalar_one()


async def count_borrows(session_factory, book_id: int, user_id: int, active_only: bool = False) -> int:
    """Count borrow rows of a (book, user) pair through a fresh session."""
    stmt = select(func.count()).select_from(BookBorrow).where(
        BookBorrow.book_id == book_id, BookBorrow.user_id == user_id
    )
    if active_only:
        stmt = stmt.where(BookBorrow.return_date.is_(None))
    async with session_factory() as session:
        result = await session.execute(stmt)
        return result.scalar_one()


@pytest.fixture
def quantity_of(session_factory):
    async def _quantity_of(book_id: int) -> int:
        return await book_quantity(session_factory, book_id)

    return _quantity_of


@pytest.fixture
def borrow_count(session_factory):
    async def _borrow_count(book_id: int, user_id: int, active_only: bool = False) -> int:
        return await count_borrows(session_factory, book_id, user_id, active_only)

    return _borrow_count


# Test fixtures for library entities
@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession):
    """Create a test user."""
    user = User(first_name="Ada", last_name="Lovelace")
    db_session.add(user)
    await db_session.commit()
    return {"id": user.id, "first_name": user.first_name, "last_name": user.last_name}


@pytest_asyncio.fixture
async def test_user_2(db_session: AsyncSession):
    """Create a second test user."""
    user = User(first_name="Alan", last_name="Turing")
    db_session.add(user)
    await db_session.commit()
    return {"id": user.id, "first_name": user.first_name, "last_name": user.last_name}


@pytest_asyncio.fixture
async def test_book(db_session: AsyncSession):
    """Create a test book with five copies."""
    book = Book(title="Dune", quantity=5)
    db_session.add(book)
    await db_session.commit()
    return {"id": book.id, "title": book.title, "quantity": book.quantity}


@pytest_asyncio.fixture
async def test_book_2(db_session: AsyncSession):
    """Create a second test book."""
    book = Book(title="Neuromancer", quantity=2)
    db_session.add(book)
    await db_session.commit()
    return {"id": book.id, "title": book.title, "quantity": book.quantity}


@pytest_asyncio.fixture
async def unavailable_book(db_session: AsyncSession):
    """Create a book with no copies left."""
    book = Book(title="The Left Hand of Darkness", quantity=0)
    db_session.add(book)
    await db_session.commit()
    return {"id": book.id, "title": book.title, "quantity": book.quantity}


@pytest_asyncio.fixture
async def active_borrow(db_session: AsyncSession, test_book: dict, test_user: dict):
    """Borrow one copy of test_book for test_user, leaving four on the shelf."""
    borrow = BookBorrow(user_id=test_user["id"], book_id=test_book["id"])
    db_session.add(borrow)
    book = await db_session.get(Book, test_book["id"])
    book.quantity -= 1
    await db_session.commit()
    return {"id": borrow.id, "book_id": borrow.book_id, "user_id": borrow.user_id}

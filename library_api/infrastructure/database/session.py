from typing import Any, AsyncGenerator, Dict

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, MappedAsDataclass

from ..config.settings import settings
from ..logging import get_logger

logger = get_logger(__name__)


def engine_options(database_url: str) -> Dict[str, Any]:
    """Build create_async_engine keyword arguments for a database URL.

    Pool sizing only applies to server databases; SQLite's async pools
    reject the pool_size and max_overflow arguments.
    """
    options: Dict[str, Any] = {"echo": False, "future": True}
    if make_url(database_url).get_backend_name() != "sqlite":
        options["pool_size"] = settings.POSTGRES_POOL_SIZE
        options["max_overflow"] = settings.POSTGRES_MAX_OVERFLOW
        options["pool_pre_ping"] = True
    return options


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement for every SQLite connection of an engine.

    SQLite ignores REFERENCES clauses unless the pragma is set per connection.
    Engines for other backends are left untouched.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))
enable_sqlite_foreign_keys(engine)

local_session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase, MappedAsDataclass):
    """Base class for all database models.

    Combines SQLAlchemy's DeclarativeBase with MappedAsDataclass so that
    models get dataclass-style constructors generated from their mapped
    columns. All three library tables inherit from it, which is what lets
    create_tables() build the whole schema from Base.metadata.

    Example:
        ```python
        class Book(Base, IntegerIdMixin):
            __tablename__ = "books"

            title: Mapped[str] = mapped_column(String(255))
            quantity: Mapped[int] = mapped_column(Integer)

        book = Book(title="Dune", quantity=3)
        ```
    """

    pass


async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for database session management with proper lifecycle.

    Yields one session per request from the pooled engine. The session is
    closed, and any uncommitted transaction rolled back, when the request
    finishes.

    Yields:
        AsyncSession: A configured async database session.

    Example:
        ```python
        @router.get("/users")
        async def get_users(db: AsyncSession = Depends(async_session)):
            result = await db.execute(select(User))
            return result.scalars().all()
        ```
    """
    async_get_db = local_session
    async with async_get_db() as db:
        yield db


async def ensure_database() -> None:
    """Create the configured database if it does not exist yet.

    Connects to the server's maintenance database, looks the target name up
    in pg_database (case-insensitively) and issues CREATE DATABASE when it is
    missing. Only PostgreSQL is handled; other backends are a no-op since
    they create their database on first connect.
    """
    url = make_url(settings.DATABASE_URL)
    if url.get_backend_name() != "postgresql" or not url.database:
        return

    maintenance_url = url.set(database=settings.POSTGRES_MAINTENANCE_DB)
    maintenance_engine = create_async_engine(maintenance_url, isolation_level="AUTOCOMMIT")
    try:
        async with maintenance_engine.connect() as conn:
            result = await conn.execute(
                text("SELECT EXISTS (SELECT 1 FROM pg_database WHERE LOWER(datname) = LOWER(:name))"),
                {"name": url.database},
            )
            exists = bool(result.scalar())
            logger.info(f"Database {url.database} exists: {exists}")

            if not exists:
                quoted_name = conn.dialect.identifier_preparer.quote(url.database)
                await conn.execute(text(f"CREATE DATABASE {quoted_name}"))
                logger.info(f"Database {url.database} created")
    finally:
        await maintenance_engine.dispose()


async def create_tables() -> None:
    """Create all tables in the database if they don't exist.

    Idempotent: only the users, books and book_borrows tables that are
    missing get created, existing ones are left unchanged.
    """
    # Registers the models on Base.metadata.
    from ...modules.book.models import Book  # noqa: F401
    from ...modules.book_borrow.models import BookBorrow  # noqa: F401
    from ...modules.user.models import User  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created or already exist")


async def dispose_engine() -> None:
    """Close every pooled connection."""
    await engine.dispose()
    logger.info("Database connection closed")

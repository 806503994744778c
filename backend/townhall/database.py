"""
Townhall Backend — Database Session Management
================================================

What:  Async SQLAlchemy engine, session factory, declarative base and the
       FastAPI session dependency.
How:   One engine per process with connection pooling; one session per
       request that commits on success and rolls back on error.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings.
    pool_recycle=3600 recycles connections every hour.
    SQLite URLs get the dialect's default pool and none of these options.

SQLite:
    The built-in lower() folds ASCII only, and ILIKE compiles to
    lower(x) LIKE lower(y) there. install_sqlite_functions() replaces it
    with Python's str.lower on every new connection.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import MetaData, event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from townhall.config import settings


def engine_options() -> Dict[str, Any]:
    """Keyword arguments for create_async_engine based on the configured URL."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def install_sqlite_functions(target: AsyncEngine) -> None:
    """Register a Unicode-aware lower() on each connection of a SQLite engine."""

    @event.listens_for(target.sync_engine, "connect")
    def register_functions(dbapi_connection, connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower)


engine: AsyncEngine = create_async_engine(settings.database_url, **engine_options())
if settings.is_sqlite:
    install_sqlite_functions(engine)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay loaded after commit, so responses
# can be built from ORM objects once the transaction is closed
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
# Constraint naming convention keeps alembic autogenerate output stable
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models share one metadata object, which alembic reads for migrations.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the request's repositories
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_schema() -> None:
    """Create every table that does not exist yet (DB_AUTO_CREATE)."""
    # Models register themselves on Base.metadata when imported
    import townhall.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Closes all pooled connections. Called during application shutdown."""
    await engine.dispose()

"""
BizTime Backend - Database Session Management
==============================================

What:  Async SQLAlchemy engine, session factory, FastAPI session dependency,
       table creation and driver-error translation.
How:   One engine per process with a shared connection pool. Each request gets
       its own AsyncSession, which commits on success and rolls back on error.
Who:   Route dependencies (get_db_session), the services (translate_db_errors)
       and the app lifespan (create_tables, dispose_engine).

Transaction scope:
    A request runs inside exactly one transaction. The detail endpoints issue
    two dependent statements; both see the isolation level configured by
    DB_ISOLATION_LEVEL. Under READ COMMITTED a row deleted between the two
    statements can leave the composite response slightly stale (for example an
    invoice id that was just removed). That read skew is accepted; deployments
    that need a snapshot set REPEATABLE READ.

SQLite:
    Used for tests and local development. It gets NullPool (no pool sizing) and
    `PRAGMA foreign_keys=ON` on every connection so the invoices → companies
    foreign key is enforced like it is on PostgreSQL.
"""

import logging
from contextlib import contextmanager
from typing import Any, AsyncGenerator, Dict, Iterator

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from biztime.config import settings
from biztime.exceptions import ConstraintViolationError, DatabaseError

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {
        # Echo SQL in DEBUG mode only
        "echo": settings.log_level == "DEBUG",
    }
    if settings.is_sqlite:
        options["poolclass"] = NullPool
    else:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    if settings.db_isolation_level:
        options["isolation_level"] = settings.db_isolation_level
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())


if settings.is_sqlite:

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: rows returned by a handler stay readable after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """Base class for the `companies` and `invoices` table mappings."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a new session from the factory
        2. Yields it to the service built for this request
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        def get_company_service(db: AsyncSession = Depends(get_db_session)):
            return CompanyService(db)
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


# ── Error Translation ─────────────────────────────────────────────────────
@contextmanager
def translate_db_errors(operation: str, conflict_message: str) -> Iterator[None]:
    """
    Convert SQLAlchemy errors raised inside the block into application errors.

    IntegrityError → ConstraintViolationError (409) carrying `conflict_message`.
    Any other SQLAlchemyError → DatabaseError (500) with a generic message.
    Application exceptions (NotFoundError) pass through untouched.

    Usage:
        with translate_db_errors("create_company", "Company already exists"):
            result = await self.db.execute(stmt)
    """
    try:
        yield
    except IntegrityError as e:
        logger.warning("Constraint violation during %s: %s", operation, e.orig)
        raise ConstraintViolationError(
            message=conflict_message,
            context={"operation": operation, "driver_error": str(e.orig)},
        ) from e
    except SQLAlchemyError as e:
        logger.error("Database error during %s: %s", operation, str(e), exc_info=True)
        raise DatabaseError(
            context={"operation": operation, "error_type": type(e).__name__},
        ) from e


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables() -> None:
    """
    Create any missing tables from the ORM metadata.

    Existing tables are left as they are; there is no column-level migration.
    """
    # Registers the mappings on Base.metadata
    from biztime.models import company, invoice  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))


async def dispose_engine() -> None:
    """Gracefully closes all connections in the pool during shutdown."""
    await engine.dispose()

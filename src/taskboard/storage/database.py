"""Database initialization, transactional sessions and retry handling"""

import logging
import time
from contextlib import contextmanager
from typing import Callable, Generator, Optional, TypeVar

from sqlalchemy import create_engine, event
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session, sessionmaker

from .errors import StoreConflictError
from .migrations import initialize_database_async, get_database_url, get_project_config

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Serialization failure, deadlock detected, lock not available
CONFLICT_SQLSTATES = {"40001", "40P01", "55P03"}

# SQLite reports lock contention only through the message
SQLITE_CONFLICT_MESSAGES = ("database is locked", "database is busy", "database table is locked")

# Global database engine and session factory
engine = None
SessionLocal = None

def enable_sqlite_write_locking(sqlite_engine):
    """Start every SQLite transaction with BEGIN IMMEDIATE.

    SQLite has no row locks, so ``SELECT ... FOR UPDATE`` is a no-op there.
    Taking the database write lock when the transaction begins serializes
    writers on the same order-space and stops two transactions from reading
    the same sibling snapshot.
    """

    @event.listens_for(sqlite_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sqlite_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return sqlite_engine

def build_engine(url: str):
    """Create an engine configured for the ordering engine's locking strategy"""
    if url.startswith("sqlite"):
        return enable_sqlite_write_locking(
            create_engine(url, connect_args={"check_same_thread": False, "timeout": 30})
        )
    return create_engine(url, pool_pre_ping=True)

def get_engine():
    """Get database engine"""
    global engine
    if engine is None:
        engine = build_engine(get_database_url())
    return engine

def get_session_factory():
    """Get session factory"""
    global SessionLocal
    if SessionLocal is None:
        SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=get_engine()
        )
    return SessionLocal

def is_store_conflict(error: DBAPIError) -> bool:
    """True when the store aborted the transaction over a concurrent writer"""
    orig = error.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in CONFLICT_SQLSTATES:
        return True
    message = str(orig).lower()
    return any(fragment in message for fragment in SQLITE_CONFLICT_MESSAGES)

@contextmanager
def get_db_session(session_factory: Optional[Callable[[], Session]] = None) -> Generator[Session, None, None]:
    """Open one transaction: commit on success, roll back on any error.

    Lock timeouts, deadlocks and serialization failures surface as
    ``StoreConflictError`` so callers can retry the whole unit of work; every
    other driver error propagates unchanged.
    """
    SessionFactory = session_factory or get_session_factory()
    session = SessionFactory()
    try:
        yield session
        session.commit()
    except DBAPIError as e:
        session.rollback()
        if is_store_conflict(e):
            raise StoreConflictError(f"Transaction aborted by the store: {e.orig}") from e
        raise
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

def run_in_transaction(
    work: Callable[[Session], T],
    session_factory: Optional[Callable[[], Session]] = None,
    attempts: Optional[int] = None,
    backoff_seconds: Optional[float] = None,
) -> T:
    """Run ``work(session)`` in a fresh transaction, retrying store conflicts

    Only ``StoreConflictError`` is retried; every attempt starts from scratch
    on a new session, so nothing from an aborted attempt leaks into the next.
    """
    if attempts is None or backoff_seconds is None:
        config = get_project_config()
        if attempts is None:
            attempts = int(config["transaction_attempts"])
        if backoff_seconds is None:
            backoff_seconds = float(config["retry_backoff_seconds"])

    attempt = 1
    while True:
        try:
            with get_db_session(session_factory) as session:
                return work(session)
        except StoreConflictError as e:
            if attempt >= attempts:
                logger.error("[TXN] Giving up after %d attempts: %s", attempt, e)
                raise
            delay = backoff_seconds * (2 ** (attempt - 1))
            logger.warning("[TXN] Store conflict on attempt %d/%d, retrying in %.3fs: %s",
                           attempt, attempts, delay, e)
            time.sleep(delay)
            attempt += 1

def reset_database_globals():
    """Reset global database engine and session factory for testing"""
    global engine, SessionLocal
    if engine:
        engine.dispose()
    engine = None
    SessionLocal = None

async def initialize_database():
    """Initialize database on startup with automatic migrations"""
    await initialize_database_async()

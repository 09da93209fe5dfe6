"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's SimpleConnectionPool for efficient connection reuse.

Repositories never reach for a global connection: a caller opens a
``unit_of_work()`` per request and hands the connection to every
repository it needs, so all of them share one transaction.
"""

from contextlib import contextmanager
from itertools import count
from typing import Iterator

import psycopg2
from psycopg2 import pool, extras
from config import DB_POOL_MAX, DB_POOL_MIN, get_database_uri
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None
_savepoint_ids = count(1)


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, get_database_uri())
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_connection():
    """
    Get a connection from the pool.

    Returns:
        A psycopg2 connection object.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """
    Return a connection back to the pool.

    Args:
        conn: The psycopg2 connection to release.
    """
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")


@contextmanager
def unit_of_work() -> Iterator:
    """
    Check out a connection for one request.

    Commits when the block exits cleanly, rolls back on any exception
    (which is re-raised), and always returns the connection to the pool.

    Usage:
        with unit_of_work() as conn:
            user = UserRepository(conn).get("alice")
    """
    conn = get_connection()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        release_connection(conn)


@contextmanager
def savepoint(conn) -> Iterator[None]:
    """
    Run a block inside a SAVEPOINT of the current transaction.

    A failing statement only rolls back to the savepoint, leaving the
    enclosing transaction usable. The exception is re-raised.
    """
    name = f"sp_{next(_savepoint_ids)}"
    with conn.cursor() as cur:
        cur.execute(f"SAVEPOINT {name};")
    try:
        yield
    except Exception:
        with conn.cursor() as cur:
            cur.execute(f"ROLLBACK TO SAVEPOINT {name};")
        raise
    with conn.cursor() as cur:
        cur.execute(f"RELEASE SAVEPOINT {name};")


def dict_cursor(conn):
    """Open a cursor whose rows are dicts keyed by column name."""
    return conn.cursor(cursor_factory=extras.RealDictCursor)

import os
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

import psycopg

# Connection of the transaction currently open in this context, if any.
_current_connection: ContextVar[Optional[psycopg.Connection]] = ContextVar(
    "_current_connection", default=None
)


def get_database_url() -> str:
    """Get the database URL from environment variables."""
    url = os.environ["DATABASE_URL"]
    return url


def get_sqlalchemy_database_url() -> str:
    """Get the database URL formatted for SQLAlchemy (used by Alembic).

    Automatically converts postgresql:// to postgresql+psycopg://
    to ensure psycopg3 is used instead of psycopg2.
    """
    url = get_database_url()
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


@contextmanager
def get_db_connection() -> Iterator[psycopg.Connection]:
    """Get a database connection context manager.

    Explicitly closes the connection to ensure proper cleanup in serverless environments.
    """
    url = get_database_url()
    conn = psycopg.connect(url)
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def transaction() -> Iterator[psycopg.Connection]:
    """Run everything inside the block as a single database transaction.

    Cursors obtained with `get_db_cursor` inside the block share this
    connection, and nothing is committed until the block exits cleanly.
    Nested calls join the outer transaction.
    """
    existing = _current_connection.get()
    if existing is not None:
        yield existing
        return

    with get_db_connection() as conn:
        token = _current_connection.set(conn)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            _current_connection.reset(token)


@contextmanager
def get_db_cursor() -> Iterator[psycopg.Cursor]:
    """Get a database cursor context manager.

    Inside `transaction()`, the cursor belongs to the open transaction.
    Otherwise the cursor gets its own connection, which is committed on
    successful completion or rolled back on exception.
    """
    conn = _current_connection.get()
    if conn is not None:
        with conn.cursor() as cursor:
            yield cursor
        return

    with get_db_connection() as conn:
        with conn.cursor() as cursor:
            try:
                yield cursor
                # Commit the transaction on successful completion
                conn.commit()
            except Exception:
                # Rollback on error (though psycopg does this automatically)
                conn.rollback()
                raise

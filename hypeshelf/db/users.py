"""Database operations for user management."""

import logging
from typing import Optional
from uuid import UUID

from hypeshelf.models.user import User, Role
from .connection import get_db_cursor

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, external_id, role, display_name, created_at"


def get_user_by_id(user_id: UUID) -> Optional[User]:
    """Get a user by their internal record ID."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE id = %s
            """,
            (user_id,),
        )
        row = cursor.fetchone()
        return _row_to_user(row) if row else None


def get_user_by_external_id(external_id: str) -> Optional[User]:
    """Get a user by their identity provider subject ID (sub claim)."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE external_id = %s
            """,
            (external_id,),
        )
        row = cursor.fetchone()
        return _row_to_user(row) if row else None


def create_user(
    external_id: str,
    role: Role,
    display_name: Optional[str],
) -> User:
    """Create a new user record.

    Args:
        external_id: The 'sub' claim from the JWT token.
        role: The user's role.
        display_name: Sanitized display name, if the identity provider gave one.

    Returns:
        The created User object.
    """
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            INSERT INTO users (external_id, role, display_name)
            VALUES (%s, %s, %s)
            RETURNING {_USER_COLUMNS}
            """,
            (external_id, role, display_name),
        )
        row = cursor.fetchone()
        return _row_to_user(row)


def set_user_role(user_id: UUID, role: Role) -> bool:
    """Set a user's role. Returns True if the user was found."""
    with get_db_cursor() as cursor:
        cursor.execute(
            """
            UPDATE users
            SET role = %s
            WHERE id = %s
            """,
            (role, user_id),
        )
        return cursor.rowcount > 0


def get_all_users() -> list[User]:
    """Get every user, oldest first."""
    with get_db_cursor() as cursor:
        cursor.execute(f"""
            SELECT {_USER_COLUMNS}
            FROM users
            ORDER BY created_at
        """)
        rows = cursor.fetchall()
        return [_row_to_user(row) for row in rows]


def delete_users_without_external_id() -> int:
    """Delete users with no identity provider link. Returns the number deleted."""
    with get_db_cursor() as cursor:
        cursor.execute("""
            DELETE FROM users
            WHERE external_id IS NULL
        """)
        return cursor.rowcount


def assign_role_to_users_without_role(role: Role) -> int:
    """Set the role of every user that has none. Returns the number updated."""
    with get_db_cursor() as cursor:
        cursor.execute(
            """
            UPDATE users
            SET role = %s
            WHERE role IS NULL
            """,
            (role,),
        )
        return cursor.rowcount


def _row_to_user(row) -> User:
    """Convert a database row to a User object."""
    id, external_id, role, display_name, created_at = row
    return User(
        id=id,
        external_id=external_id,
        role=role,
        display_name=display_name,
        created_at=created_at,
    )

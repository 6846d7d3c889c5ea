"""Database operations for recommendations."""

import logging
from typing import Optional
from uuid import UUID

from hypeshelf.models.recommendation import Recommendation, RecommendationContent
from .connection import get_db_cursor

logger = logging.getLogger(__name__)

_RECOMMENDATION_COLUMNS = """
    id, title, genre, link, blurb, author_id, author_name, is_staff_pick,
    image_id, created_at
"""


def create_recommendation(
    content: RecommendationContent, author_id: str, author_name: str
) -> Recommendation:
    """Insert a new recommendation. New recommendations are never staff picks."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            INSERT INTO recommendations
                (title, genre, link, blurb, author_id, author_name, is_staff_pick, image_id)
            VALUES (%s, %s, %s, %s, %s, %s, FALSE, %s)
            RETURNING {_RECOMMENDATION_COLUMNS}
            """,
            (
                content.title,
                content.genre,
                content.link,
                content.blurb,
                author_id,
                author_name,
                content.image_id,
            ),
        )
        row = cursor.fetchone()
        return _row_to_recommendation(row)


def get_recommendation_by_id(rec_id: UUID) -> Optional[Recommendation]:
    """Get a specific recommendation by its ID."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_RECOMMENDATION_COLUMNS}
            FROM recommendations
            WHERE id = %s
            """,
            (rec_id,),
        )
        row = cursor.fetchone()
        return _row_to_recommendation(row) if row else None


def update_recommendation_content(
    rec_id: UUID, content: RecommendationContent
) -> bool:
    """Overwrite the content fields of a recommendation.

    Author fields and the staff pick flag are never touched here.
    Returns True if the recommendation was found.
    """
    with get_db_cursor() as cursor:
        cursor.execute(
            """
            UPDATE recommendations
            SET title = %s, genre = %s, link = %s, blurb = %s, image_id = %s,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = %s
            """,
            (
                content.title,
                content.genre,
                content.link,
                content.blurb,
                content.image_id,
                rec_id,
            ),
        )
        return cursor.rowcount > 0


def set_staff_pick(rec_id: UUID, is_staff_pick: bool) -> bool:
    """Set the staff pick flag. Returns True if the recommendation was found."""
    with get_db_cursor() as cursor:
        cursor.execute(
            """
            UPDATE recommendations
            SET is_staff_pick = %s, updated_at = CURRENT_TIMESTAMP
            WHERE id = %s
            """,
            (is_staff_pick, rec_id),
        )
        return cursor.rowcount > 0


def delete_recommendation(rec_id: UUID) -> bool:
    """Permanently delete a recommendation. Returns True if it existed."""
    with get_db_cursor() as cursor:
        cursor.execute(
            """
            DELETE FROM recommendations
            WHERE id = %s
            """,
            (rec_id,),
        )
        return cursor.rowcount > 0


def get_recent_recommendations(limit: int) -> list[Recommendation]:
    """Get the most recently created recommendations, newest first."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_RECOMMENDATION_COLUMNS}
            FROM recommendations
            ORDER BY created_at DESC, id DESC
            LIMIT %s
            """,
            (limit,),
        )
        rows = cursor.fetchall()
        return [_row_to_recommendation(row) for row in rows]


def get_all_recommendations(genre: Optional[str] = None) -> list[Recommendation]:
    """Get all recommendations, newest first, optionally limited to one genre."""
    with get_db_cursor() as cursor:
        if genre is None:
            cursor.execute(f"""
                SELECT {_RECOMMENDATION_COLUMNS}
                FROM recommendations
                ORDER BY created_at DESC, id DESC
            """)
        else:
            cursor.execute(
                f"""
                SELECT {_RECOMMENDATION_COLUMNS}
                FROM recommendations
                WHERE genre = %s
                ORDER BY created_at DESC, id DESC
                """,
                (genre,),
            )
        rows = cursor.fetchall()
        return [_row_to_recommendation(row) for row in rows]


def get_distinct_genres() -> list[str]:
    """Get each genre that has at least one recommendation."""
    with get_db_cursor() as cursor:
        cursor.execute("""
            SELECT DISTINCT genre
            FROM recommendations
            ORDER BY genre
        """)
        return [row[0] for row in cursor.fetchall()]


def _row_to_recommendation(row) -> Recommendation:
    """Convert a database row to a Recommendation object."""
    (
        rec_id,
        title,
        genre,
        link,
        blurb,
        author_id,
        author_name,
        is_staff_pick,
        image_id,
        created_at,
    ) = row
    return Recommendation(
        id=rec_id,
        title=title,
        genre=genre,
        link=link,
        blurb=blurb,
        author_id=author_id,
        author_name=author_name,
        is_staff_pick=is_staff_pick,
        image_id=image_id,
        created_at=created_at,
    )

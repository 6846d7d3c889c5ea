"""add_recommendations_table

Revision ID: 8b61e0f4c2a9
Revises: 3f2a9c1d7e44
Create Date: 2026-02-02 09:31:05.118734+00:00

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8b61e0f4c2a9"
down_revision: Union[str, Sequence[str], None] = "3f2a9c1d7e44"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("""
        CREATE TABLE IF NOT EXISTS recommendations (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            title VARCHAR(200) NOT NULL,
            genre VARCHAR(50) NOT NULL CHECK (genre IN (
                'Action', 'Adventure', 'Comedy', 'Drama', 'Horror',
                'Romance', 'Documentary', 'Sports', 'Biopic'
            )),
            link VARCHAR(2048) NOT NULL,
            blurb VARCHAR(1000) NOT NULL,
            author_id TEXT NOT NULL,
            author_name VARCHAR(100) NOT NULL,
            is_staff_pick BOOLEAN NOT NULL DEFAULT FALSE,
            image_id TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );

        CREATE INDEX IF NOT EXISTS idx_recommendations_genre ON recommendations(genre);
        CREATE INDEX IF NOT EXISTS idx_recommendations_author_id ON recommendations(author_id);
        CREATE INDEX IF NOT EXISTS idx_recommendations_is_staff_pick ON recommendations(is_staff_pick);
        CREATE INDEX IF NOT EXISTS idx_recommendations_created_at ON recommendations(created_at DESC);
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("""
        DROP TABLE IF EXISTS recommendations CASCADE;
    """)

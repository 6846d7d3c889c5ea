"""add_users_table

Revision ID: 3f2a9c1d7e44
Revises:
Create Date: 2026-02-02 09:14:27.301552+00:00

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7e44"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            -- NULL only for records created before identity provider login
            external_id TEXT UNIQUE,
            -- NULL only for records created before role tracking
            role VARCHAR(20) CHECK (role IN ('admin', 'user')),
            display_name VARCHAR(100),
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );

        -- Create trigger to update updated_at timestamp
        CREATE OR REPLACE FUNCTION update_users_updated_at()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;

        DROP TRIGGER IF EXISTS users_updated_at_trigger ON users;
        CREATE TRIGGER users_updated_at_trigger
            BEFORE UPDATE ON users
            FOR EACH ROW
            EXECUTE FUNCTION update_users_updated_at();
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("""
        DROP TRIGGER IF EXISTS users_updated_at_trigger ON users;
        DROP FUNCTION IF EXISTS update_users_updated_at();
        DROP TABLE IF EXISTS users CASCADE;
    """)

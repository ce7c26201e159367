"""001: create ledger_blobs table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE ledger_blobs (
            key             VARCHAR(128)    PRIMARY KEY,
            value           TEXT            NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    op.execute(
        "COMMENT ON TABLE ledger_blobs IS "
        "'Ledger snapshots: users blob and transactions blob, each rewritten in full';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS ledger_blobs;")

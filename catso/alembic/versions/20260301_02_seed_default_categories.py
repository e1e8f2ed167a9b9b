"""Seed the default gallery categories."""

from __future__ import annotations

from datetime import UTC, datetime

from alembic import op
import sqlalchemy as sa


revision = "20260301_02"
down_revision = "20260301_01"
branch_labels = None
depends_on = None

_DEFAULTS = (
    ("videoclips", "Videoclips", 0),
    ("commercial", "Commercial", 1),
)


def upgrade() -> None:
    categories = sa.table(
        "categories",
        sa.column("name", sa.String),
        sa.column("title", sa.String),
        sa.column("order", sa.Integer),
        sa.column("created_at", sa.DateTime),
    )
    now = datetime.now(UTC).replace(tzinfo=None)
    op.bulk_insert(
        categories,
        [
            {"name": name, "title": title, "order": order, "created_at": now}
            for name, title, order in _DEFAULTS
        ],
    )


def downgrade() -> None:
    op.execute(
        sa.text("DELETE FROM categories WHERE name IN ('videoclips', 'commercial')")
    )

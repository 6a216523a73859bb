"""Community Fund votes and user addresses."""
from __future__ import annotations

from collections.abc import Iterable

import sqlalchemy as sa
from alembic import op

revision = "20240801_01"
down_revision = None
branch_labels = None
depends_on: Iterable[str] | None = None


def _drop_enum(name: str) -> None:
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        op.execute(sa.text(f"DROP TYPE IF EXISTS {name}"))


def upgrade() -> None:  # noqa: D401
    """Create vote and address tables."""

    vote_type = sa.Enum("PROPOSAL", "PAYMENT_REQUEST", name="vote_type")
    vote_choice = sa.Enum("YES", "NO", "ABSTAIN", name="vote_choice")

    op.create_table(
        "votes",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("type", vote_type, nullable=False),
        sa.Column("hash", sa.String(length=64), nullable=False),
        sa.Column("choice", vote_choice, nullable=False),
        sa.Column("committed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_id", "type", "hash", name="uq_votes_user_type_hash"),
    )
    op.create_index("ix_votes_user_id_type", "votes", ["user_id", "type"])

    op.create_table(
        "user_addresses",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("spending_address", sa.String(length=64), nullable=False),
        sa.Column("staking_address", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_id", "spending_address", name="uq_user_addresses_user_spending"),
    )
    op.create_index("ix_user_addresses_user_id", "user_addresses", ["user_id"])


def downgrade() -> None:  # noqa: D401
    """Drop vote and address tables."""

    op.drop_index("ix_user_addresses_user_id", table_name="user_addresses")
    op.drop_table("user_addresses")
    op.drop_index("ix_votes_user_id_type", table_name="votes")
    op.drop_table("votes")
    _drop_enum("vote_choice")
    _drop_enum("vote_type")

"""initial voting schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates voters, candidates, elections and the election_voters,
election_candidates and ballots relations.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # --- voters ---
    op.create_table(
        "voters",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("national_id", sa.String(12), nullable=False),
        sa.Column("date_of_birth", sa.Date, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_voters_national_id", "voters", ["national_id"], unique=True)

    # --- candidates ---
    op.create_table(
        "candidates",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("party", sa.String(120), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # --- elections ---
    op.create_table(
        "elections",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("closed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("closed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("end_at >= start_at", name="ck_election_window"),
    )
    op.create_index("idx_elections_closed", "elections", ["closed"])

    # --- election_voters ---
    op.create_table(
        "election_voters",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "election_id",
            sa.String(64),
            sa.ForeignKey("elections.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("voter_id", sa.String(64), sa.ForeignKey("voters.id", ondelete="CASCADE"), nullable=False),
        sa.Column("enrolled_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("election_id", "voter_id", name="uq_election_voter"),
    )

    # --- election_candidates ---
    op.create_table(
        "election_candidates",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "election_id",
            sa.String(64),
            sa.ForeignKey("elections.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "candidate_id",
            sa.String(64),
            sa.ForeignKey("candidates.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.UniqueConstraint("election_id", "candidate_id", name="uq_election_candidate"),
    )
    op.create_index("idx_election_candidates_election_id", "election_candidates", ["election_id"])

    # --- ballots ---
    op.create_table(
        "ballots",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "election_id",
            sa.String(64),
            sa.ForeignKey("elections.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("voter_id", sa.String(64), sa.ForeignKey("voters.id"), nullable=False),
        sa.Column("candidate_id", sa.String(64), sa.ForeignKey("candidates.id"), nullable=False),
        sa.Column("cast_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("election_id", "voter_id", name="uq_ballot_election_voter"),
    )
    op.create_index("idx_ballots_election_id", "ballots", ["election_id"])


def downgrade() -> None:
    op.drop_index("idx_ballots_election_id", table_name="ballots")
    op.drop_table("ballots")
    op.drop_index("idx_election_candidates_election_id", table_name="election_candidates")
    op.drop_table("election_candidates")
    op.drop_table("election_voters")
    op.drop_index("idx_elections_closed", table_name="elections")
    op.drop_table("elections")
    op.drop_table("candidates")
    op.drop_index("ix_voters_national_id", table_name="voters")
    op.drop_table("voters")

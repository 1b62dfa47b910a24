"""Election ORM models.

Provides Election plus the enrollment, candidate-assignment and ballot
relations. ``(election_id, voter_id)`` is unique on both ``ballots`` and
``election_voters``; the ballot constraint is the storage-level guard against
double voting.
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from election_api.models.base import Base, TimestampMixin


class Election(Base, TimestampMixin):
    """A time-boxed election."""

    __tablename__ = "elections"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    closed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    closed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("end_at >= start_at", name="ck_election_window"),
        Index("idx_elections_closed", "closed"),
    )


class ElectionVoter(Base):
    """Enrollment of a voter in an election's roster."""

    __tablename__ = "election_voters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    election_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("elections.id", ondelete="CASCADE"), nullable=False
    )
    voter_id: Mapped[str] = mapped_column(String(64), ForeignKey("voters.id", ondelete="CASCADE"), nullable=False)
    enrolled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (UniqueConstraint("election_id", "voter_id", name="uq_election_voter"),)


class ElectionCandidate(Base):
    """Assignment of a candidate to an election; ``position`` keeps assignment order."""

    __tablename__ = "election_candidates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    election_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("elections.id", ondelete="CASCADE"), nullable=False
    )
    candidate_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("election_id", "candidate_id", name="uq_election_candidate"),
        Index("idx_election_candidates_election_id", "election_id"),
    )


class Ballot(Base):
    """An immutable cast ballot."""

    __tablename__ = "ballots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    election_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("elections.id", ondelete="CASCADE"), nullable=False
    )
    voter_id: Mapped[str] = mapped_column(String(64), ForeignKey("voters.id"), nullable=False)
    candidate_id: Mapped[str] = mapped_column(String(64), ForeignKey("candidates.id"), nullable=False)
    cast_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("election_id", "voter_id", name="uq_ballot_election_voter"),
        Index("idx_ballots_election_id", "election_id"),
    )

"""Persistence service: mirror the in-memory voting state to the database.

The voting core keeps its state in memory. At startup ``load_state`` rebuilds
it from the six stored relations; afterwards every successful mutation is
written through with one of the ``save_*`` / ``delete_*`` functions, each of
which commits its own transaction. Callers wrap the write in
``revert_on_failure`` so a write that fails leaves memory as it was before
the mutation.
"""

from collections import defaultdict
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from election_api import models
from election_api.lib.voting import (
    AlreadyVotedError,
    Ballot,
    Candidate,
    Election,
    ElectionSummary,
    Voter,
    VotingSystem,
)
from election_api.lib.voting.clock import ensure_aware


@contextmanager
def revert_on_failure(revert: Callable[[], None], operation: str) -> Iterator[None]:
    """Run ``revert`` and re-raise if the enclosed write-through raises.

    Args:
        revert: Undoes the in-memory mutation that was just applied.
        operation: Name used in the log line.
    """
    try:
        yield
    except Exception:
        revert()
        logger.warning("Reverted in-memory {} after a failed write", operation)
        raise


async def load_state(session: AsyncSession, system: VotingSystem) -> None:
    """Populate ``system``'s registries and directory from the database.

    Voters' voted-election sets are derived from stored ballots.

    Args:
        session: Async database session.
        system: A voting system with empty registries.
    """
    ballot_rows = (await session.execute(select(models.Ballot).order_by(models.Ballot.id))).scalars().all()
    enrollment_rows = (await session.execute(select(models.ElectionVoter))).scalars().all()
    assignment_rows = (
        (
            await session.execute(
                select(models.ElectionCandidate).order_by(
                    models.ElectionCandidate.election_id, models.ElectionCandidate.position
                )
            )
        )
        .scalars()
        .all()
    )

    voted: dict[str, set[str]] = defaultdict(set)
    ballots_by_election: dict[str, list[Ballot]] = defaultdict(list)
    for row in ballot_rows:
        voted[row.voter_id].add(row.election_id)
        ballots_by_election[row.election_id].append(
            Ballot(
                election_id=row.election_id,
                voter_id=row.voter_id,
                candidate_id=row.candidate_id,
                cast_at=ensure_aware(row.cast_at),
            )
        )

    voters_by_election: dict[str, list[str]] = defaultdict(list)
    for row in enrollment_rows:
        voters_by_election[row.election_id].append(row.voter_id)

    candidates_by_election: dict[str, list[str]] = defaultdict(list)
    elections_by_candidate: dict[str, set[str]] = defaultdict(set)
    for row in assignment_rows:
        candidates_by_election[row.election_id].append(row.candidate_id)
        elections_by_candidate[row.candidate_id].add(row.election_id)

    for row in (await session.execute(select(models.Voter))).scalars().all():
        system.voters.restore(
            Voter(
                name=row.name,
                national_id=row.national_id,
                date_of_birth=row.date_of_birth,
                voter_id=row.id,
                registered=True,
                voted_elections=set(voted[row.id]),
            )
        )

    for row in (await session.execute(select(models.Candidate))).scalars().all():
        system.candidates.restore(
            Candidate(
                candidate_id=row.id,
                name=row.name,
                party=row.party,
                election_ids=set(elections_by_candidate[row.id]),
            )
        )

    election_rows = (
        (await session.execute(select(models.Election).order_by(models.Election.created_at, models.Election.id)))
        .scalars()
        .all()
    )
    for row in election_rows:
        system.elections.restore(
            Election.from_snapshot(
                row.id,
                row.name,
                ensure_aware(row.start_at),
                ensure_aware(row.end_at),
                closed=row.closed,
                closed_at=ensure_aware(row.closed_at) if row.closed_at else None,
                voter_ids=voters_by_election[row.id],
                candidate_ids=candidates_by_election[row.id],
                ballots=ballots_by_election[row.id],
                clock=system.clock,
            )
        )

    logger.info(
        "Loaded {} voters, {} candidates, {} elections",
        len(system.voters),
        len(system.candidates),
        len(election_rows),
    )


async def save_voter(session: AsyncSession, voter: Voter) -> None:
    session.add(
        models.Voter(
            id=voter.voter_id,
            name=voter.name,
            national_id=voter.national_id,
            date_of_birth=voter.date_of_birth,
        )
    )
    await session.commit()


async def save_candidate(session: AsyncSession, candidate: Candidate) -> None:
    session.add(models.Candidate(id=candidate.candidate_id, name=candidate.name, party=candidate.party))
    await session.commit()


async def save_election(session: AsyncSession, summary: ElectionSummary) -> None:
    session.add(
        models.Election(
            id=summary.election_id,
            name=summary.name,
            start_at=summary.start_at,
            end_at=summary.end_at,
            closed=summary.closed,
            closed_at=summary.closed_at,
        )
    )
    await session.commit()


async def save_election_closed(session: AsyncSession, summary: ElectionSummary) -> None:
    await session.execute(
        update(models.Election)
        .where(models.Election.id == summary.election_id)
        .values(closed=True, closed_at=summary.closed_at)
    )
    await session.commit()


async def delete_election(session: AsyncSession, election_id: str) -> None:
    """Delete an election together with its enrollments, assignments and ballots."""
    for model in (models.Ballot, models.ElectionVoter, models.ElectionCandidate):
        await session.execute(delete(model).where(model.election_id == election_id))
    await session.execute(delete(models.Election).where(models.Election.id == election_id))
    await session.commit()


async def save_enrollment(session: AsyncSession, election_id: str, voter_id: str) -> None:
    session.add(models.ElectionVoter(election_id=election_id, voter_id=voter_id))
    await session.commit()


async def save_candidate_assignment(session: AsyncSession, election_id: str, candidate_id: str) -> None:
    """Store an assignment at the end of the election's candidate order."""
    last_position = await session.scalar(
        select(func.max(models.ElectionCandidate.position)).where(models.ElectionCandidate.election_id == election_id)
    )
    session.add(
        models.ElectionCandidate(
            election_id=election_id,
            candidate_id=candidate_id,
            position=(last_position or 0) + 1,
        )
    )
    await session.commit()


async def delete_candidate_assignment(session: AsyncSession, election_id: str, candidate_id: str) -> None:
    await session.execute(
        delete(models.ElectionCandidate).where(
            models.ElectionCandidate.election_id == election_id,
            models.ElectionCandidate.candidate_id == candidate_id,
        )
    )
    await session.commit()


async def save_ballot(session: AsyncSession, ballot: Ballot) -> None:
    """Store a cast ballot.

    Raises:
        AlreadyVotedError: If the database already holds a ballot for the
            same ``(election_id, voter_id)``.
    """
    session.add(
        models.Ballot(
            election_id=ballot.election_id,
            voter_id=ballot.voter_id,
            candidate_id=ballot.candidate_id,
            cast_at=ballot.cast_at,
        )
    )
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        logger.warning(
            "Storage rejected duplicate ballot for election {} voter {}",
            ballot.election_id,
            ballot.voter_id,
        )
        msg = "Voter has already cast a ballot in this election."
        raise AlreadyVotedError(msg) from exc

"""Sample data: a demo election with two candidates for local runs."""

from dataclasses import dataclass, field
from datetime import timedelta

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from election_api.lib.voting import VotingSystem
from election_api.services import persistence_service

SAMPLE_ELECTION_ID = "e2025"
SAMPLE_ELECTION_NAME = "2025 Mayoral Race"
SAMPLE_CANDIDATES = (("Alice Rivera", "Party A"), ("Bob Santos", "Party B"))


@dataclass
class SeedResult:
    """What ``ensure_sample_data`` had to create."""

    election_created: bool = False
    candidates_created: list[str] = field(default_factory=list)
    assignments_created: list[str] = field(default_factory=list)


async def ensure_sample_data(session: AsyncSession, system: VotingSystem, credential: str) -> SeedResult:
    """Create the sample election and candidates unless they already exist.

    The election window opens one minute ago and closes in 24 hours, so it is
    immediately ongoing. Safe to call repeatedly.

    Args:
        session: Async database session used for write-through.
        system: The voting system to seed.
        credential: An admin credential accepted by ``system``.

    Returns:
        SeedResult listing what was created.
    """
    seeded = SeedResult()

    if system.elections.find(SAMPLE_ELECTION_ID) is None:
        now = system.clock()
        summary = system.create_election(
            credential,
            SAMPLE_ELECTION_ID,
            SAMPLE_ELECTION_NAME,
            now - timedelta(minutes=1),
            now + timedelta(hours=24),
        ).unwrap()
        await persistence_service.save_election(session, summary)
        seeded.election_created = True

    election = system.elections.find(SAMPLE_ELECTION_ID)
    for name, party in SAMPLE_CANDIDATES:
        candidate = system.candidates.find_by_name_party(name, party)
        if candidate is None:
            candidate = system.register_candidate(name, party).unwrap()
            await persistence_service.save_candidate(session, candidate)
            seeded.candidates_created.append(candidate.candidate_id)
        if election is not None and not election.closed and not election.has_candidate(candidate.candidate_id):
            system.add_candidate_to_election(credential, SAMPLE_ELECTION_ID, candidate.candidate_id).unwrap()
            await persistence_service.save_candidate_assignment(session, SAMPLE_ELECTION_ID, candidate.candidate_id)
            seeded.assignments_created.append(candidate.candidate_id)

    logger.info(
        "Sample data: election_created={}, candidates={}, assignments={}",
        seeded.election_created,
        len(seeded.candidates_created),
        len(seeded.assignments_created),
    )
    return seeded

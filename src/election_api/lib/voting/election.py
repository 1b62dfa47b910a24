"""Election state machine: rosters, ballot casting, closing, and tallying.

An election is ``Open`` from creation until ``close()`` succeeds, after which it
is ``Closed`` for good. Ballots are accepted only while the election is
*ongoing*: open and with the current time inside ``[start_at, end_at]``.

The election keeps only IDs of the voters and candidates it references; the
registries own the entities. Operations that must touch an entity (marking a
voter as having voted, cross-linking a candidate) receive it from the caller.

All state changes happen under a per-election lock so a cast and a close on the
same election are serialized and every cast observes ``closed`` consistently.
"""

import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime

from loguru import logger

from election_api.lib.voting.ballot import Ballot
from election_api.lib.voting.candidate import Candidate
from election_api.lib.voting.clock import Clock, ensure_aware, utc_now
from election_api.lib.voting.errors import (
    AlreadyAssignedError,
    AlreadyClosedError,
    AlreadyEnrolledError,
    AlreadyVotedError,
    NotClosedError,
    NotEligibleError,
    NotEnrolledError,
    NotFoundError,
    NotOngoingError,
    StateError,
    UnknownCandidateError,
    VotingStartedError,
)
from election_api.lib.voting.result import Err, Ok, Result
from election_api.lib.voting.voter import Voter


@dataclass(frozen=True)
class ElectionSummary:
    """Read-only snapshot of an election for listings."""

    election_id: str
    name: str
    start_at: datetime
    end_at: datetime
    closed: bool
    closed_at: datetime | None
    total_registered_voters: int
    total_candidates: int
    total_ballots_cast: int


@dataclass(frozen=True)
class CandidateResult:
    """One row of a closed election's results."""

    candidate_id: str
    name: str
    party: str
    votes: int


class Election:
    """A bounded-time ballot contest."""

    def __init__(
        self,
        election_id: str,
        name: str,
        start_at: datetime,
        end_at: datetime,
        clock: Clock = utc_now,
    ) -> None:
        self.election_id = election_id
        self.name = name
        self.start_at = ensure_aware(start_at)
        self.end_at = ensure_aware(end_at)
        self.closed = False
        self.closed_at: datetime | None = None
        self._clock = clock
        self._voter_ids: set[str] = set()
        # dict keeps assignment order, used as the results tie-break
        self._candidate_ids: dict[str, None] = {}
        self._ballots: list[Ballot] = []
        self._ballot_keys: set[tuple[str, str]] = set()
        self._lock = threading.Lock()

    @classmethod
    def from_snapshot(
        cls,
        election_id: str,
        name: str,
        start_at: datetime,
        end_at: datetime,
        *,
        closed: bool = False,
        closed_at: datetime | None = None,
        voter_ids: Iterable[str] = (),
        candidate_ids: Iterable[str] = (),
        ballots: Iterable[Ballot] = (),
        clock: Clock = utc_now,
    ) -> "Election":
        """Rebuild an election from stored state without replaying the checks."""
        election = cls(election_id, name, start_at, end_at, clock=clock)
        election.closed = closed
        election.closed_at = ensure_aware(closed_at) if closed_at is not None else None
        election._voter_ids.update(voter_ids)
        for candidate_id in candidate_ids:
            election._candidate_ids[candidate_id] = None
        for ballot in ballots:
            election._ballots.append(ballot)
            election._ballot_keys.add(ballot.key)
        return election

    # --- Read access ---

    @property
    def voter_ids(self) -> frozenset[str]:
        return frozenset(self._voter_ids)

    @property
    def candidate_ids(self) -> tuple[str, ...]:
        return tuple(self._candidate_ids)

    @property
    def ballots(self) -> tuple[Ballot, ...]:
        return tuple(self._ballots)

    def has_voter(self, voter_id: str) -> bool:
        return voter_id in self._voter_ids

    def has_candidate(self, candidate_id: str) -> bool:
        return candidate_id in self._candidate_ids

    def is_ongoing(self, now: datetime | None = None) -> bool:
        """True iff not closed and ``now`` falls within ``[start_at, end_at]``."""
        if self.closed:
            return False
        current = ensure_aware(now) if now is not None else self._clock()
        return self.start_at <= current <= self.end_at

    def summary(self) -> ElectionSummary:
        with self._lock:
            return ElectionSummary(
                election_id=self.election_id,
                name=self.name,
                start_at=self.start_at,
                end_at=self.end_at,
                closed=self.closed,
                closed_at=self.closed_at,
                total_registered_voters=len(self._voter_ids),
                total_candidates=len(self._candidate_ids),
                total_ballots_cast=len(self._ballots),
            )

    # --- Rosters ---

    def enroll_voter(self, voter: Voter) -> Result[Voter]:
        """Add a registered voter to this election's roster."""
        with self._lock:
            if self.closed:
                return Err(StateError("Cannot register voter. Election is already closed."))
            if not voter.registered or voter.voter_id is None:
                return Err(NotEligibleError("Voter is not registered in the system."))
            if voter.voter_id in self._voter_ids:
                return Err(AlreadyEnrolledError("Voter already registered for this election."))
            self._voter_ids.add(voter.voter_id)
        return Ok(voter)

    def add_candidate(self, candidate: Candidate) -> Result[Candidate]:
        """Cross-link a candidate with this election."""
        with self._lock:
            if self.closed:
                return Err(StateError("Cannot add candidate. Election is already closed."))
            if self.election_id in candidate.election_ids or candidate.candidate_id in self._candidate_ids:
                return Err(AlreadyAssignedError("Candidate already in this election."))
            candidate.election_ids.add(self.election_id)
            self._candidate_ids[candidate.candidate_id] = None
        return Ok(candidate)

    def remove_candidate(self, candidate: Candidate) -> Result[Candidate]:
        """Unlink a candidate, allowed only while open and before the first ballot."""
        with self._lock:
            if self.closed:
                return Err(StateError("Cannot remove candidate. Election is already closed."))
            if self._ballots:
                return Err(VotingStartedError("Cannot remove candidate once voting has started."))
            if candidate.candidate_id not in self._candidate_ids:
                return Err(NotFoundError(f"Candidate not found in election {self.election_id}."))
            del self._candidate_ids[candidate.candidate_id]
            candidate.election_ids.discard(self.election_id)
        return Ok(candidate)

    def unenroll_voter(self, voter_id: str) -> None:
        """Drop a roster entry whose enrollment could not be stored."""
        with self._lock:
            self._voter_ids.discard(voter_id)

    def unassign_candidate(self, candidate: Candidate) -> None:
        """Undo ``add_candidate`` for an assignment that could not be stored."""
        with self._lock:
            self._candidate_ids.pop(candidate.candidate_id, None)
            candidate.election_ids.discard(self.election_id)

    # --- Voting ---

    def cast_ballot(self, voter: Voter, candidate_id: str) -> Result[Ballot]:
        """Record ``voter``'s ballot for ``candidate_id``.

        The voter's voted set and the ballot list are updated together; a
        rejected cast changes neither.
        """
        with self._lock:
            if not self.is_ongoing():
                return Err(NotOngoingError("Election is not open for voting at this time."))
            voter_id = voter.voter_id
            if voter_id is None or voter_id not in self._voter_ids:
                return Err(NotEnrolledError("Voter is not registered for this election."))
            if voter.has_voted_in(self.election_id) or (self.election_id, voter_id) in self._ballot_keys:
                return Err(AlreadyVotedError("Voter has already cast a ballot in this election."))
            if candidate_id not in self._candidate_ids:
                return Err(UnknownCandidateError("Candidate is not in this election."))

            ballot = Ballot(
                election_id=self.election_id,
                voter_id=voter_id,
                candidate_id=candidate_id,
                cast_at=self._clock(),
            )
            voter.voted_elections.add(self.election_id)
            self._ballot_keys.add(ballot.key)
            self._ballots.append(ballot)

        logger.info("Ballot cast in election {} by voter {}", self.election_id, voter_id)
        return Ok(ballot)

    def revoke_ballot(self, ballot: Ballot, voter: Voter) -> None:
        """Withdraw a ballot the database refused, clearing the voter's mark with it."""
        with self._lock:
            if ballot.key not in self._ballot_keys:
                return
            self._ballot_keys.discard(ballot.key)
            self._ballots.remove(ballot)
            voter.voted_elections.discard(self.election_id)
        logger.warning("Revoked unstored ballot in election {} for voter {}", self.election_id, ballot.voter_id)

    def close(self) -> Result["Election"]:
        with self._lock:
            if self.closed:
                return Err(AlreadyClosedError("Election already closed."))
            self.closed = True
            self.closed_at = self._clock()
        logger.info("Closed election {}", self.election_id)
        return Ok(self)

    # --- Results ---

    def _count(self) -> dict[str, int]:
        counts = dict.fromkeys(self._candidate_ids, 0)
        for ballot in self._ballots:
            counts[ballot.candidate_id] = counts.get(ballot.candidate_id, 0) + 1
        return counts

    def tally(self) -> Result[dict[str, int]]:
        """Per-candidate ballot counts; zero-vote candidates are included."""
        with self._lock:
            if not self.closed:
                return Err(NotClosedError("Cannot tally votes until the election is closed."))
            return Ok(self._count())

    def results(self, candidates: Mapping[str, Candidate]) -> Result[list[CandidateResult]]:
        """Results sorted by votes descending, ties kept in assignment order.

        Args:
            candidates: Candidate entities by ID, used for display fields.
        """
        with self._lock:
            if not self.closed:
                return Err(NotClosedError("Cannot get results until the election is closed."))
            counts = self._count()

        rows = []
        for candidate_id, votes in counts.items():
            candidate = candidates.get(candidate_id)
            if candidate is None:
                logger.warning(
                    "Candidate {} missing from results lookup for election {}", candidate_id, self.election_id
                )
            rows.append(
                CandidateResult(
                    candidate_id=candidate_id,
                    name=candidate.name if candidate else "",
                    party=candidate.party if candidate else "",
                    votes=votes,
                )
            )
        rows.sort(key=lambda row: row.votes, reverse=True)
        return Ok(rows)

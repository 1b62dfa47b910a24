"""Voting orchestrator: the single entry point composing registries and elections.

Administrative operations are gated by an injected credential check that runs
before any other validation. Everything else only requires that the referenced
voters, candidates and elections exist.
"""

from collections.abc import Callable
from datetime import date, datetime

from loguru import logger

from election_api.lib.voting.ballot import Ballot
from election_api.lib.voting.candidate import Candidate, CandidateRegistry
from election_api.lib.voting.clock import Clock, utc_now
from election_api.lib.voting.directory import ElectionDirectory
from election_api.lib.voting.election import CandidateResult, Election, ElectionSummary
from election_api.lib.voting.errors import NotFoundError, UnauthorizedError
from election_api.lib.voting.result import Err, Ok, Result
from election_api.lib.voting.voter import Voter, VoterRegistry

CredentialCheck = Callable[[str | None], bool]


class VotingSystem:
    """Composes the voter and candidate registries with the election directory."""

    def __init__(
        self,
        voters: VoterRegistry,
        candidates: CandidateRegistry,
        elections: ElectionDirectory,
        credential_check: CredentialCheck,
        clock: Clock = utc_now,
    ) -> None:
        self.voters = voters
        self.candidates = candidates
        self.elections = elections
        self._credential_check = credential_check
        self.clock = clock

    def _authorize(self, credential: str | None, operation: str) -> Err | None:
        if self._credential_check(credential):
            return None
        logger.warning("Rejected admin credential for {}", operation)
        return Err(UnauthorizedError("Unauthorized: Invalid admin credential."))

    def _election(self, election_id: str) -> Election | Err:
        election = self.elections.find(election_id)
        if election is None:
            return Err(NotFoundError("Election not found."))
        return election

    def _voter(self, voter_id: str) -> Voter | Err:
        voter = self.voters.find(voter_id)
        if voter is None:
            return Err(NotFoundError("Voter not found in system."))
        return voter

    def _candidate(self, candidate_id: str) -> Candidate | Err:
        candidate = self.candidates.find(candidate_id)
        if candidate is None:
            return Err(NotFoundError(f"Candidate {candidate_id} not found."))
        return candidate

    # --- Registration ---

    def register_voter(self, name: str, national_id: str, date_of_birth: date) -> Result[Voter]:
        return self.voters.register(name, national_id, date_of_birth)

    def register_candidate(self, name: str, party: str) -> Result[Candidate]:
        return self.candidates.register(name, party)

    def find_voter(self, voter_id: str) -> Voter | None:
        return self.voters.find(voter_id)

    def find_candidate(self, candidate_id: str) -> Candidate | None:
        return self.candidates.find(candidate_id)

    # --- Admin operations ---

    def create_election(
        self,
        credential: str | None,
        election_id: str,
        name: str,
        start_at: datetime,
        end_at: datetime,
    ) -> Result[ElectionSummary]:
        denied = self._authorize(credential, "create_election")
        if denied is not None:
            return denied
        result = self.elections.create(election_id, name, start_at, end_at)
        if not result.is_ok:
            return result
        return Ok(result.value.summary())

    def delete_election(self, credential: str | None, election_id: str) -> Result[ElectionSummary]:
        """Remove an election and unlink it from its candidates."""
        denied = self._authorize(credential, "delete_election")
        if denied is not None:
            return denied
        result = self.elections.delete(election_id)
        if not result.is_ok:
            return result
        election = result.value
        for candidate_id in election.candidate_ids:
            candidate = self.candidates.find(candidate_id)
            if candidate is not None:
                candidate.election_ids.discard(election_id)
        return Ok(election.summary())

    def add_candidate_to_election(
        self, credential: str | None, election_id: str, candidate_id: str
    ) -> Result[Candidate]:
        denied = self._authorize(credential, "add_candidate_to_election")
        if denied is not None:
            return denied
        election = self._election(election_id)
        if isinstance(election, Err):
            return election
        candidate = self._candidate(candidate_id)
        if isinstance(candidate, Err):
            return candidate
        return election.add_candidate(candidate)

    def remove_candidate_from_election(
        self, credential: str | None, election_id: str, candidate_id: str
    ) -> Result[Candidate]:
        denied = self._authorize(credential, "remove_candidate_from_election")
        if denied is not None:
            return denied
        election = self._election(election_id)
        if isinstance(election, Err):
            return election
        candidate = self._candidate(candidate_id)
        if isinstance(candidate, Err):
            return candidate
        return election.remove_candidate(candidate)

    def close_election(self, credential: str | None, election_id: str) -> Result[ElectionSummary]:
        denied = self._authorize(credential, "close_election")
        if denied is not None:
            return denied
        election = self._election(election_id)
        if isinstance(election, Err):
            return election
        result = election.close()
        if not result.is_ok:
            return result
        return Ok(election.summary())

    # --- Voter operations ---

    def register_voter_for_election(self, voter_id: str, election_id: str) -> Result[Voter]:
        voter = self._voter(voter_id)
        if isinstance(voter, Err):
            return voter
        election = self._election(election_id)
        if isinstance(election, Err):
            return election
        return election.enroll_voter(voter)

    def cast_ballot(self, election_id: str, voter_id: str, candidate_id: str) -> Result[Ballot]:
        voter = self._voter(voter_id)
        if isinstance(voter, Err):
            return voter
        election = self._election(election_id)
        if isinstance(election, Err):
            return election
        candidate = self._candidate(candidate_id)
        if isinstance(candidate, Err):
            return candidate
        return election.cast_ballot(voter, candidate.candidate_id)

    # --- Reverting unstored mutations ---

    def revert_voter_registration(self, voter: Voter) -> None:
        self.voters.discard(voter)

    def revert_candidate_registration(self, candidate: Candidate) -> None:
        self.candidates.discard(candidate)

    def revert_election_creation(self, election_id: str) -> None:
        result = self.elections.delete(election_id)
        if result.is_ok:
            for candidate_id in result.value.candidate_ids:
                candidate = self.candidates.find(candidate_id)
                if candidate is not None:
                    candidate.election_ids.discard(election_id)

    def revert_enrollment(self, election_id: str, voter_id: str) -> None:
        election = self.elections.find(election_id)
        if election is not None:
            election.unenroll_voter(voter_id)

    def revert_candidate_assignment(self, election_id: str, candidate: Candidate) -> None:
        election = self.elections.find(election_id)
        if election is not None:
            election.unassign_candidate(candidate)

    def revert_ballot(self, ballot: Ballot) -> None:
        """Undo a cast whose ballot the database refused or failed to store."""
        election = self.elections.find(ballot.election_id)
        voter = self.voters.find(ballot.voter_id)
        if election is not None and voter is not None:
            election.revoke_ballot(ballot, voter)

    # --- Queries ---

    def get_election(self, election_id: str) -> Result[ElectionSummary]:
        election = self._election(election_id)
        if isinstance(election, Err):
            return election
        return Ok(election.summary())

    def list_election_candidates(self, election_id: str) -> Result[list[Candidate]]:
        election = self._election(election_id)
        if isinstance(election, Err):
            return election
        found = (self.candidates.find(cid) for cid in election.candidate_ids)
        return Ok([c for c in found if c is not None])

    def get_tally(self, election_id: str) -> Result[dict[str, int]]:
        election = self._election(election_id)
        if isinstance(election, Err):
            return election
        return election.tally()

    def get_results(self, election_id: str) -> Result[list[CandidateResult]]:
        election = self._election(election_id)
        if isinstance(election, Err):
            return election
        lookup = {}
        for candidate_id in election.candidate_ids:
            candidate = self.candidates.find(candidate_id)
            if candidate is not None:
                lookup[candidate_id] = candidate
        return election.results(lookup)

    def list_ongoing_elections(self) -> list[ElectionSummary]:
        return self.elections.list_ongoing(self.clock())

    def list_all_elections(self) -> list[ElectionSummary]:
        return self.elections.list_all()

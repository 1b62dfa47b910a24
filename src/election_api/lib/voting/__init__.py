"""Voting domain library: registries, elections, and the voting orchestrator.

Public API:
    - VotingSystem: Orchestrator and single entry point
    - VoterRegistry / CandidateRegistry / ElectionDirectory: Injectable stores
    - Election: Per-election state machine (enroll, cast, close, tally)
    - Ok / Err / Result: Outcome of every mutating operation
    - VotingError and subclasses: Failure taxonomy
"""

from election_api.lib.voting.ballot import Ballot
from election_api.lib.voting.candidate import Candidate, CandidateRegistry
from election_api.lib.voting.clock import Clock, utc_now
from election_api.lib.voting.directory import ElectionDirectory
from election_api.lib.voting.election import CandidateResult, Election, ElectionSummary
from election_api.lib.voting.errors import (
    AlreadyAssignedError,
    AlreadyClosedError,
    AlreadyEnrolledError,
    AlreadyVotedError,
    DuplicateError,
    InvalidInputError,
    NotClosedError,
    NotEligibleError,
    NotEnrolledError,
    NotFoundError,
    NotOngoingError,
    StateError,
    UnauthorizedError,
    UnknownCandidateError,
    VotingError,
    VotingStartedError,
)
from election_api.lib.voting.ids import IdGenerator, counter_ids, uuid_ids
from election_api.lib.voting.result import Err, Ok, Result
from election_api.lib.voting.system import CredentialCheck, VotingSystem
from election_api.lib.voting.voter import Voter, VoterRegistry, calculate_age

__all__ = [
    "AlreadyAssignedError",
    "AlreadyClosedError",
    "AlreadyEnrolledError",
    "AlreadyVotedError",
    "Ballot",
    "Candidate",
    "CandidateRegistry",
    "CandidateResult",
    "Clock",
    "CredentialCheck",
    "DuplicateError",
    "Election",
    "ElectionDirectory",
    "ElectionSummary",
    "Err",
    "IdGenerator",
    "InvalidInputError",
    "NotClosedError",
    "NotEligibleError",
    "NotEnrolledError",
    "NotFoundError",
    "NotOngoingError",
    "Ok",
    "Result",
    "StateError",
    "UnauthorizedError",
    "UnknownCandidateError",
    "Voter",
    "VoterRegistry",
    "VotingError",
    "VotingStartedError",
    "VotingSystem",
    "calculate_age",
    "counter_ids",
    "utc_now",
    "uuid_ids",
]

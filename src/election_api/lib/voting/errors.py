"""Failure taxonomy for the voting domain.

Every rejected operation reports exactly one of these. They travel inside
``Err`` results and are raised only when a caller unwraps a failed result.
"""


class VotingError(Exception):
    """Base class for all voting domain failures."""

    code = "voting_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(VotingError):
    """Malformed input such as a bad national ID or an under-age voter."""

    code = "validation_error"


class NotFoundError(VotingError):
    """A referenced voter, candidate, or election does not exist."""

    code = "not_found"


class UnauthorizedError(VotingError):
    """The supplied admin credential was rejected."""

    code = "unauthorized"


class StateError(VotingError):
    """The operation is not valid for the election's current state."""

    code = "invalid_state"


class AlreadyClosedError(StateError):
    code = "already_closed"


class NotClosedError(StateError):
    code = "not_closed"


class NotOngoingError(StateError):
    code = "not_ongoing"


class NotEligibleError(VotingError):
    """The voter never completed system registration."""

    code = "not_eligible"


class NotEnrolledError(VotingError):
    """The voter is not on the election's roster."""

    code = "not_enrolled"


class UnknownCandidateError(VotingError):
    """The candidate is not assigned to the election."""

    code = "unknown_candidate"


class AlreadyEnrolledError(VotingError):
    code = "already_enrolled"


class AlreadyAssignedError(VotingError):
    code = "already_assigned"


class AlreadyVotedError(VotingError):
    code = "already_voted"


class DuplicateError(VotingError):
    code = "duplicate"


class VotingStartedError(VotingError):
    """Candidates cannot change once ballots exist."""

    code = "voting_started"

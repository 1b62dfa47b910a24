"""Immutable ballot record."""

from dataclasses import dataclass, field
from datetime import datetime

from election_api.lib.voting.clock import utc_now


@dataclass(frozen=True)
class Ballot:
    """One voter's choice in one election.

    Two ballots are equal when they share ``(election_id, voter_id)``; the
    chosen candidate and timestamp do not take part in identity.
    """

    election_id: str
    voter_id: str
    candidate_id: str = field(compare=False)
    cast_at: datetime = field(default_factory=utc_now, compare=False)

    @property
    def key(self) -> tuple[str, str]:
        return (self.election_id, self.voter_id)

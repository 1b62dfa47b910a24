"""Voter request/response schemas.

National-ID format and minimum age are checked by the voter registry, not
here; these schemas only enforce shape.
"""

from datetime import date

from pydantic import BaseModel, Field

from election_api.lib.voting import Voter


class VoterRegisterRequest(BaseModel):
    """Request body for registering a voter."""

    name: str = Field(min_length=2, max_length=120)
    national_id: str = Field(description="8-12 uppercase letters or digits")
    date_of_birth: date


class VoterResponse(BaseModel):
    """A registered voter."""

    voter_id: str
    name: str
    national_id: str
    date_of_birth: date
    voted_elections: list[str] = Field(default_factory=list)

    @classmethod
    def from_voter(cls, voter: Voter) -> "VoterResponse":
        return cls(
            voter_id=voter.voter_id or "",
            name=voter.name,
            national_id=voter.national_id,
            date_of_birth=voter.date_of_birth,
            voted_elections=sorted(voter.voted_elections),
        )

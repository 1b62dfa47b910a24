"""Candidate request/response schemas."""

from pydantic import BaseModel, Field

from election_api.lib.voting import Candidate


class CandidateRegisterRequest(BaseModel):
    """Request body for registering a candidate."""

    name: str = Field(min_length=1, max_length=120)
    party: str = Field(min_length=1, max_length=120)


class CandidateResponse(BaseModel):
    """A candidate and the elections they are assigned to."""

    candidate_id: str
    name: str
    party: str
    elections: list[str] = Field(default_factory=list)

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> "CandidateResponse":
        return cls(
            candidate_id=candidate.candidate_id,
            name=candidate.name,
            party=candidate.party,
            elections=sorted(candidate.election_ids),
        )

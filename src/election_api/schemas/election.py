"""Pydantic v2 schemas for election, enrollment, ballot and results endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import AwareDatetime, BaseModel, Field

# --- Request schemas ---


class ElectionCreateRequest(BaseModel):
    """Request body for creating an election."""

    election_id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=255)
    start_at: AwareDatetime
    end_at: AwareDatetime


class CandidateAssignRequest(BaseModel):
    candidate_id: str = Field(min_length=1)


class VoterEnrollRequest(BaseModel):
    voter_id: str = Field(min_length=1)


class BallotCastRequest(BaseModel):
    voter_id: str = Field(min_length=1)
    candidate_id: str = Field(min_length=1)


ElectionState = Literal["ongoing", "all"]


# --- Response schemas ---


class ElectionSummaryResponse(BaseModel):
    """Election summary for list and detail endpoints."""

    model_config = {"from_attributes": True}

    election_id: str
    name: str
    start_at: datetime
    end_at: datetime
    closed: bool
    closed_at: datetime | None = None
    total_registered_voters: int = 0
    total_candidates: int = 0
    total_ballots_cast: int = 0


class ElectionListResponse(BaseModel):
    items: list[ElectionSummaryResponse]


class EnrollmentResponse(BaseModel):
    election_id: str
    voter_id: str


class BallotResponse(BaseModel):
    """A recorded ballot."""

    model_config = {"from_attributes": True}

    election_id: str
    voter_id: str
    candidate_id: str
    cast_at: datetime


class CandidateResultResponse(BaseModel):
    model_config = {"from_attributes": True}

    candidate_id: str
    name: str
    party: str
    votes: int


class ElectionResultsResponse(BaseModel):
    """Results of a closed election, sorted by votes descending."""

    election_id: str
    total_votes: int
    results: list[CandidateResultResponse]


class TallyResponse(BaseModel):
    election_id: str
    counts: dict[str, int]

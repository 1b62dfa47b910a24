"""Unit tests for election request/response schemas."""

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from election_api.lib.voting import Ballot, Candidate, ElectionSummary, Voter
from election_api.schemas.candidate import CandidateResponse
from election_api.schemas.election import BallotResponse, ElectionCreateRequest, ElectionSummaryResponse
from election_api.schemas.voter import VoterResponse


class TestElectionCreateRequest:
    def test_accepts_aware_datetimes(self) -> None:
        request = ElectionCreateRequest(
            election_id="e1",
            name="Mayor",
            start_at="2025-06-01T08:00:00Z",
            end_at="2025-06-01T20:00:00+02:00",
        )
        assert request.start_at.tzinfo is not None

    def test_rejects_naive_datetimes(self) -> None:
        with pytest.raises(ValidationError):
            ElectionCreateRequest(
                election_id="e1",
                name="Mayor",
                start_at="2025-06-01T08:00:00",
                end_at="2025-06-01T20:00:00",
            )

    def test_rejects_empty_id(self) -> None:
        with pytest.raises(ValidationError):
            ElectionCreateRequest(
                election_id="",
                name="Mayor",
                start_at="2025-06-01T08:00:00Z",
                end_at="2025-06-01T20:00:00Z",
            )


class TestResponses:
    def test_summary_from_dataclass(self) -> None:
        start = datetime(2025, 6, 1, 8, tzinfo=UTC)
        summary = ElectionSummary(
            election_id="e1",
            name="Mayor",
            start_at=start,
            end_at=start,
            closed=False,
            closed_at=None,
            total_registered_voters=3,
            total_candidates=2,
            total_ballots_cast=1,
        )
        response = ElectionSummaryResponse.model_validate(summary)
        assert response.total_ballots_cast == 1
        assert response.closed_at is None

    def test_ballot_from_dataclass(self) -> None:
        ballot = Ballot(election_id="e1", voter_id="v1", candidate_id="c1")
        assert BallotResponse.model_validate(ballot).candidate_id == "c1"

    def test_voter_response_sorts_elections(self) -> None:
        voter = Voter(
            name="Ana",
            national_id="ANA123456",
            date_of_birth=date(1990, 1, 1),
            voter_id="v1",
            registered=True,
            voted_elections={"e2", "e1"},
        )
        assert VoterResponse.from_voter(voter).voted_elections == ["e1", "e2"]

    def test_candidate_response(self) -> None:
        candidate = Candidate(candidate_id="c1", name="Alice", party="A", election_ids={"e1"})
        assert CandidateResponse.from_candidate(candidate).elections == ["e1"]

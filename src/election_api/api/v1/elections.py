"""Election API endpoints.

GET /elections?state=ongoing|all — list elections
POST /elections — create election (admin)
GET /elections/{id} — election summary
DELETE /elections/{id} — delete election (admin)
GET /elections/{id}/candidates — candidates on the ballot
POST /elections/{id}/candidates — assign candidate (admin)
DELETE /elections/{id}/candidates/{candidate_id} — unassign candidate (admin)
POST /elections/{id}/voters — enroll voter
POST /elections/{id}/ballots — cast ballot
POST /elections/{id}/close — close election (admin)
GET /elections/{id}/results — sorted results (closed only)
GET /elections/{id}/tally — raw counts (closed only)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from election_api.core.dependencies import get_admin_credential, get_async_session, get_voting_system
from election_api.lib.voting import VotingSystem
from election_api.schemas.candidate import CandidateResponse
from election_api.schemas.common import ErrorResponse
from election_api.schemas.election import (
    BallotCastRequest,
    BallotResponse,
    CandidateAssignRequest,
    CandidateResultResponse,
    ElectionCreateRequest,
    ElectionListResponse,
    ElectionResultsResponse,
    ElectionState,
    ElectionSummaryResponse,
    EnrollmentResponse,
    TallyResponse,
    VoterEnrollRequest,
)
from election_api.services import persistence_service

elections_router = APIRouter(
    prefix="/elections",
    tags=["elections"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)

System = Annotated[VotingSystem, Depends(get_voting_system)]
Session = Annotated[AsyncSession, Depends(get_async_session)]
AdminCredential = Annotated[str | None, Depends(get_admin_credential)]


# --- Listing and detail ---


@elections_router.get("", response_model=ElectionListResponse)
async def list_elections(
    system: System,
    state: ElectionState = Query(default="all", description="ongoing or all"),
) -> ElectionListResponse:
    """List elections. Public endpoint."""
    summaries = system.list_ongoing_elections() if state == "ongoing" else system.list_all_elections()
    return ElectionListResponse(items=[ElectionSummaryResponse.model_validate(s) for s in summaries])


@elections_router.post("", response_model=ElectionSummaryResponse, status_code=201)
async def create_election(
    request: ElectionCreateRequest,
    system: System,
    session: Session,
    credential: AdminCredential,
) -> ElectionSummaryResponse:
    """Create an election with a fixed voting window. Admin-only."""
    summary = system.create_election(
        credential, request.election_id, request.name, request.start_at, request.end_at
    ).unwrap()
    with persistence_service.revert_on_failure(
        lambda: system.revert_election_creation(summary.election_id), "create_election"
    ):
        await persistence_service.save_election(session, summary)
    return ElectionSummaryResponse.model_validate(summary)


@elections_router.get("/{election_id}", response_model=ElectionSummaryResponse)
async def get_election(election_id: str, system: System) -> ElectionSummaryResponse:
    return ElectionSummaryResponse.model_validate(system.get_election(election_id).unwrap())


@elections_router.delete("/{election_id}", status_code=204)
async def delete_election(
    election_id: str,
    system: System,
    session: Session,
    credential: AdminCredential,
) -> Response:
    """Delete an election with its rosters and ballots. Admin-only."""
    system.delete_election(credential, election_id).unwrap()
    await persistence_service.delete_election(session, election_id)
    return Response(status_code=204)


# --- Candidates ---


@elections_router.get("/{election_id}/candidates", response_model=list[CandidateResponse])
async def list_election_candidates(election_id: str, system: System) -> list[CandidateResponse]:
    candidates = system.list_election_candidates(election_id).unwrap()
    return [CandidateResponse.from_candidate(c) for c in candidates]


@elections_router.post("/{election_id}/candidates", response_model=CandidateResponse, status_code=201)
async def add_candidate(
    election_id: str,
    request: CandidateAssignRequest,
    system: System,
    session: Session,
    credential: AdminCredential,
) -> CandidateResponse:
    """Assign a registered candidate to an open election. Admin-only."""
    candidate = system.add_candidate_to_election(credential, election_id, request.candidate_id).unwrap()
    with persistence_service.revert_on_failure(
        lambda: system.revert_candidate_assignment(election_id, candidate), "add_candidate"
    ):
        await persistence_service.save_candidate_assignment(session, election_id, candidate.candidate_id)
    return CandidateResponse.from_candidate(candidate)


@elections_router.delete("/{election_id}/candidates/{candidate_id}", status_code=204)
async def remove_candidate(
    election_id: str,
    candidate_id: str,
    system: System,
    session: Session,
    credential: AdminCredential,
) -> Response:
    """Unassign a candidate before any ballot is cast. Admin-only."""
    system.remove_candidate_from_election(credential, election_id, candidate_id).unwrap()
    await persistence_service.delete_candidate_assignment(session, election_id, candidate_id)
    return Response(status_code=204)


# --- Voters and ballots ---


@elections_router.post("/{election_id}/voters", response_model=EnrollmentResponse, status_code=201)
async def enroll_voter(
    election_id: str,
    request: VoterEnrollRequest,
    system: System,
    session: Session,
) -> EnrollmentResponse:
    voter = system.register_voter_for_election(request.voter_id, election_id).unwrap()
    with persistence_service.revert_on_failure(
        lambda: system.revert_enrollment(election_id, request.voter_id), "enroll_voter"
    ):
        await persistence_service.save_enrollment(session, election_id, request.voter_id)
    return EnrollmentResponse(election_id=election_id, voter_id=voter.voter_id or request.voter_id)


@elections_router.post("/{election_id}/ballots", response_model=BallotResponse, status_code=201)
async def cast_ballot(
    election_id: str,
    request: BallotCastRequest,
    system: System,
    session: Session,
) -> BallotResponse:
    """Cast one ballot for an enrolled voter while the election is ongoing."""
    ballot = system.cast_ballot(election_id, request.voter_id, request.candidate_id).unwrap()
    with persistence_service.revert_on_failure(lambda: system.revert_ballot(ballot), "cast_ballot"):
        await persistence_service.save_ballot(session, ballot)
    return BallotResponse.model_validate(ballot)


@elections_router.post("/{election_id}/close", response_model=ElectionSummaryResponse)
async def close_election(
    election_id: str,
    system: System,
    session: Session,
    credential: AdminCredential,
) -> ElectionSummaryResponse:
    """Close an election for good. Admin-only."""
    summary = system.close_election(credential, election_id).unwrap()
    await persistence_service.save_election_closed(session, summary)
    return ElectionSummaryResponse.model_validate(summary)


# --- Results ---


@elections_router.get("/{election_id}/results", response_model=ElectionResultsResponse)
async def get_results(election_id: str, system: System) -> ElectionResultsResponse:
    rows = system.get_results(election_id).unwrap()
    return ElectionResultsResponse(
        election_id=election_id,
        total_votes=sum(row.votes for row in rows),
        results=[CandidateResultResponse.model_validate(row) for row in rows],
    )


@elections_router.get("/{election_id}/tally", response_model=TallyResponse)
async def get_tally(election_id: str, system: System) -> TallyResponse:
    return TallyResponse(election_id=election_id, counts=system.get_tally(election_id).unwrap())

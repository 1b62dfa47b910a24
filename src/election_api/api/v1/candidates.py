"""Candidate API endpoints.

POST /candidates — register a candidate
GET /candidates/{candidate_id} — candidate detail
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from election_api.core.dependencies import get_async_session, get_voting_system
from election_api.lib.voting import VotingSystem
from election_api.schemas.candidate import CandidateRegisterRequest, CandidateResponse
from election_api.schemas.common import ErrorResponse
from election_api.services import persistence_service

candidates_router = APIRouter(prefix="/candidates", tags=["candidates"], responses={404: {"model": ErrorResponse}})


@candidates_router.post("", response_model=CandidateResponse, status_code=201)
async def register_candidate(
    request: CandidateRegisterRequest,
    system: Annotated[VotingSystem, Depends(get_voting_system)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> CandidateResponse:
    candidate = system.register_candidate(request.name, request.party).unwrap()
    with persistence_service.revert_on_failure(
        lambda: system.revert_candidate_registration(candidate), "register_candidate"
    ):
        await persistence_service.save_candidate(session, candidate)
    return CandidateResponse.from_candidate(candidate)


@candidates_router.get("/{candidate_id}", response_model=CandidateResponse)
async def get_candidate(
    candidate_id: str,
    system: Annotated[VotingSystem, Depends(get_voting_system)],
) -> CandidateResponse:
    candidate = system.find_candidate(candidate_id)
    if candidate is None:
        raise HTTPException(status_code=404, detail=f"Candidate {candidate_id} not found.")
    return CandidateResponse.from_candidate(candidate)

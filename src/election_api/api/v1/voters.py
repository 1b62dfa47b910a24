"""Voter API endpoints.

POST /voters — register a voter
GET /voters/{voter_id} — voter detail
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from election_api.core.dependencies import get_async_session, get_voting_system
from election_api.lib.voting import VotingSystem
from election_api.schemas.common import ErrorResponse
from election_api.schemas.voter import VoterRegisterRequest, VoterResponse
from election_api.services import persistence_service

voters_router = APIRouter(
    prefix="/voters",
    tags=["voters"],
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)


@voters_router.post("", response_model=VoterResponse, status_code=201)
async def register_voter(
    request: VoterRegisterRequest,
    system: Annotated[VotingSystem, Depends(get_voting_system)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> VoterResponse:
    """Register a voter. Rejects malformed national IDs and under-age voters."""
    voter = system.register_voter(request.name, request.national_id, request.date_of_birth).unwrap()
    with persistence_service.revert_on_failure(lambda: system.revert_voter_registration(voter), "register_voter"):
        await persistence_service.save_voter(session, voter)
    return VoterResponse.from_voter(voter)


@voters_router.get("/{voter_id}", response_model=VoterResponse)
async def get_voter(
    voter_id: str,
    system: Annotated[VotingSystem, Depends(get_voting_system)],
) -> VoterResponse:
    voter = system.find_voter(voter_id)
    if voter is None:
        raise HTTPException(status_code=404, detail="Voter not found in system.")
    return VoterResponse.from_voter(voter)

"""Construction of the application's voting system from settings."""

from election_api.core.config import Settings
from election_api.core.security import admin_token_check
from election_api.lib.voting import (
    CandidateRegistry,
    Clock,
    CredentialCheck,
    ElectionDirectory,
    IdGenerator,
    VoterRegistry,
    VotingSystem,
    utc_now,
    uuid_ids,
)


def build_voting_system(
    settings: Settings,
    *,
    clock: Clock = utc_now,
    id_generator: IdGenerator | None = None,
    credential_check: CredentialCheck | None = None,
) -> VotingSystem:
    """Wire empty registries into a ``VotingSystem``.

    Args:
        settings: Application settings (minimum age, JWT secret).
        clock: Wall clock for ages and election windows.
        id_generator: Voter/candidate ID strategy; UUID4 strings by default.
        credential_check: Admin check; defaults to verifying admin JWTs.

    Returns:
        A voting system with no voters, candidates or elections.
    """
    ids = id_generator or uuid_ids()
    check = credential_check or admin_token_check(settings.jwt_secret_key, settings.jwt_algorithm)
    return VotingSystem(
        voters=VoterRegistry(id_generator=ids, clock=clock, minimum_age=settings.minimum_voter_age),
        candidates=CandidateRegistry(id_generator=ids),
        elections=ElectionDirectory(clock=clock),
        credential_check=check,
        clock=clock,
    )

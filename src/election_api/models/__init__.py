"""ORM model registry: import all models so Alembic autogenerate discovers them."""

from election_api.models.base import Base
from election_api.models.candidate import Candidate
from election_api.models.election import Ballot, Election, ElectionCandidate, ElectionVoter
from election_api.models.voter import Voter

__all__ = [
    "Ballot",
    "Base",
    "Candidate",
    "Election",
    "ElectionCandidate",
    "ElectionVoter",
    "Voter",
]

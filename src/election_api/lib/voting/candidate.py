"""Candidate entity and registry."""

import threading
from collections.abc import Iterator
from dataclasses import dataclass, field

from loguru import logger

from election_api.lib.voting.errors import DuplicateError
from election_api.lib.voting.ids import IdGenerator, uuid_ids
from election_api.lib.voting.result import Err, Ok, Result


@dataclass(eq=False)
class Candidate:
    """A candidate and the IDs of the elections they are assigned to."""

    candidate_id: str
    name: str
    party: str
    election_ids: set[str] = field(default_factory=set)


class CandidateRegistry:
    """Sole owner of candidates, keyed by candidate ID."""

    def __init__(self, id_generator: IdGenerator | None = None) -> None:
        self._id_generator = id_generator or uuid_ids()
        self._candidates: dict[str, Candidate] = {}
        self._lock = threading.Lock()

    def register(self, name: str, party: str) -> Result[Candidate]:
        with self._lock:
            candidate_id = self._id_generator()
            if candidate_id in self._candidates:
                return Err(DuplicateError(f"Candidate ID {candidate_id} already exists."))
            candidate = Candidate(candidate_id=candidate_id, name=name, party=party)
            self._candidates[candidate_id] = candidate

        logger.info("Registered candidate {} ({})", candidate_id, party)
        return Ok(candidate)

    def restore(self, candidate: Candidate) -> None:
        with self._lock:
            self._candidates[candidate.candidate_id] = candidate

    def discard(self, candidate: Candidate) -> None:
        with self._lock:
            if self._candidates.get(candidate.candidate_id) is candidate:
                del self._candidates[candidate.candidate_id]

    def find(self, candidate_id: str) -> Candidate | None:
        return self._candidates.get(candidate_id)

    def find_by_name_party(self, name: str, party: str) -> Candidate | None:
        """Return the first candidate registered with this name and party."""
        for candidate in list(self._candidates.values()):
            if candidate.name == name and candidate.party == party:
                return candidate
        return None

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(list(self._candidates.values()))

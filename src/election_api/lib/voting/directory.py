"""Directory of all elections, keyed by election ID."""

import threading
from datetime import datetime

from loguru import logger

from election_api.lib.voting.clock import Clock, ensure_aware, utc_now
from election_api.lib.voting.election import Election, ElectionSummary
from election_api.lib.voting.errors import DuplicateError, InvalidInputError, NotFoundError
from election_api.lib.voting.result import Err, Ok, Result


class ElectionDirectory:
    """Owns every election. Listings return summaries, never the elections."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._elections: dict[str, Election] = {}
        self._lock = threading.Lock()

    def create(self, election_id: str, name: str, start_at: datetime, end_at: datetime) -> Result[Election]:
        if not election_id.strip():
            return Err(InvalidInputError("Election ID is required."))
        if not name.strip():
            return Err(InvalidInputError("Election name is required."))
        if ensure_aware(end_at) < ensure_aware(start_at):
            return Err(InvalidInputError("Election end must not be before its start."))

        with self._lock:
            if election_id in self._elections:
                return Err(DuplicateError("Election ID already exists."))
            election = Election(election_id, name, start_at, end_at, clock=self._clock)
            self._elections[election_id] = election

        logger.info("Created election {} ({} - {})", election_id, election.start_at, election.end_at)
        return Ok(election)

    def restore(self, election: Election) -> None:
        with self._lock:
            self._elections[election.election_id] = election

    def delete(self, election_id: str) -> Result[Election]:
        with self._lock:
            election = self._elections.pop(election_id, None)
        if election is None:
            return Err(NotFoundError("Election not found."))
        logger.info("Deleted election {}", election_id)
        return Ok(election)

    def find(self, election_id: str) -> Election | None:
        return self._elections.get(election_id)

    def list_ongoing(self, now: datetime | None = None) -> list[ElectionSummary]:
        current = now if now is not None else self._clock()
        return [e.summary() for e in self._snapshot() if e.is_ongoing(current)]

    def list_all(self) -> list[ElectionSummary]:
        return [e.summary() for e in self._snapshot()]

    def _snapshot(self) -> list[Election]:
        with self._lock:
            return list(self._elections.values())

    def __len__(self) -> int:
        return len(self._elections)

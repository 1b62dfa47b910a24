"""Voter entity and the registry that owns every registered voter."""

import re
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date

from loguru import logger

from election_api.lib.voting.clock import Clock, utc_now
from election_api.lib.voting.errors import DuplicateError, InvalidInputError
from election_api.lib.voting.ids import IdGenerator, uuid_ids
from election_api.lib.voting.result import Err, Ok, Result

NATIONAL_ID_PATTERN = re.compile(r"[A-Z0-9]{8,12}")
DEFAULT_MINIMUM_AGE = 18


@dataclass(eq=False)
class Voter:
    """A person who may be enrolled in elections.

    ``voter_id`` stays ``None`` and ``registered`` stays ``False`` until the
    registry accepts the voter. ``voted_elections`` only grows, except when a
    cast the database refused is revoked.
    """

    name: str
    national_id: str
    date_of_birth: date
    voter_id: str | None = None
    registered: bool = False
    voted_elections: set[str] = field(default_factory=set)

    def has_voted_in(self, election_id: str) -> bool:
        return election_id in self.voted_elections


def calculate_age(date_of_birth: date, today: date) -> int:
    """Whole years between ``date_of_birth`` and ``today``.

    A birthday falling on ``today`` counts as already reached.
    """
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


class VoterRegistry:
    """Sole owner of registered voters, keyed by voter ID."""

    def __init__(
        self,
        id_generator: IdGenerator | None = None,
        clock: Clock = utc_now,
        minimum_age: int = DEFAULT_MINIMUM_AGE,
    ) -> None:
        self._id_generator = id_generator or uuid_ids()
        self._clock = clock
        self.minimum_age = minimum_age
        self._voters: dict[str, Voter] = {}
        self._national_ids: set[str] = set()
        self._lock = threading.Lock()

    def register(self, name: str, national_id: str, date_of_birth: date) -> Result[Voter]:
        """Validate and store a new voter.

        Args:
            name: Voter's full name.
            national_id: Government identifier, 8-12 uppercase letters/digits.
            date_of_birth: Voter's birth date.

        Returns:
            ``Ok(voter)`` with a freshly assigned ID, or ``Err`` carrying
            ``InvalidInputError`` / ``DuplicateError``. Nothing is stored on failure.
        """
        if not isinstance(national_id, str) or not NATIONAL_ID_PATTERN.fullmatch(national_id):
            return Err(InvalidInputError("Invalid National ID format."))

        age = calculate_age(date_of_birth, self._clock().date())
        if age < self.minimum_age:
            return Err(InvalidInputError(f"Voter must be at least {self.minimum_age} years old to register."))

        with self._lock:
            if national_id in self._national_ids:
                return Err(DuplicateError("National ID already registered."))
            voter_id = self._id_generator()
            if voter_id in self._voters:
                return Err(DuplicateError(f"Voter ID {voter_id} already exists."))
            voter = Voter(
                name=name,
                national_id=national_id,
                date_of_birth=date_of_birth,
                voter_id=voter_id,
                registered=True,
            )
            self._voters[voter_id] = voter
            self._national_ids.add(national_id)

        logger.info("Registered voter {}", voter_id)
        return Ok(voter)

    def restore(self, voter: Voter) -> None:
        """Re-insert a voter loaded from storage without re-validating it."""
        if voter.voter_id is None or not voter.registered:
            msg = "Only registered voters can be restored"
            raise ValueError(msg)
        with self._lock:
            self._voters[voter.voter_id] = voter
            self._national_ids.add(voter.national_id)

    def discard(self, voter: Voter) -> None:
        """Forget a voter whose registration could not be stored."""
        with self._lock:
            if voter.voter_id is not None and self._voters.get(voter.voter_id) is voter:
                del self._voters[voter.voter_id]
                self._national_ids.discard(voter.national_id)

    def find(self, voter_id: str) -> Voter | None:
        return self._voters.get(voter_id)

    def __len__(self) -> int:
        return len(self._voters)

    def __iter__(self) -> Iterator[Voter]:
        return iter(list(self._voters.values()))

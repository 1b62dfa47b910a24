"""Result type returned by every mutating voting operation."""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

from election_api.lib.voting.errors import VotingError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a taxonomy error."""

    error: VotingError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Raise the carried error."""
        raise self.error


Result = Ok[T] | Err

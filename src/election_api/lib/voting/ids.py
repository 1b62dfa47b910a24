"""Injectable ID generation strategies for voters and candidates."""

import itertools
import threading
import uuid
from collections.abc import Callable

IdGenerator = Callable[[], str]


def uuid_ids() -> IdGenerator:
    """Return a generator producing random UUID4 strings."""

    def generate() -> str:
        return str(uuid.uuid4())

    return generate


def counter_ids(prefix: str, start: int = 1) -> IdGenerator:
    """Return a generator producing ``{prefix}-{n}`` with a monotonic counter.

    Deterministic, so tests can assert on identifiers. Not suitable once state
    is persisted across restarts.
    """
    counter = itertools.count(start)
    lock = threading.Lock()

    def generate() -> str:
        with lock:
            n = next(counter)
        return f"{prefix}-{n}"

    return generate

"""Unit tests for ElectionDirectory."""

from datetime import UTC, datetime, timedelta

import pytest

from election_api.lib.voting import DuplicateError, ElectionDirectory, InvalidInputError, NotFoundError

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
HOUR = timedelta(hours=1)


@pytest.fixture
def directory() -> ElectionDirectory:
    return ElectionDirectory(clock=lambda: NOW)


class TestElectionDirectory:
    """Tests for creating, listing and deleting elections."""

    def test_create_and_find(self, directory: ElectionDirectory) -> None:
        election = directory.create("e1", "Primary", NOW - HOUR, NOW + HOUR).unwrap()
        assert directory.find("e1") is election
        assert len(directory) == 1

    def test_duplicate_id(self, directory: ElectionDirectory) -> None:
        directory.create("e1", "Primary", NOW, NOW + HOUR).unwrap()
        result = directory.create("e1", "Other", NOW, NOW + HOUR)
        assert isinstance(result.error, DuplicateError)
        assert directory.find("e1").name == "Primary"

    @pytest.mark.parametrize(("election_id", "name"), [("", "Name"), ("   ", "Name"), ("e1", " ")])
    def test_blank_id_or_name(self, directory: ElectionDirectory, election_id: str, name: str) -> None:
        assert isinstance(directory.create(election_id, name, NOW, NOW + HOUR).error, InvalidInputError)

    def test_end_before_start(self, directory: ElectionDirectory) -> None:
        assert isinstance(directory.create("e1", "Backwards", NOW, NOW - HOUR).error, InvalidInputError)

    def test_zero_length_window_is_allowed(self, directory: ElectionDirectory) -> None:
        assert directory.create("e1", "Instant", NOW, NOW).is_ok

    def test_list_ongoing_filters_by_window_and_closed(self, directory: ElectionDirectory) -> None:
        directory.create("past", "Past", NOW - 3 * HOUR, NOW - 2 * HOUR).unwrap()
        directory.create("live", "Live", NOW - HOUR, NOW + HOUR).unwrap()
        directory.create("future", "Future", NOW + HOUR, NOW + 2 * HOUR).unwrap()
        directory.create("closed", "Closed", NOW - HOUR, NOW + HOUR).unwrap().close().unwrap()

        assert [s.election_id for s in directory.list_ongoing()] == ["live"]
        assert [s.election_id for s in directory.list_all()] == ["past", "live", "future", "closed"]

    def test_listings_are_snapshots(self, directory: ElectionDirectory) -> None:
        election = directory.create("e1", "Primary", NOW - HOUR, NOW + HOUR).unwrap()
        summary = directory.list_all()[0]
        election.close().unwrap()

        assert summary.closed is False
        assert directory.list_all()[0].closed is True

    def test_delete(self, directory: ElectionDirectory) -> None:
        directory.create("e1", "Primary", NOW, NOW + HOUR).unwrap()
        directory.delete("e1").unwrap()

        assert directory.find("e1") is None
        assert isinstance(directory.delete("e1").error, NotFoundError)

"""Unit tests for voter registration rules."""

from datetime import UTC, date, datetime

import pytest

from election_api.lib.voting import (
    DuplicateError,
    InvalidInputError,
    Voter,
    VoterRegistry,
    calculate_age,
    counter_ids,
)


def _registry(today: date = date(2025, 6, 1), minimum_age: int = 18) -> VoterRegistry:
    now = datetime(today.year, today.month, today.day, 9, 30, tzinfo=UTC)
    return VoterRegistry(id_generator=counter_ids("v"), clock=lambda: now, minimum_age=minimum_age)


class TestCalculateAge:
    """Tests for whole-year age calculation."""

    def test_birthday_today_counts(self) -> None:
        assert calculate_age(date(2007, 6, 1), date(2025, 6, 1)) == 18

    def test_day_before_birthday(self) -> None:
        assert calculate_age(date(2007, 6, 2), date(2025, 6, 1)) == 17

    def test_later_month(self) -> None:
        assert calculate_age(date(2000, 12, 31), date(2025, 1, 1)) == 24

    def test_leap_day_birth(self) -> None:
        assert calculate_age(date(2004, 2, 29), date(2022, 2, 28)) == 17
        assert calculate_age(date(2004, 2, 29), date(2022, 3, 1)) == 18


class TestRegister:
    """Tests for VoterRegistry.register."""

    def test_valid_voter_is_stored(self) -> None:
        registry = _registry()
        result = registry.register("Ana Silva", "ABC12345", date(1990, 1, 1))

        assert result.is_ok
        voter = result.value
        assert voter.voter_id == "v-1"
        assert voter.registered is True
        assert voter.voted_elections == set()
        assert registry.find("v-1") is voter
        assert len(registry) == 1

    def test_exactly_minimum_age_today_is_accepted(self) -> None:
        result = _registry().register("Turning Eighteen", "AGE18TODAY", date(2007, 6, 1))
        assert result.is_ok

    def test_one_day_short_is_rejected(self) -> None:
        registry = _registry()
        result = registry.register("Almost There", "AGE17LATE", date(2007, 6, 2))

        assert not result.is_ok
        assert isinstance(result.error, InvalidInputError)
        assert len(registry) == 0

    def test_configurable_minimum_age(self) -> None:
        result = _registry(minimum_age=21).register("Young Adult", "YOUNG2001", date(2005, 1, 1))
        assert isinstance(result.error, InvalidInputError)
        assert "21" in result.error.message

    @pytest.mark.parametrize(
        "national_id",
        ["SHORT1", "abc12345", "ABC-12345", "ABCDEFGHIJKLM", "", "ABC 12345", "ABCD1234\n", "ABCD1234\r\n"],
    )
    def test_malformed_national_id_is_rejected(self, national_id: str) -> None:
        registry = _registry()
        result = registry.register("Bad Id", national_id, date(1990, 1, 1))

        assert isinstance(result.error, InvalidInputError)
        assert result.error.message == "Invalid National ID format."
        assert len(registry) == 0

    @pytest.mark.parametrize("national_id", ["ABCD1234", "123456789012"])
    def test_national_id_length_bounds(self, national_id: str) -> None:
        assert _registry().register("Edge Case", national_id, date(1990, 1, 1)).is_ok

    def test_duplicate_national_id_is_rejected(self) -> None:
        registry = _registry()
        registry.register("First", "DUPL12345", date(1990, 1, 1)).unwrap()
        result = registry.register("Second", "DUPL12345", date(1991, 1, 1))

        assert isinstance(result.error, DuplicateError)
        assert len(registry) == 1

    def test_iteration_yields_all_voters(self) -> None:
        registry = _registry()
        registry.register("One", "ONE111111", date(1990, 1, 1)).unwrap()
        registry.register("Two", "TWO222222", date(1990, 1, 1)).unwrap()
        assert sorted(v.name for v in registry) == ["One", "Two"]


class TestRestore:
    """Tests for VoterRegistry.restore."""

    def test_restored_voter_blocks_duplicate_national_id(self) -> None:
        registry = _registry()
        registry.restore(
            Voter(
                name="Stored",
                national_id="STORED123",
                date_of_birth=date(1980, 5, 5),
                voter_id="stored-1",
                registered=True,
                voted_elections={"e1"},
            )
        )

        assert registry.find("stored-1").has_voted_in("e1")
        result = registry.register("Copy", "STORED123", date(1980, 5, 5))
        assert isinstance(result.error, DuplicateError)

    def test_unregistered_voter_cannot_be_restored(self) -> None:
        with pytest.raises(ValueError, match="registered"):
            _registry().restore(Voter(name="Nobody", national_id="NOBODY123", date_of_birth=date(1980, 1, 1)))

    def test_discard_frees_national_id(self) -> None:
        registry = _registry()
        voter = registry.register("Gone Soon", "GONE12345", date(1990, 1, 1)).unwrap()

        registry.discard(voter)

        assert registry.find(voter.voter_id) is None
        assert registry.register("Back Again", "GONE12345", date(1990, 1, 1)).is_ok

"""Unit tests for CandidateRegistry."""

from election_api.lib.voting import Candidate, CandidateRegistry, DuplicateError, counter_ids


class TestCandidateRegistry:
    """Tests for candidate registration and lookup."""

    def test_register_assigns_id(self) -> None:
        registry = CandidateRegistry(id_generator=counter_ids("c"))
        candidate = registry.register("Alice Rivera", "Party A").unwrap()

        assert candidate.candidate_id == "c-1"
        assert candidate.election_ids == set()
        assert registry.find("c-1") is candidate

    def test_find_missing_returns_none(self) -> None:
        assert CandidateRegistry().find("missing") is None

    def test_find_by_name_party(self) -> None:
        registry = CandidateRegistry(id_generator=counter_ids("c"))
        registry.register("Alice Rivera", "Party A").unwrap()
        bob = registry.register("Bob Santos", "Party B").unwrap()

        assert registry.find_by_name_party("Bob Santos", "Party B") is bob
        assert registry.find_by_name_party("Bob Santos", "Party A") is None

    def test_colliding_generated_id_is_duplicate(self) -> None:
        registry = CandidateRegistry(id_generator=lambda: "same")
        registry.register("One", "P").unwrap()
        result = registry.register("Two", "P")

        assert isinstance(result.error, DuplicateError)
        assert len(registry) == 1

    def test_restore(self) -> None:
        registry = CandidateRegistry()
        registry.restore(Candidate(candidate_id="c-9", name="Stored", party="P", election_ids={"e1"}))

        assert registry.find("c-9").election_ids == {"e1"}
        assert [c.candidate_id for c in registry] == ["c-9"]

    def test_discard(self) -> None:
        registry = CandidateRegistry(id_generator=counter_ids("c"))
        candidate = registry.register("Alice Rivera", "Party A").unwrap()

        registry.discard(candidate)

        assert registry.find("c-1") is None
        assert len(registry) == 0

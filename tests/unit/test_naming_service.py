"""
Tests for election id generation and nominee normalisation.
"""

import pytest

from services.naming_service import (
    ID_ALPHABET,
    generate_election_id,
    normalize_nominees,
    split_nominee_text,
)


@pytest.mark.unit
class TestGenerateElectionId:
    def test_length_and_alphabet(self):
        election_id = generate_election_id(24)

        assert len(election_id) == 24
        assert set(election_id) <= set(ID_ALPHABET)

    def test_ids_are_independent(self):
        ids = {generate_election_id() for _ in range(500)}
        assert len(ids) == 500


@pytest.mark.unit
class TestNormalizeNominees:
    def test_sorted_deduplicated_dense_ids(self):
        assert normalize_nominees(["B", "A", "A"]) == {0: "A", 1: "B"}

    def test_blank_entries_dropped(self):
        assert normalize_nominees(["", "Zed", "", "Amy", "Zed"]) == {0: "Amy", 1: "Zed"}

    def test_ids_are_dense_range(self):
        names = ["delta", "alpha", "charlie", "bravo", "alpha", "", "echo"]
        registry = normalize_nominees(names)

        assert sorted(registry) == list(range(len(registry)))
        assert [registry[i] for i in sorted(registry)] == sorted(set(names) - {""})

    def test_deterministic(self):
        names = ["c", "a", "b", "a"]
        assert normalize_nominees(names) == normalize_nominees(list(reversed(names)))

    def test_empty_input(self):
        assert normalize_nominees([]) == {}


@pytest.mark.unit
class TestSplitNomineeText:
    def test_splits_lines_and_strips_carriage_returns(self):
        assert split_nominee_text("Bob\r\nAlice\r\n\r\nCarol") == ["Bob", "Alice", "", "Carol"]

    def test_split_then_normalize(self):
        assert normalize_nominees(split_nominee_text("B\nA\nA\n")) == {0: "A", 1: "B"}

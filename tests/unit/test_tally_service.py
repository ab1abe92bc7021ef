"""
Tests for the tally engine: grouping, ordering, max and winners.
"""

import pytest

from core.exceptions import UnknownNominee
from services.tally_service import (
    accumulate,
    max_count,
    tally_table,
    vote_label,
    vote_share,
    voters,
    winners,
)


@pytest.mark.unit
class TestAccumulate:
    """Grouping and deterministic ordering."""

    def test_tie_break_is_descending_name(self):
        registry = {0: "Amy", 1: "Bo"}
        round_votes = {"v1": 0, "v2": 1}

        assert accumulate(round_votes, registry) == [("Bo", 1), ("Amy", 1)]

    def test_count_descending_first(self):
        registry = {0: "A", 1: "B", 2: "C"}
        round_votes = {"x": 0, "y": 1, "z": 0, "w": 2, "q": 2, "r": 2}

        assert accumulate(round_votes, registry) == [("C", 3), ("A", 2), ("B", 1)]

    def test_mixed_ties(self):
        registry = {0: "Ann", 1: "Ben", 2: "Cid", 3: "Dee"}
        round_votes = {"1": 0, "2": 0, "3": 3, "4": 3, "5": 1, "6": 2}

        assert accumulate(round_votes, registry) == [
            ("Dee", 2),
            ("Ann", 2),
            ("Cid", 1),
            ("Ben", 1),
        ]

    def test_nominees_without_votes_are_omitted(self):
        registry = {0: "A", 1: "B", 2: "C"}

        assert accumulate({"x": 1}, registry) == [("B", 1)]

    def test_empty_round(self):
        assert accumulate({}, {0: "A"}) == []

    def test_independent_of_insertion_order(self):
        registry = {0: "A", 1: "B", 2: "C"}
        entries = [("x", 0), ("y", 1), ("z", 2), ("w", 1), ("v", 0)]

        forward = accumulate(dict(entries), registry)
        backward = accumulate(dict(reversed(entries)), registry)

        assert forward == backward
        assert accumulate(dict(entries), registry) == forward

    def test_unknown_nominee_raises(self):
        with pytest.raises(UnknownNominee):
            accumulate({"x": 5}, {0: "A"})


@pytest.mark.unit
class TestMaxAndWinners:
    """max_count floor and co-leader reporting."""

    def test_max_count_of_empty_results_is_one(self):
        assert max_count([]) == 1

    def test_max_count(self):
        assert max_count([("A", 4), ("B", 2)]) == 4

    def test_winners_reports_all_co_leaders_in_order(self):
        results = accumulate({"v1": 0, "v2": 1, "v3": 2}, {0: "Amy", 1: "Bo", 2: "Cy"})

        assert winners(results) == ["Cy", "Bo", "Amy"]

    def test_single_winner(self):
        assert winners([("A", 2), ("B", 1)]) == ["A"]

    def test_no_winners_without_votes(self):
        assert winners([]) == []


@pytest.mark.unit
class TestHelpers:
    """Voter roster, labels and shares."""

    def test_voters_sorted_ascending(self):
        assert voters({"zoe": 0, "adam": 1, "Mia": 0}) == ["Mia", "adam", "zoe"]

    def test_vote_label(self):
        assert vote_label({0: "A", 1: "B"}, 1) == "B"

    def test_vote_label_unknown(self):
        with pytest.raises(UnknownNominee) as exc_info:
            vote_label({0: "A"}, 3)
        assert exc_info.value.nominee_id == 3

    def test_vote_share(self):
        results = [("A", 4), ("B", 1)]
        assert vote_share(4, results) == 100
        assert vote_share(1, results) == 25

    def test_tally_table(self):
        assert tally_table([("A", 2), ("B", 1)]) == [
            {"name": "A", "count": 2, "share": 100},
            {"name": "B", "count": 1, "share": 50},
        ]

"""
Tests for ElectionProcess state and phase gating.
"""

import pytest

from core.election_process import ElectionProcess
from models import ElectionPhase


def _move_to(process, phase):
    while process.phase != phase:
        process.advance()


@pytest.mark.unit
class TestCreate:
    def test_initial_state(self, process):
        assert process.id == "test-election"
        assert process.elected_role == "Facilitator"
        assert process.phase == ElectionPhase.FIRST_VOTE
        assert process.nominees == {0: "A", 1: "B"}
        assert process.first_round == {}
        assert process.second_round == {}

    def test_sorted_nominees(self):
        process = ElectionProcess.create("e", "Chair", ["Zed", "", "Amy", "Mo"])
        assert process.sorted_nominees() == [(0, "Amy"), (1, "Mo"), (2, "Zed")]


@pytest.mark.unit
class TestVoting:
    def test_first_vote_writes_round_one(self, process):
        assert process.cast_vote("x", 0) is True
        assert process.first_round == {"x": 0}
        assert process.second_round == {}

    def test_last_vote_wins(self, process):
        process.cast_vote("x", 0)
        process.cast_vote("x", 1)
        assert process.first_round == {"x": 1}

    def test_second_vote_writes_round_two(self, process):
        process.cast_vote("x", 0)
        _move_to(process, ElectionPhase.SECOND_VOTE)

        process.cast_vote("x", 1)

        assert process.first_round == {"x": 0}
        assert process.second_round == {"x": 1}

    @pytest.mark.parametrize(
        "phase",
        [ElectionPhase.FIRST_TALLY, ElectionPhase.SECOND_TALLY, ElectionPhase.SAFETY_ROUND],
    )
    def test_votes_outside_vote_phases_are_dropped(self, process, phase):
        process.cast_vote("early", 0)
        _move_to(process, phase)
        first, second = dict(process.first_round), dict(process.second_round)

        assert process.cast_vote("late", 1) is False
        assert process.first_round == first
        assert process.second_round == second


@pytest.mark.unit
class TestRounds:
    def test_current_round_mapping(self, process):
        assert process.current_round_for(ElectionPhase.FIRST_VOTE) is process.first_round
        assert process.current_round_for(ElectionPhase.FIRST_TALLY) is process.first_round
        assert process.current_round_for(ElectionPhase.SECOND_VOTE) is process.second_round
        assert process.current_round_for(ElectionPhase.SECOND_TALLY) is process.second_round
        assert process.current_round_for(ElectionPhase.SAFETY_ROUND) is process.second_round

    def test_safety_round_tally_reads_round_two(self, process):
        _move_to(process, ElectionPhase.SECOND_VOTE)
        process.cast_vote("x", 1)
        process.cast_vote("y", 1)
        _move_to(process, ElectionPhase.SAFETY_ROUND)

        assert process.tally() == [("B", 2)]
        assert process.voters() == ["x", "y"]
        assert process.vote_count() == 0

    def test_vote_count_follows_current_round(self, process):
        process.cast_vote("x", 0)
        process.cast_vote("y", 0)
        assert process.vote_count() == 2
        process.advance()
        assert process.vote_count() == 2
        process.advance()
        assert process.vote_count() == 0

    def test_reset_in_vote_phase_clears_only_that_round(self, process):
        process.cast_vote("x", 0)
        _move_to(process, ElectionPhase.SECOND_VOTE)
        process.cast_vote("y", 1)

        process.reset_current_round()

        assert process.first_round == {"x": 0}
        assert process.second_round == {}

    def test_reset_outside_vote_phase_is_noop(self, process):
        process.cast_vote("x", 0)
        process.advance()

        process.reset_current_round()

        assert process.first_round == {"x": 0}

    def test_advance_and_rewind_leave_rounds_untouched(self, process):
        process.cast_vote("x", 0)
        process.advance()
        process.rewind()
        assert process.phase == ElectionPhase.FIRST_VOTE
        assert process.first_round == {"x": 0}

    def test_rewind_from_first_vote_saturates(self, process):
        process.rewind()
        assert process.phase == ElectionPhase.FIRST_VOTE

    def test_advance_from_safety_round_saturates(self, process):
        _move_to(process, ElectionPhase.SAFETY_ROUND)
        process.advance()
        assert process.phase == ElectionPhase.SAFETY_ROUND


@pytest.mark.unit
class TestTally:
    def test_end_to_end_first_round(self, process):
        process.cast_vote("x", 0)
        process.cast_vote("y", 1)
        process.cast_vote("z", 0)

        assert process.tally() == [("A", 2), ("B", 1)]
        assert process.voters() == ["x", "y", "z"]

    def test_tally_is_repeatable(self, process):
        process.cast_vote("x", 1)
        process.cast_vote("y", 0)
        assert process.tally() == process.tally() == [("B", 1), ("A", 1)]

    def test_has_nominee(self, process):
        assert process.has_nominee(1)
        assert not process.has_nominee(2)

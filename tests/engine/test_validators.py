"""
Tests for setup and snapshot validation.
"""

from dataclasses import replace

import pytest

from qwixx.engine.actions import AddPenalty, EndGame, LockRow, NextTurn
from qwixx.engine.base import GameStatus, RowColor
from qwixx.engine.reducer import apply_action
from qwixx.engine.validators import (
    validate_game_state,
    validate_player_count,
    validate_player_names,
)


class TestValidatePlayerCount:

    @pytest.mark.parametrize("count", [2, 3, 4, 5])
    def test_valid(self, count):
        assert validate_player_count(count) == []

    def test_too_few(self):
        assert validate_player_count(1) == ["Please enter names for at least 2 players"]

    def test_too_many(self):
        assert validate_player_count(6) == ["A game supports at most 5 players"]


class TestValidatePlayerNames:

    def test_valid(self):
        assert validate_player_names(["Alice", "Bob"]) == []

    def test_blank_name(self):
        assert validate_player_names(["Alice", "  ", "Cara"]) == [
            "Please enter names for all 3 players"
        ]

    def test_duplicate_names(self):
        assert validate_player_names(["Alice", "Alice"]) == ["Player names must be unique"]

    def test_duplicates_ignore_case_and_whitespace(self):
        assert validate_player_names(["Alice", " ALICE"]) == ["Player names must be unique"]

    def test_count_checked_first(self):
        assert validate_player_names(["Alice"]) == [
            "Please enter names for at least 2 players"
        ]


class TestValidateGameState:

    def test_fresh_game(self, playing_game):
        assert validate_game_state(playing_game) == []

    def test_index_out_of_bounds(self, playing_game):
        state = replace(playing_game, current_player_index=5)
        assert "Current player index is out of bounds" in validate_game_state(state)

    def test_stale_total(self, playing_game):
        alice = replace(playing_game.players[0], total_score=42)
        state = replace(playing_game, players=(alice, playing_game.players[1]))
        assert validate_game_state(state) == ["Player Alice has a stale total score"]

    def test_duplicate_locked_row(self, playing_game):
        state = replace(playing_game, locked_rows=(RowColor.RED, RowColor.RED))
        assert "A row cannot be locked twice" in validate_game_state(state)

    def test_ended_without_condition(self, playing_game):
        state = replace(playing_game, game_status=GameStatus.ENDED)
        assert validate_game_state(state) == [
            "Game is marked as ended but win condition is not met"
        ]

    def test_ended_by_end_game_action(self, playing_game):
        assert validate_game_state(apply_action(playing_game, EndGame())) == []

    def test_ended_by_penalties(self, playing_game):
        state = playing_game
        for _ in range(4):
            state = apply_action(state, AddPenalty(player_id="player-2"))
        state = apply_action(state, NextTurn())
        assert state.game_status == GameStatus.ENDED
        assert validate_game_state(state) == []

    def test_ended_by_locks(self, playing_game):
        state = apply_action(playing_game, LockRow(color=RowColor.RED))
        state = apply_action(state, LockRow(color=RowColor.GREEN))
        state = apply_action(state, NextTurn())
        assert validate_game_state(state) == []

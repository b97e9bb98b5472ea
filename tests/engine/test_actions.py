"""
Tests for the action vocabulary and its serialized form.
"""

import pytest

from qwixx.engine.actions import (
    AddPenalty,
    EndGame,
    InitializeGame,
    LoadGame,
    LockRow,
    MarkNumber,
    NextTurn,
    ResetGame,
    RollDice,
    StartGame,
    UnmarkNumber,
    action_from_dict,
    new_player_id,
)
from qwixx.engine.base import GameState, RowColor


class TestSerializedForm:
    """Actions use the original wire names and payload keys."""

    def test_mark_number(self):
        action = MarkNumber(player_id="player-1", color=RowColor.RED, number=7)
        assert action.to_dict() == {
            "type": "MARK_NUMBER",
            "payload": {"playerId": "player-1", "color": "red", "number": 7},
        }

    def test_mark_number_allow_locked_row(self):
        action = MarkNumber("player-1", RowColor.RED, 7, allow_locked_row=True)
        assert action.to_dict()["payload"]["allowLockedRow"] is True

    def test_initialize_without_ids(self):
        assert InitializeGame.create(["Alice", "Bob"]).to_dict() == {
            "type": "INITIALIZE_GAME",
            "payload": {"playerNames": ["Alice", "Bob"]},
        }

    def test_roll_dice(self, sample_dice):
        assert RollDice(dice=sample_dice).to_dict() == {
            "type": "ROLL_DICE",
            "payload": sample_dice.to_dict(),
        }

    def test_simple_actions(self):
        assert StartGame().to_dict() == {"type": "START_GAME"}
        assert NextTurn().to_dict() == {"type": "NEXT_TURN"}
        assert EndGame().to_dict() == {"type": "END_GAME"}
        assert ResetGame().to_dict() == {"type": "RESET_GAME"}


class TestActionFromDict:
    """Tests for action_from_dict()."""

    @pytest.mark.parametrize("action", [
        InitializeGame.create(["Alice", "Bob"], ["a", "b"]),
        StartGame(),
        NextTurn(),
        MarkNumber(player_id="a", color=RowColor.GREEN, number=12, allow_locked_row=True),
        UnmarkNumber(player_id="a", color=RowColor.BLUE, number=3),
        LockRow(color=RowColor.YELLOW),
        AddPenalty(player_id="b"),
        EndGame(),
        ResetGame(),
        LoadGame(state=GameState()),
    ])
    def test_rebuilds_action(self, action):
        assert action_from_dict(action.to_dict()) == action

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown action type"):
            action_from_dict({"type": "CHEAT"})

    def test_invalid_color(self):
        with pytest.raises(ValueError):
            action_from_dict({
                "type": "LOCK_ROW",
                "payload": {"color": "purple"},
            })

    def test_missing_payload_field(self):
        with pytest.raises(KeyError):
            action_from_dict({"type": "ADD_PENALTY", "payload": {}})


class TestNewPlayerId:

    def test_unique(self):
        ids = {new_player_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(i.startswith("player-") for i in ids)

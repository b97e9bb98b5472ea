"""
Qwixx Rules Engine.

Pure Python game logic with zero UI/database dependencies.
Handles score sheets, dice sums, turn phases, and the game state reducer.
"""

from qwixx.engine.actions import (
    Action,
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
from qwixx.engine.base import (
    ColorRow,
    DiceState,
    GameState,
    GameStatus,
    MarkedNumber,
    Player,
    RowColor,
    ScoreSheet,
)
from qwixx.engine.dice import Combination, DiceEngine
from qwixx.engine.reducer import (
    apply_action,
    initial_game_state,
    replay,
    should_end,
    undo,
)
from qwixx.engine.score_sheet import ScoreSheetEngine
from qwixx.engine.turn import PhaseMark, TurnEngine, TurnPhase, TurnState
from qwixx.engine.validators import validate_game_state, validate_player_names

__all__ = [
    # Data Classes
    "ColorRow",
    "Combination",
    "DiceState",
    "GameState",
    "MarkedNumber",
    "PhaseMark",
    "Player",
    "ScoreSheet",
    "TurnState",
    # Enums
    "GameStatus",
    "RowColor",
    "TurnPhase",
    # Actions
    "Action",
    "AddPenalty",
    "EndGame",
    "InitializeGame",
    "LoadGame",
    "LockRow",
    "MarkNumber",
    "NextTurn",
    "ResetGame",
    "RollDice",
    "StartGame",
    "UnmarkNumber",
    "action_from_dict",
    "new_player_id",
    # Engines
    "DiceEngine",
    "ScoreSheetEngine",
    "TurnEngine",
    # Reducer
    "apply_action",
    "initial_game_state",
    "replay",
    "should_end",
    "undo",
    # Validation
    "validate_game_state",
    "validate_player_names",
]

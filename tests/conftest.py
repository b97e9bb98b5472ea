"""
Qwixx - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

from typing import Callable, Iterable

import pytest

from qwixx.engine.actions import InitializeGame, MarkNumber, StartGame
from qwixx.engine.base import DiceState, GameState, RowColor
from qwixx.engine.reducer import apply_action, initial_game_state


# =============================================================================
# DICE
# =============================================================================

@pytest.fixture
def sample_dice() -> DiceState:
    """White sum 7; red 8/9, yellow 5/6, green 9/10, blue 4/5."""
    return DiceState(white1=3, white2=4, red=5, yellow=2, green=6, blue=1)


@pytest.fixture
def doubles_dice() -> DiceState:
    """Both white dice show 2, so each color has a single colored sum."""
    return DiceState(white1=2, white2=2, red=6, yellow=1, green=3, blue=4)


# =============================================================================
# GAME STATE FIXTURES
# =============================================================================

@pytest.fixture
def setup_game() -> GameState:
    """Alice and Bob seated, game not yet started."""
    return apply_action(initial_game_state(), InitializeGame.create(["Alice", "Bob"]))


@pytest.fixture
def playing_game(setup_game: GameState) -> GameState:
    """Alice (player-1) and Bob (player-2), game in progress."""
    return apply_action(setup_game, StartGame())


@pytest.fixture
def three_player_game() -> GameState:
    state = apply_action(
        initial_game_state(), InitializeGame.create(["Alice", "Bob", "Cara"])
    )
    return apply_action(state, StartGame())


@pytest.fixture
def mark_numbers() -> Callable[[GameState, str, RowColor, Iterable[int]], GameState]:
    """Mark several numbers in one row, straight through the reducer."""
    def _mark(state: GameState, player_id: str, color: RowColor, numbers: Iterable[int]) -> GameState:
        for number in numbers:
            state = apply_action(
                state, MarkNumber(player_id=player_id, color=color, number=number)
            )
        return state
    return _mark

"""
Qwixx - Input Validation Utilities

Validation for setup input and saved snapshots. Validators return a list of
human-readable messages; an empty list means the input is valid.
"""

from typing import Sequence

from qwixx.engine.actions import EndGame
from qwixx.engine.base import MAX_PENALTIES, GameState, GameStatus
from qwixx.engine.score_sheet import ScoreSheetEngine

MIN_PLAYERS = 2
MAX_PLAYERS = 5


def validate_player_count(count: int) -> list[str]:
    """
    Validate number of players.

    Args:
        count: Number of players

    Returns:
        Error messages, empty if the count is 2-5
    """
    if count < MIN_PLAYERS:
        return [f"Please enter names for at least {MIN_PLAYERS} players"]
    if count > MAX_PLAYERS:
        return [f"A game supports at most {MAX_PLAYERS} players"]
    return []


def validate_player_names(names: Sequence[str]) -> list[str]:
    """
    Validate the names entered at setup.

    Names are compared after trimming and case-insensitively, so
    "Alice" and " alice " collide.

    Args:
        names: One entry per seat, possibly blank

    Returns:
        Error messages, empty if the names can start a game
    """
    errors = validate_player_count(len(names))
    if errors:
        return errors

    trimmed = [name.strip() for name in names]
    if any(not name for name in trimmed):
        return [f"Please enter names for all {len(names)} players"]

    if len({name.lower() for name in trimmed}) != len(trimmed):
        return ["Player names must be unique"]

    return []


def validate_game_state(state: GameState) -> list[str]:
    """
    Check a snapshot for internal consistency.

    Args:
        state: State to check, typically freshly loaded

    Returns:
        Error messages, empty if the state is consistent
    """
    errors: list[str] = []
    players = state.players

    if state.game_status != GameStatus.SETUP and len(players) < MIN_PLAYERS:
        errors.append(f"Game must have at least {MIN_PLAYERS} players")
    if len(players) > MAX_PLAYERS:
        errors.append(f"Game cannot have more than {MAX_PLAYERS} players")

    if any(not p.name.strip() for p in players):
        errors.append("All player names must be non-empty")
    if len({p.id for p in players}) != len(players):
        errors.append("Player ids must be unique")

    if players and not (0 <= state.current_player_index < len(players)):
        errors.append("Current player index is out of bounds")

    if len(set(state.locked_rows)) != len(state.locked_rows):
        errors.append("A row cannot be locked twice")
    if len(state.locked_rows) > 4:
        errors.append("Cannot have more than 4 locked rows")

    for player in players:
        if not (0 <= player.penalties <= MAX_PENALTIES):
            errors.append(f"Player {player.name} has invalid penalty count")
        if player.total_score != ScoreSheetEngine.total_score(player):
            errors.append(f"Player {player.name} has a stale total score")

    if state.game_status == GameStatus.ENDED:
        ended_by_rule = (
            len(state.locked_rows) >= 2
            or any(p.penalties >= MAX_PENALTIES for p in players)
        )
        if not ended_by_rule and not _ended_explicitly(state):
            errors.append("Game is marked as ended but win condition is not met")

    return errors


def _ended_explicitly(state: GameState) -> bool:
    """True if an END_GAME action was accepted."""
    return any(isinstance(action, EndGame) for action in state.history)

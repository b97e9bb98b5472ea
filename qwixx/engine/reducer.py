"""
Qwixx - Game State Reducer

The authoritative transition function ``apply_action(state, action)``.

Every accepted action produces a new GameState with the action appended to
its history. A rejected action returns the very same state object: the
reducer never raises across the action boundary, so replaying a history of
previously accepted actions always succeeds.

Termination is deferred: locking a second row or taking a fourth penalty
does not end the game on the spot. The end conditions are evaluated by
NEXT_TURN, so every player still gets their chance at the current roll.
"""

import logging
from dataclasses import replace
from typing import Iterable

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
)
from qwixx.engine.base import MAX_PENALTIES, GameState, GameStatus, Player
from qwixx.engine.score_sheet import ScoreSheetEngine
from qwixx.engine.validators import (
    MIN_PLAYERS,
    validate_game_state,
    validate_player_names,
)

logger = logging.getLogger(__name__)


def initial_game_state() -> GameState:
    """A fresh game waiting for players."""
    return GameState()


def should_end(state: GameState) -> bool:
    """Two locked rows or any player at four penalties."""
    if len(state.locked_rows) >= 2:
        return True
    return any(p.penalties >= MAX_PENALTIES for p in state.players)


def _accept(state: GameState, action: Action, **changes) -> GameState:
    """Build the successor state with ``action`` appended to history."""
    return replace(state, history=state.history + (action,), **changes)


def _replace_player(players: tuple[Player, ...], index: int, player: Player) -> tuple[Player, ...]:
    return players[:index] + (player,) + players[index + 1:]


def _initialize(state: GameState, action: InitializeGame) -> GameState:
    errors = validate_player_names(action.player_names)
    if errors:
        logger.debug("Rejected INITIALIZE_GAME: %s", "; ".join(errors))
        return state

    ids = action.player_ids
    if len(ids) != len(action.player_names) or len(set(ids)) != len(ids):
        ids = tuple(f"player-{i + 1}" for i in range(len(action.player_names)))

    players = tuple(
        ScoreSheetEngine.create_player(player_id, name.strip())
        for player_id, name in zip(ids, action.player_names)
    )
    return _accept(
        state,
        action,
        players=players,
        current_player_index=0,
        dice=None,
        locked_rows=(),
        game_status=GameStatus.SETUP,
    )


def _start(state: GameState, action: StartGame) -> GameState:
    if len(state.players) < MIN_PLAYERS:
        logger.debug("Rejected START_GAME: %d players", len(state.players))
        return state
    return _accept(state, action, game_status=GameStatus.PLAYING)


def _next_turn(state: GameState, action: NextTurn) -> GameState:
    if state.game_status != GameStatus.PLAYING or not state.players:
        return state
    if should_end(state):
        logger.info("Game ended: %d locked rows", len(state.locked_rows))
        return _accept(state, action, game_status=GameStatus.ENDED)
    return _accept(
        state,
        action,
        current_player_index=(state.current_player_index + 1) % len(state.players),
        dice=None,
    )


def _roll(state: GameState, action: RollDice) -> GameState:
    if state.game_status != GameStatus.PLAYING:
        return state
    return _accept(state, action, dice=action.dice)


def _mark(state: GameState, action: MarkNumber) -> GameState:
    if state.game_status != GameStatus.PLAYING:
        return state

    color = action.color
    if color in state.locked_rows and not action.allow_locked_row:
        logger.debug("Rejected MARK_NUMBER: row %s is locked", color.value)
        return state

    index = state.player_index(action.player_id)
    if index == -1:
        logger.debug("Rejected MARK_NUMBER: unknown player %s", action.player_id)
        return state

    player = state.players[index]
    row = player.score_sheet.row(color)
    if not ScoreSheetEngine.can_mark(row, action.number):
        logger.debug("Rejected MARK_NUMBER: cannot mark %d in %s", action.number, color.value)
        return state

    locks = ScoreSheetEngine.can_lock(row, action.number)
    new_row = row.with_mark(action.number)
    if locks:
        new_row = new_row.with_locked()

    updated = ScoreSheetEngine.rescored(
        player, score_sheet=player.score_sheet.with_row(new_row)
    )
    locked_rows = state.locked_rows
    if locks and color not in locked_rows:
        locked_rows = locked_rows + (color,)

    return _accept(
        state,
        action,
        players=_replace_player(state.players, index, updated),
        locked_rows=locked_rows,
    )


def _unmark(state: GameState, action: UnmarkNumber) -> GameState:
    if state.game_status != GameStatus.PLAYING:
        return state

    index = state.player_index(action.player_id)
    if index == -1:
        return state

    player = state.players[index]
    row = player.score_sheet.row(action.color)
    if not row.is_marked(action.number):
        return state

    new_row = row.with_mark(action.number, marked=False)
    unlocking = row.locked and action.number == row.last_number
    if unlocking:
        new_row = new_row.with_locked(False)

    updated = ScoreSheetEngine.rescored(
        player, score_sheet=player.score_sheet.with_row(new_row)
    )
    players = _replace_player(state.players, index, updated)

    locked_rows = state.locked_rows
    if unlocking and not any(p.score_sheet.row(action.color).locked for p in players):
        locked_rows = tuple(c for c in locked_rows if c != action.color)

    return _accept(state, action, players=players, locked_rows=locked_rows)


def _lock_row(state: GameState, action: LockRow) -> GameState:
    if state.game_status != GameStatus.PLAYING:
        return state
    if action.color in state.locked_rows:
        return state
    return _accept(state, action, locked_rows=state.locked_rows + (action.color,))


def _add_penalty(state: GameState, action: AddPenalty) -> GameState:
    if state.game_status != GameStatus.PLAYING:
        return state

    index = state.player_index(action.player_id)
    if index == -1:
        logger.debug("Rejected ADD_PENALTY: unknown player %s", action.player_id)
        return state

    player = state.players[index]
    updated = ScoreSheetEngine.rescored(
        player, penalties=min(player.penalties + 1, MAX_PENALTIES)
    )
    return _accept(state, action, players=_replace_player(state.players, index, updated))


def _end(state: GameState, action: EndGame) -> GameState:
    if state.game_status == GameStatus.ENDED:
        return state
    return _accept(state, action, game_status=GameStatus.ENDED)


def _reset(state: GameState, action: ResetGame) -> GameState:
    return _accept(initial_game_state(), action)


def _load(state: GameState, action: LoadGame) -> GameState:
    errors = validate_game_state(action.state)
    if errors:
        logger.debug("Rejected snapshot: %s", "; ".join(errors))
        return state
    return action.state


_HANDLERS = {
    InitializeGame: _initialize,
    StartGame: _start,
    NextTurn: _next_turn,
    RollDice: _roll,
    MarkNumber: _mark,
    UnmarkNumber: _unmark,
    LockRow: _lock_row,
    AddPenalty: _add_penalty,
    EndGame: _end,
    ResetGame: _reset,
    LoadGame: _load,
}


def apply_action(state: GameState, action: Action) -> GameState:
    """
    Apply one action.

    Args:
        state: Current state
        action: Action to apply

    Returns:
        The successor state, or ``state`` itself if the action is not
        legal right now
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        logger.debug("Ignored unknown action %r", action)
        return state
    return handler(state, action)


def replay(actions: Iterable[Action], state: GameState | None = None) -> GameState:
    """Fold ``actions`` through the reducer, starting from ``state`` or a fresh game."""
    current = state if state is not None else initial_game_state()
    for action in actions:
        current = apply_action(current, action)
    return current


def undoable_steps(state: GameState) -> int:
    """Number of trailing actions that undo may remove (stops at the last reset)."""
    count = 0
    for action in reversed(state.history):
        if isinstance(action, ResetGame):
            break
        count += 1
    return count


def undo(state: GameState, steps: int = 1) -> GameState:
    """
    Rebuild the state without its last ``steps`` actions.

    Dice values are part of ROLL_DICE, so the replay is exact.

    Args:
        state: State to rewind
        steps: How many actions to drop (clamped to what is undoable)

    Returns:
        The replayed state, or ``state`` if there is nothing to undo
    """
    steps = min(steps, undoable_steps(state))
    if steps <= 0:
        return state
    return replay(state.history[:len(state.history) - steps])

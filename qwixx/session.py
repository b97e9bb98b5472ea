"""
Qwixx - Game Session

Owns one authoritative GameState plus the transient TurnState of the turn
in progress. Front ends call into the session one interaction at a time;
the session feeds actions through the reducer and, when a snapshot store
is attached with auto-save on, persists every accepted change.
"""

from __future__ import annotations

import logging
from typing import Sequence

from qwixx.config.settings import get_settings
from qwixx.database.snapshots import DEFAULT_SLOT, SnapshotManager
from qwixx.engine.actions import (
    Action,
    InitializeGame,
    LoadGame,
    NextTurn,
    ResetGame,
    RollDice,
    StartGame,
    new_player_id,
)
from qwixx.engine.base import DiceState, GameState, GameStatus, Player, RowColor
from qwixx.engine.reducer import apply_action, initial_game_state, undo
from qwixx.engine.score_sheet import ScoreSheetEngine
from qwixx.engine.turn import TurnEngine, TurnState
from qwixx.engine.validators import validate_player_names

logger = logging.getLogger(__name__)

# Actions after which the turn controller is rebuilt from the game state
_TURN_RESETTING = (InitializeGame, LoadGame, NextTurn, ResetGame, RollDice)


class GameSession:
    """Single-game coordinator between a front end and the rules engine.

    Not thread-safe: callers serialize interactions, one at a time.
    """

    def __init__(
        self,
        store: SnapshotManager | None = None,
        *,
        slot: str = DEFAULT_SLOT,
        auto_save: bool | None = None,
        state: GameState | None = None,
    ) -> None:
        self.state = state if state is not None else initial_game_state()
        self.turn = TurnEngine.start_turn(self.state)
        # Turn state in effect at each history length, for undo
        self._turns: dict[int, TurnState] = {}
        self._remember_turn()
        self._store = store
        self._slot = slot
        self._auto_save = get_settings().auto_save if auto_save is None else auto_save

    # -- actions ---------------------------------------------------------

    def dispatch(self, action: Action) -> bool:
        """Apply ``action``. Returns True if the reducer accepted it."""
        new_state = apply_action(self.state, action)
        if new_state is self.state:
            logger.debug("Action %s rejected", action.TYPE)
            return False

        self.state = new_state
        if isinstance(action, (LoadGame, ResetGame)):
            self._turns.clear()
        if isinstance(action, _TURN_RESETTING):
            self.turn = TurnEngine.start_turn(new_state)
        self._remember_turn()
        self._after_change()
        return True

    def setup(self, names: Sequence[str]) -> list[str]:
        """
        Create players and start the game.

        Args:
            names: Player names as entered

        Returns:
            Validation messages; empty when the game has started
        """
        errors = validate_player_names(names)
        if errors:
            return errors
        ids = [new_player_id() for _ in names]
        self.dispatch(InitializeGame.create(names, ids))
        self.dispatch(StartGame())
        logger.info("Started game with %d players", len(names))
        return []

    def roll(self, dice: DiceState | None = None) -> bool:
        return self._advance(*TurnEngine.roll(self.state, self.turn, dice))

    def toggle_mark(self, player_id: str, color: RowColor, number: int) -> bool:
        return self._advance(
            *TurnEngine.toggle_mark(self.state, self.turn, player_id, color, number)
        )

    def finish_white_dice(self) -> bool:
        return self._advance(*TurnEngine.finish_white_dice(self.state, self.turn))

    def finish_turn(self) -> bool:
        return self._advance(*TurnEngine.finish_turn(self.state, self.turn))

    def next_player(self) -> bool:
        advanced = self._advance(*TurnEngine.next_player(self.state, self.turn))
        if advanced and self.is_over:
            logger.info("Game over after %d actions", len(self.state.history))
        return advanced

    def undo(self, steps: int = 1) -> bool:
        """Rewind the last ``steps`` actions, restoring the turn state they ran under."""
        new_state = undo(self.state, steps)
        if new_state is self.state:
            return False
        length = len(new_state.history)
        self.state = new_state
        self.turn = self._turns.get(length, TurnEngine.start_turn(new_state))
        self._turns = {n: turn for n, turn in self._turns.items() if n <= length}
        self._after_change()
        return True

    def reset(self) -> bool:
        return self.dispatch(ResetGame())

    # -- persistence -----------------------------------------------------

    def save(self) -> None:
        """Store the current state in the attached snapshot store."""
        if self._store is None:
            raise RuntimeError("No snapshot store attached to this session")
        self._store.save(self.state, self._slot)

    def load_snapshot(self) -> bool:
        """Replace the game with the saved snapshot, if there is one."""
        if self._store is None:
            raise RuntimeError("No snapshot store attached to this session")
        saved = self._store.load(self._slot)
        if saved is None:
            return False
        return self.dispatch(LoadGame(state=saved))

    # -- queries ---------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return self.state.game_status == GameStatus.ENDED

    def markable_numbers(self, player_id: str) -> dict[RowColor, frozenset[int]]:
        return TurnEngine.markable_numbers(self.state, self.turn, player_id)

    def winners(self) -> list[Player]:
        return ScoreSheetEngine.determine_winners(self.state.players)

    def standings(self) -> list[Player]:
        return ScoreSheetEngine.final_standings(self.state.players)

    # -- internals -------------------------------------------------------

    def _advance(self, state: GameState, turn: TurnState) -> bool:
        if state is self.state and turn == self.turn:
            return False
        state_changed = state is not self.state
        self.state = state
        self.turn = turn
        self._remember_turn()
        if state_changed:
            self._after_change()
        return True

    def _remember_turn(self) -> None:
        self._turns[len(self.state.history)] = self.turn

    def _after_change(self) -> None:
        if self._auto_save and self._store is not None:
            self._store.save(self.state, self._slot)

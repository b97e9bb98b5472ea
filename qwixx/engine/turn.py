"""
Qwixx - Turn Phase Controller

Sequences a single turn and decides who may mark what. The controller state
lives beside the GameState (owned by the session), never inside it, so
snapshots stay minimal.

Turn Phases:
    - ROLLING: the active player rolls all six dice
    - WHITE_DICE: every player may mark the white sum once, in any row
    - COLORED_DICE: the active player may mark one white + colored sum
    - INACTIVE_PLAYERS: players who skipped the white sum may still use it

Marks made in the current phase can be toggled off until the phase ends.
The active player takes a penalty when leaving COLORED_DICE without a mark
this turn.

All methods are stateless class methods. Each transition returns a
``(GameState, TurnState)`` pair; illegal requests return the inputs.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from qwixx.engine.actions import AddPenalty, MarkNumber, NextTurn, RollDice, UnmarkNumber
from qwixx.engine.base import ROW_COLORS, DiceState, GameState, GameStatus, RowColor
from qwixx.engine.dice import DiceEngine
from qwixx.engine.reducer import apply_action
from qwixx.engine.score_sheet import ScoreSheetEngine


class TurnPhase(Enum):
    """Sub-phases of a turn."""
    ROLLING = "rolling"
    WHITE_DICE = "white_dice"
    COLORED_DICE = "colored_dice"
    INACTIVE_PLAYERS = "inactive_players"


@dataclass(frozen=True)
class PhaseMark:
    """A mark made during the current phase, still toggleable."""
    player_id: str
    color: RowColor
    number: int


@dataclass(frozen=True)
class TurnState:
    """
    Transient bookkeeping for the current turn.

    Attributes:
        phase: Current sub-phase
        locked_at_roll: Rows already locked when the dice were rolled; only
                        these block the white sum this turn
        phase_marks: Marks made in the current phase
        white_marked: Players whose white-sum mark is final this turn
        active_marked: Whether the active player has a final mark this turn
    """
    phase: TurnPhase = TurnPhase.ROLLING
    locked_at_roll: frozenset[RowColor] = field(default_factory=frozenset)
    phase_marks: tuple[PhaseMark, ...] = ()
    white_marked: frozenset[str] = field(default_factory=frozenset)
    active_marked: bool = False

    def has_phase_mark(self, player_id: str) -> bool:
        return any(m.player_id == player_id for m in self.phase_marks)


def _no_numbers() -> dict[RowColor, frozenset[int]]:
    return {color: frozenset() for color in ROW_COLORS}


class TurnEngine:
    """Stateless engine driving the phases of a turn."""

    @classmethod
    def start_turn(cls, game: GameState) -> TurnState:
        """
        Rebuild controller state for ``game``.

        A game without dice is waiting for a roll. A game with dice (for
        instance one just loaded) resumes at the white dice.
        """
        if game.dice is None:
            return TurnState()
        return TurnState(
            phase=TurnPhase.WHITE_DICE,
            locked_at_roll=frozenset(game.locked_rows),
        )

    @classmethod
    def roll(
        cls,
        game: GameState,
        turn: TurnState,
        dice: DiceState | None = None,
    ) -> tuple[GameState, TurnState]:
        """
        Roll the dice and open the white dice phase.

        Args:
            game: Current game
            turn: Current turn state, must be ROLLING
            dice: Predetermined values (for testing); rolled if omitted
        """
        if turn.phase != TurnPhase.ROLLING or game.dice is not None:
            return game, turn
        if game.game_status != GameStatus.PLAYING:
            return game, turn

        if dice is None:
            dice = DiceEngine.roll_all()
        new_game = apply_action(game, RollDice(dice=dice))
        if new_game is game:
            return game, turn

        return new_game, TurnState(
            phase=TurnPhase.WHITE_DICE,
            locked_at_roll=frozenset(game.locked_rows),
        )

    @classmethod
    def markable_numbers(
        cls,
        game: GameState,
        turn: TurnState,
        player_id: str,
    ) -> dict[RowColor, frozenset[int]]:
        """
        Numbers ``player_id`` may mark right now, per row.

        Combines the dice tier allowed in the current phase with the
        player's own row rules. Every color is present in the result.
        """
        player = game.get_player(player_id)
        active = game.current_player
        if (
            player is None
            or active is None
            or game.dice is None
            or game.game_status != GameStatus.PLAYING
            or turn.has_phase_mark(player_id)
        ):
            return _no_numbers()

        is_active = player.id == active.id
        if turn.phase == TurnPhase.WHITE_DICE:
            candidates = cls._white_candidates(game.dice, turn)
        elif turn.phase == TurnPhase.COLORED_DICE and is_active:
            candidates = {
                color: DiceEngine.colored_sums(game.dice, color, game.locked_rows)
                for color in ROW_COLORS
            }
        elif (
            turn.phase == TurnPhase.INACTIVE_PLAYERS
            and not is_active
            and player_id not in turn.white_marked
        ):
            candidates = cls._white_candidates(game.dice, turn)
        else:
            return _no_numbers()

        sheet = player.score_sheet
        return {
            color: frozenset(
                n for n in candidates[color]
                if ScoreSheetEngine.can_mark(sheet.row(color), n)
            )
            for color in ROW_COLORS
        }

    @classmethod
    def _white_candidates(
        cls, dice: DiceState, turn: TurnState
    ) -> dict[RowColor, frozenset[int]]:
        white = DiceEngine.white_sum(dice)
        return {
            color: frozenset() if color in turn.locked_at_roll else frozenset({white})
            for color in ROW_COLORS
        }

    @classmethod
    def toggle_mark(
        cls,
        game: GameState,
        turn: TurnState,
        player_id: str,
        color: RowColor,
        number: int,
    ) -> tuple[GameState, TurnState]:
        """
        Mark a legal number, or unmark one made earlier in this phase.

        Returns:
            Updated (game, turn), or the inputs if the click is not legal
        """
        mark = PhaseMark(player_id=player_id, color=color, number=number)

        if mark in turn.phase_marks:
            new_game = apply_action(
                game, UnmarkNumber(player_id=player_id, color=color, number=number)
            )
            if new_game is game:
                return game, turn
            remaining = tuple(m for m in turn.phase_marks if m != mark)
            return new_game, replace(turn, phase_marks=remaining)

        if number not in cls.markable_numbers(game, turn, player_id)[color]:
            return game, turn

        new_game = apply_action(
            game,
            MarkNumber(
                player_id=player_id,
                color=color,
                number=number,
                allow_locked_row=color in game.locked_rows,
            ),
        )
        if new_game is game:
            return game, turn
        return new_game, replace(turn, phase_marks=turn.phase_marks + (mark,))

    @classmethod
    def finish_white_dice(
        cls, game: GameState, turn: TurnState
    ) -> tuple[GameState, TurnState]:
        """Close the white dice phase; its marks become permanent."""
        if turn.phase != TurnPhase.WHITE_DICE:
            return game, turn

        white_marked = frozenset(m.player_id for m in turn.phase_marks)
        active = game.current_player
        return game, replace(
            turn,
            phase=TurnPhase.COLORED_DICE,
            phase_marks=(),
            white_marked=white_marked,
            active_marked=active is not None and active.id in white_marked,
        )

    @classmethod
    def finish_turn(
        cls, game: GameState, turn: TurnState
    ) -> tuple[GameState, TurnState]:
        """
        Close the colored dice phase.

        Penalizes the active player if they marked nothing this turn.
        """
        if turn.phase != TurnPhase.COLORED_DICE:
            return game, turn

        active_marked = turn.active_marked or bool(turn.phase_marks)
        active = game.current_player
        if not active_marked and active is not None:
            game = apply_action(game, AddPenalty(player_id=active.id))

        return game, replace(
            turn,
            phase=TurnPhase.INACTIVE_PLAYERS,
            phase_marks=(),
            active_marked=active_marked,
        )

    @classmethod
    def next_player(
        cls, game: GameState, turn: TurnState
    ) -> tuple[GameState, TurnState]:
        """Advance to the next player (or end the game) and reset to ROLLING."""
        if turn.phase != TurnPhase.INACTIVE_PLAYERS:
            return game, turn
        return apply_action(game, NextTurn()), TurnState()

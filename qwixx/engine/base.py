"""
Qwixx - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the rules engine. All classes are immutable (frozen dataclasses) so every
state transition produces a new value and snapshots can be shared freely.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RowColor(Enum):
    """Colored rows on a score sheet (and the matching colored dice)."""
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"

    @property
    def is_ascending(self) -> bool:
        """Red and yellow run 2..12, green and blue run 12..2."""
        return self in (RowColor.RED, RowColor.YELLOW)


ROW_COLORS: tuple[RowColor, ...] = tuple(RowColor)


class GameStatus(Enum):
    """Lifecycle of a game."""
    SETUP = "setup"
    PLAYING = "playing"
    ENDED = "ended"


MIN_NUMBER = 2
MAX_NUMBER = 12
MAX_PENALTIES = 4
PENALTY_POINTS = -5
DIE_FACES = 6


@dataclass(frozen=True)
class MarkedNumber:
    """A single cell on a row."""
    number: int
    marked: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "MarkedNumber":
        return cls(number=int(data["number"]), marked=bool(data["marked"]))

    def to_dict(self) -> dict:
        return {"number": self.number, "marked": self.marked}


@dataclass(frozen=True)
class ColorRow:
    """
    Immutable representation of one colored row.

    Attributes:
        color: Row color (fixes the direction of the numbers)
        numbers: Cells in play order, not numeric order
                 Example: green runs (12, 11, ..., 2)
        locked: Whether the row has been closed for this player
    """
    color: RowColor
    numbers: tuple[MarkedNumber, ...]
    locked: bool = False

    @property
    def marked_count(self) -> int:
        return sum(1 for cell in self.numbers if cell.marked)

    @property
    def last_number(self) -> int:
        """The locking number: 12 for ascending rows, 2 for descending."""
        return self.numbers[-1].number

    def index_of(self, number: int) -> int:
        """Position of ``number`` in row order, or -1 if absent."""
        for i, cell in enumerate(self.numbers):
            if cell.number == number:
                return i
        return -1

    def rightmost_marked_index(self) -> int:
        """Position of the rightmost marked cell, or -1 when nothing is marked."""
        for i in range(len(self.numbers) - 1, -1, -1):
            if self.numbers[i].marked:
                return i
        return -1

    def is_marked(self, number: int) -> bool:
        index = self.index_of(number)
        return index != -1 and self.numbers[index].marked

    def with_mark(self, number: int, marked: bool = True) -> "ColorRow":
        """Return a copy with ``number`` set to ``marked``."""
        cells = tuple(
            MarkedNumber(cell.number, marked) if cell.number == number else cell
            for cell in self.numbers
        )
        return ColorRow(color=self.color, numbers=cells, locked=self.locked)

    def with_locked(self, locked: bool = True) -> "ColorRow":
        return ColorRow(color=self.color, numbers=self.numbers, locked=locked)

    @classmethod
    def from_dict(cls, data: dict) -> "ColorRow":
        return cls(
            color=RowColor(data["color"]),
            numbers=tuple(MarkedNumber.from_dict(n) for n in data["numbers"]),
            locked=bool(data.get("locked", False)),
        )

    def to_dict(self) -> dict:
        return {
            "color": self.color.value,
            "numbers": [cell.to_dict() for cell in self.numbers],
            "locked": self.locked,
        }


@dataclass(frozen=True)
class ScoreSheet:
    """A player's sheet: exactly one row per color."""
    red: ColorRow
    yellow: ColorRow
    green: ColorRow
    blue: ColorRow

    def row(self, color: RowColor) -> ColorRow:
        return getattr(self, color.value)

    @property
    def rows(self) -> tuple[ColorRow, ...]:
        return tuple(self.row(color) for color in ROW_COLORS)

    def with_row(self, row: ColorRow) -> "ScoreSheet":
        """Return a copy with the row of ``row.color`` replaced."""
        rows = {color.value: self.row(color) for color in ROW_COLORS}
        rows[row.color.value] = row
        return ScoreSheet(**rows)

    @classmethod
    def from_dict(cls, data: dict) -> "ScoreSheet":
        return cls(**{
            color.value: ColorRow.from_dict(data[color.value])
            for color in ROW_COLORS
        })

    def to_dict(self) -> dict:
        return {color.value: self.row(color).to_dict() for color in ROW_COLORS}


@dataclass(frozen=True)
class Player:
    """
    A participant in the game.

    Attributes:
        id: Stable identifier for the game's lifetime
        name: Trimmed display name, unique among players (case-insensitive)
        score_sheet: The player's four rows
        penalties: Number of penalties taken (0-4)
        total_score: Cached score, recomputed after every change
    """
    id: str
    name: str
    score_sheet: ScoreSheet
    penalties: int = 0
    total_score: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Player":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            score_sheet=ScoreSheet.from_dict(data["scoreSheet"]),
            penalties=int(data.get("penalties", 0)),
            total_score=int(data.get("totalScore", 0)),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "scoreSheet": self.score_sheet.to_dict(),
            "penalties": self.penalties,
            "totalScore": self.total_score,
        }


@dataclass(frozen=True)
class DiceState:
    """
    The six dice of the current turn.

    Attributes:
        white1, white2: The two white dice shared by every player
        red, yellow, green, blue: Colored dice, one per row
    """
    white1: int
    white2: int
    red: int
    yellow: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        """Validate dice values are within valid range."""
        for name in ("white1", "white2", "red", "yellow", "green", "blue"):
            value = getattr(self, name)
            if not isinstance(value, int) or not (1 <= value <= DIE_FACES):
                raise ValueError(
                    f"Invalid value {value!r} for die {name}. "
                    f"Must be between 1 and {DIE_FACES}."
                )

    def colored(self, color: RowColor) -> int:
        """Value of the die matching ``color``."""
        return getattr(self, color.value)

    @classmethod
    def from_dict(cls, data: dict) -> "DiceState":
        return cls(**{
            name: data[name]
            for name in ("white1", "white2", "red", "yellow", "green", "blue")
        })

    def to_dict(self) -> dict[str, int]:
        return {
            "white1": self.white1,
            "white2": self.white2,
            "red": self.red,
            "yellow": self.yellow,
            "green": self.green,
            "blue": self.blue,
        }


@dataclass(frozen=True)
class GameState:
    """
    Complete, authoritative state of a game.

    Attributes:
        players: Players in turn order
        current_player_index: Index of the active player
        dice: Dice of the current turn, None before rolling
        locked_rows: Colors locked so far, in locking order, no duplicates
        game_status: setup, playing or ended
        history: Accepted actions, oldest first
    """
    players: tuple[Player, ...] = ()
    current_player_index: int = 0
    dice: DiceState | None = None
    locked_rows: tuple[RowColor, ...] = ()
    game_status: GameStatus = GameStatus.SETUP
    history: tuple[Any, ...] = field(default_factory=tuple)

    @property
    def current_player(self) -> Player | None:
        if not 0 <= self.current_player_index < len(self.players):
            return None
        return self.players[self.current_player_index]

    def player_index(self, player_id: str) -> int:
        """Index of the player with ``player_id``, or -1 if absent."""
        for i, player in enumerate(self.players):
            if player.id == player_id:
                return i
        return -1

    def get_player(self, player_id: str) -> Player | None:
        index = self.player_index(player_id)
        return self.players[index] if index != -1 else None

    @classmethod
    def from_dict(cls, data: dict) -> "GameState":
        """Rebuild a state from its plain-data snapshot."""
        from qwixx.engine.actions import action_from_dict

        dice = data.get("dice")
        return cls(
            players=tuple(Player.from_dict(p) for p in data.get("players", [])),
            current_player_index=int(data.get("currentPlayerIndex", 0)),
            dice=DiceState.from_dict(dice) if dice is not None else None,
            locked_rows=tuple(RowColor(c) for c in data.get("lockedRows", [])),
            game_status=GameStatus(data.get("gameStatus", GameStatus.SETUP.value)),
            history=tuple(action_from_dict(a) for a in data.get("history", [])),
        )

    def to_dict(self) -> dict:
        return {
            "players": [p.to_dict() for p in self.players],
            "currentPlayerIndex": self.current_player_index,
            "dice": self.dice.to_dict() if self.dice is not None else None,
            "lockedRows": [c.value for c in self.locked_rows],
            "gameStatus": self.game_status.value,
            "history": [a.to_dict() for a in self.history],
        }

"""
Qwixx - Game Actions

The action vocabulary accepted by the reducer. Every action is an immutable
value that serializes to plain data tagged with its ``type`` so that game
history can be persisted and replayed.
"""

import uuid
from dataclasses import dataclass
from typing import Any, ClassVar, Sequence

from qwixx.engine.base import DiceState, GameState, RowColor


def new_player_id() -> str:
    """Generate a globally unique player id."""
    return f"player-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class InitializeGame:
    """Create the player list. Ids default to player-1..player-N."""
    TYPE: ClassVar[str] = "INITIALIZE_GAME"

    player_names: tuple[str, ...]
    player_ids: tuple[str, ...] = ()

    @classmethod
    def create(cls, names: Sequence[str], ids: Sequence[str] | None = None) -> "InitializeGame":
        return cls(player_names=tuple(names), player_ids=tuple(ids or ()))

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"playerNames": list(self.player_names)}
        if self.player_ids:
            payload["playerIds"] = list(self.player_ids)
        return {"type": self.TYPE, "payload": payload}


@dataclass(frozen=True)
class StartGame:
    TYPE: ClassVar[str] = "START_GAME"

    def to_dict(self) -> dict:
        return {"type": self.TYPE}


@dataclass(frozen=True)
class NextTurn:
    TYPE: ClassVar[str] = "NEXT_TURN"

    def to_dict(self) -> dict:
        return {"type": self.TYPE}


@dataclass(frozen=True)
class RollDice:
    """Record a roll. The values travel in the action so replay is exact."""
    TYPE: ClassVar[str] = "ROLL_DICE"

    dice: DiceState

    def to_dict(self) -> dict:
        return {"type": self.TYPE, "payload": self.dice.to_dict()}


@dataclass(frozen=True)
class MarkNumber:
    """
    Mark ``number`` in a player's ``color`` row.

    Attributes:
        allow_locked_row: Permit marking a color already in the locked set
                          (white-dice phase of the turn that locked it)
    """
    TYPE: ClassVar[str] = "MARK_NUMBER"

    player_id: str
    color: RowColor
    number: int
    allow_locked_row: bool = False

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {
            "playerId": self.player_id,
            "color": self.color.value,
            "number": self.number,
        }
        if self.allow_locked_row:
            payload["allowLockedRow"] = True
        return {"type": self.TYPE, "payload": payload}


@dataclass(frozen=True)
class UnmarkNumber:
    TYPE: ClassVar[str] = "UNMARK_NUMBER"

    player_id: str
    color: RowColor
    number: int

    def to_dict(self) -> dict:
        return {
            "type": self.TYPE,
            "payload": {
                "playerId": self.player_id,
                "color": self.color.value,
                "number": self.number,
            },
        }


@dataclass(frozen=True)
class LockRow:
    TYPE: ClassVar[str] = "LOCK_ROW"

    color: RowColor

    def to_dict(self) -> dict:
        return {"type": self.TYPE, "payload": {"color": self.color.value}}


@dataclass(frozen=True)
class AddPenalty:
    TYPE: ClassVar[str] = "ADD_PENALTY"

    player_id: str

    def to_dict(self) -> dict:
        return {"type": self.TYPE, "payload": {"playerId": self.player_id}}


@dataclass(frozen=True)
class EndGame:
    TYPE: ClassVar[str] = "END_GAME"

    def to_dict(self) -> dict:
        return {"type": self.TYPE}


@dataclass(frozen=True)
class ResetGame:
    TYPE: ClassVar[str] = "RESET_GAME"

    def to_dict(self) -> dict:
        return {"type": self.TYPE}


@dataclass(frozen=True)
class LoadGame:
    """Replace the whole state with a previously saved snapshot."""
    TYPE: ClassVar[str] = "LOAD_GAME"

    state: GameState

    def to_dict(self) -> dict:
        return {"type": self.TYPE, "payload": self.state.to_dict()}


Action = (
    InitializeGame | StartGame | NextTurn | RollDice | MarkNumber | UnmarkNumber
    | LockRow | AddPenalty | EndGame | ResetGame | LoadGame
)


def action_from_dict(data: dict) -> Action:
    """
    Rebuild an action from its serialized form.

    Raises:
        ValueError: If the type tag is unknown or a value is invalid
        KeyError: If a required payload field is missing
    """
    action_type = data.get("type")
    payload = data.get("payload") or {}

    if action_type == InitializeGame.TYPE:
        return InitializeGame(
            player_names=tuple(payload["playerNames"]),
            player_ids=tuple(payload.get("playerIds") or ()),
        )
    if action_type == RollDice.TYPE:
        return RollDice(dice=DiceState.from_dict(payload))
    if action_type == MarkNumber.TYPE:
        return MarkNumber(
            player_id=payload["playerId"],
            color=RowColor(payload["color"]),
            number=int(payload["number"]),
            allow_locked_row=bool(payload.get("allowLockedRow", False)),
        )
    if action_type == UnmarkNumber.TYPE:
        return UnmarkNumber(
            player_id=payload["playerId"],
            color=RowColor(payload["color"]),
            number=int(payload["number"]),
        )
    if action_type == LockRow.TYPE:
        return LockRow(color=RowColor(payload["color"]))
    if action_type == AddPenalty.TYPE:
        return AddPenalty(player_id=payload["playerId"])
    if action_type == LoadGame.TYPE:
        return LoadGame(state=GameState.from_dict(payload))

    simple = {cls.TYPE: cls for cls in (StartGame, NextTurn, EndGame, ResetGame)}
    if action_type in simple:
        return simple[action_type]()

    raise ValueError(f"Unknown action type {action_type!r}")

"""
Qwixx - Dice Engine

Rolling the six dice and enumerating the sums each player may use.

Combination Tiers:
    - White sum: white1 + white2, usable by every player on any row
    - Colored: white1 + color and white2 + color, usable only by the
      active player and only on the matching row
    - A locked row's die leaves the game; its color yields no sums

All methods are stateless class methods operating on immutable data.
"""

import random
from dataclasses import dataclass
from typing import Iterable

from qwixx.engine.base import DIE_FACES, ROW_COLORS, DiceState, RowColor


@dataclass(frozen=True)
class Combination:
    """
    A usable dice sum.

    Attributes:
        color: Row the sum is restricted to, None for the white sum
        sum: The dice total
    """
    color: RowColor | None
    sum: int


class DiceEngine:
    """Stateless engine for dice rolls and sums."""

    @classmethod
    def roll_die(cls) -> int:
        """Roll a single D6."""
        return random.randint(1, DIE_FACES)

    @classmethod
    def roll_all(cls) -> DiceState:
        """Roll all six dice independently."""
        return DiceState(
            white1=cls.roll_die(),
            white2=cls.roll_die(),
            red=cls.roll_die(),
            yellow=cls.roll_die(),
            green=cls.roll_die(),
            blue=cls.roll_die(),
        )

    @classmethod
    def white_sum(cls, dice: DiceState) -> int:
        return dice.white1 + dice.white2

    @classmethod
    def colored_sums(
        cls,
        dice: DiceState,
        color: RowColor,
        locked_rows: Iterable[RowColor] = (),
    ) -> frozenset[int]:
        """
        Sums available to the active player for one colored row.

        Args:
            dice: Current dice
            color: Row to combine with
            locked_rows: Colors whose die has left the game

        Returns:
            {white1 + color, white2 + color}, empty if the color is locked
        """
        if color in set(locked_rows):
            return frozenset()
        colored = dice.colored(color)
        return frozenset({dice.white1 + colored, dice.white2 + colored})

    @classmethod
    def active_player_combinations(
        cls,
        dice: DiceState,
        locked_rows: Iterable[RowColor] = (),
    ) -> list[Combination]:
        """White sum followed by every colored combination, skipping locked colors."""
        locked = set(locked_rows)
        combinations = [Combination(color=None, sum=cls.white_sum(dice))]
        for color in ROW_COLORS:
            if color in locked:
                continue
            first = dice.white1 + dice.colored(color)
            second = dice.white2 + dice.colored(color)
            combinations.append(Combination(color=color, sum=first))
            if second != first:
                combinations.append(Combination(color=color, sum=second))
        return combinations

    @classmethod
    def other_player_combinations(cls, dice: DiceState) -> list[Combination]:
        """Non-active players only ever get the white sum."""
        return [Combination(color=None, sum=cls.white_sum(dice))]

    @classmethod
    def possible_sums(
        cls,
        dice: DiceState,
        locked_rows: Iterable[RowColor] = (),
    ) -> list[int]:
        """Every distinct sum on the table, ascending. Useful for previews."""
        return sorted({c.sum for c in cls.active_player_combinations(dice, locked_rows)})

"""
Qwixx - Score Sheet Engine

Row construction, marking and locking legality, and scoring.

Marking Rules:
    - Red/Yellow rows run 2 -> 12, Green/Blue rows run 12 -> 2
    - Numbers are marked left to right in row order; anything skipped
      can never be marked afterwards
    - A row locks when its final number is marked and at least 5 numbers
      were already marked in it

Scoring:
    - Each row scores the triangular number of its marks: n * (n + 1) / 2
    - Each penalty costs 5 points (at most 4 penalties)

All methods are stateless class methods operating on immutable data.
"""

from dataclasses import replace
from typing import ClassVar, Sequence

from qwixx.engine.base import (
    MAX_NUMBER,
    MIN_NUMBER,
    PENALTY_POINTS,
    ROW_COLORS,
    ColorRow,
    MarkedNumber,
    Player,
    RowColor,
    ScoreSheet,
)


class ScoreSheetEngine:
    """Stateless engine for score sheet rules."""

    MIN_MARKS_TO_LOCK: ClassVar[int] = 5

    @classmethod
    def create_row(cls, color: RowColor) -> ColorRow:
        """Build an unmarked, unlocked row in the color's fixed direction."""
        numbers = range(MIN_NUMBER, MAX_NUMBER + 1)
        if not color.is_ascending:
            numbers = reversed(numbers)
        return ColorRow(
            color=color,
            numbers=tuple(MarkedNumber(number=n) for n in numbers),
        )

    @classmethod
    def create_score_sheet(cls) -> ScoreSheet:
        return ScoreSheet(**{color.value: cls.create_row(color) for color in ROW_COLORS})

    @classmethod
    def create_player(cls, player_id: str, name: str) -> Player:
        return Player(id=player_id, name=name, score_sheet=cls.create_score_sheet())

    @classmethod
    def can_mark(cls, row: ColorRow, number: int) -> bool:
        """
        Check whether ``number`` may be marked next in ``row``.

        Args:
            row: The row to mark
            number: Number to mark (2-12)

        Returns:
            False if the row is locked, the number is absent or already
            marked, or it sits at or before the rightmost marked cell
        """
        if row.locked:
            return False

        index = row.index_of(number)
        if index == -1 or row.numbers[index].marked:
            return False

        return index > row.rightmost_marked_index()

    @classmethod
    def can_lock(cls, row: ColorRow, number: int) -> bool:
        """
        Check whether marking ``number`` locks ``row``.

        Only the row's final number (12 ascending, 2 descending) locks,
        and only once at least five other numbers are already marked.
        """
        if row.marked_count < cls.MIN_MARKS_TO_LOCK:
            return False
        return number == row.last_number

    @classmethod
    def row_score(cls, row: ColorRow) -> int:
        marked = row.marked_count
        return marked * (marked + 1) // 2

    @classmethod
    def total_score(cls, player: Player) -> int:
        """Sum of the four row scores plus penalties. Always recomputed."""
        rows = sum(cls.row_score(row) for row in player.score_sheet.rows)
        return rows + player.penalties * PENALTY_POINTS

    @classmethod
    def rescored(cls, player: Player, **changes) -> Player:
        """Return ``player`` with ``changes`` applied and total_score recomputed."""
        updated = replace(player, **changes)
        return replace(updated, total_score=cls.total_score(updated))

    @classmethod
    def determine_winners(cls, players: Sequence[Player]) -> list[Player]:
        """
        Return every player tied at the highest total score.

        Args:
            players: Final player list

        Returns:
            Winners sorted by score descending, input order kept among ties
        """
        if not players:
            return []
        best = max(p.total_score for p in players)
        return cls.final_standings([p for p in players if p.total_score == best])

    @classmethod
    def final_standings(cls, players: Sequence[Player]) -> list[Player]:
        """All players sorted by score descending (stable among ties)."""
        return sorted(players, key=lambda p: p.total_score, reverse=True)

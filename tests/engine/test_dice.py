"""
Tests for the dice engine: rolling and combination tiers.
"""

from qwixx.engine.base import DiceState, RowColor
from qwixx.engine.dice import Combination, DiceEngine


class TestRollAll:
    """Tests for DiceEngine.roll_all()."""

    def test_returns_dice_state(self):
        assert isinstance(DiceEngine.roll_all(), DiceState)

    def test_value_range(self):
        """Roll 200 times; every die should be 1-6."""
        for _ in range(200):
            dice = DiceEngine.roll_all()
            assert all(1 <= v <= 6 for v in dice.to_dict().values())

    def test_all_faces_appear(self):
        faces = {DiceEngine.roll_die() for _ in range(1000)}
        assert faces == {1, 2, 3, 4, 5, 6}


class TestWhiteSum:

    def test_white_sum(self, sample_dice):
        assert DiceEngine.white_sum(sample_dice) == 7


class TestColoredSums:
    """Tests for the active player's colored tier."""

    def test_two_sums(self, sample_dice):
        assert DiceEngine.colored_sums(sample_dice, RowColor.RED) == {8, 9}
        assert DiceEngine.colored_sums(sample_dice, RowColor.BLUE) == {4, 5}

    def test_equal_sums_deduplicated(self, doubles_dice):
        assert DiceEngine.colored_sums(doubles_dice, RowColor.RED) == {8}

    def test_locked_color_empty(self, sample_dice):
        sums = DiceEngine.colored_sums(sample_dice, RowColor.GREEN, [RowColor.GREEN])
        assert sums == frozenset()

    def test_other_locked_color_ignored(self, sample_dice):
        sums = DiceEngine.colored_sums(sample_dice, RowColor.GREEN, [RowColor.RED])
        assert sums == {9, 10}


class TestCombinations:
    """Tests for combination listings."""

    def test_active_player_combinations(self, sample_dice):
        combos = DiceEngine.active_player_combinations(sample_dice)
        assert combos[0] == Combination(color=None, sum=7)
        assert Combination(color=RowColor.YELLOW, sum=5) in combos
        assert Combination(color=RowColor.YELLOW, sum=6) in combos
        assert len(combos) == 9

    def test_active_player_skips_locked(self, sample_dice):
        combos = DiceEngine.active_player_combinations(sample_dice, [RowColor.RED])
        assert all(c.color != RowColor.RED for c in combos)
        assert len(combos) == 7

    def test_doubles_one_combination_per_color(self, doubles_dice):
        assert len(DiceEngine.active_player_combinations(doubles_dice)) == 5

    def test_other_player_only_white(self, sample_dice):
        assert DiceEngine.other_player_combinations(sample_dice) == [
            Combination(color=None, sum=7)
        ]


class TestPossibleSums:
    """Tests for DiceEngine.possible_sums()."""

    def test_sorted_and_unique(self, sample_dice):
        assert DiceEngine.possible_sums(sample_dice) == [4, 5, 6, 7, 8, 9, 10]

    def test_excludes_locked(self, sample_dice):
        assert DiceEngine.possible_sums(sample_dice, [RowColor.GREEN]) == [4, 5, 6, 7, 8, 9]

"""
Exact win probabilities between six-faced dice.

Wins are counted with strict ``>`` over all 36 face pairs, so tied faces help
neither side and ``p(i, j) + p(j, i)`` falls short of 1 whenever two dice share
a face value. Counts stay integral until a single Fraction is formed; rounding
to four places is done on the exact fraction, with halves rounded up.
"""
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Final, Sequence, Union

from .dice import Die

PRECISION: Final[int] = 4
_QUANTUM: Final[Decimal] = Decimal(1).scaleb(-PRECISION)


def round_probability(value: Fraction) -> Decimal:
    """Round a non-negative fraction to PRECISION places, halves going up."""
    units, remainder = divmod(value.numerator * 10 ** PRECISION, value.denominator)
    if 2 * remainder >= value.denominator:
        units += 1
    return Decimal(units) * _QUANTUM


class SelfProbability:
    """Diagonal marker: a die is never matched against itself in the game."""

    value: Final[Fraction] = Fraction(1, 3)
    label: Final[str] = "- (0.3333)"

    def __str__(self) -> str:
        return self.label

    def __repr__(self) -> str:
        return "SELF"


SELF: Final[SelfProbability] = SelfProbability()

Cell = Union[Decimal, SelfProbability]


# ==============================================================================
# Probability Calculation Logic
# ==============================================================================

class ProbabilityCalculator:
    @staticmethod
    def count_wins(die1: Die, die2: Die) -> int:
        return sum(1 for f1 in die1.faces for f2 in die2.faces if f1 > f2)

    @staticmethod
    def exact_win_probability(die1: Die, die2: Die) -> Fraction:
        total_outcomes = len(die1) * len(die2)
        return Fraction(ProbabilityCalculator.count_wins(die1, die2), total_outcomes)

    @staticmethod
    def calculate_win_probability(die1: Die, die2: Die) -> Decimal:
        return round_probability(ProbabilityCalculator.exact_win_probability(die1, die2))

    @staticmethod
    def matrix(dice: Sequence[Die]) -> "ProbabilityMatrix":
        rows = tuple(
            tuple(
                SELF if i == j else ProbabilityCalculator.calculate_win_probability(row_die, col_die)
                for j, col_die in enumerate(dice)
            )
            for i, row_die in enumerate(dice)
        )
        return ProbabilityMatrix(dice=tuple(dice), rows=rows)


@dataclass(frozen=True)
class ProbabilityMatrix:
    """``rows[i][j]`` is the chance that dice[i] beats dice[j]; diagonal is SELF."""
    dice: tuple[Die, ...]
    rows: tuple[tuple[Cell, ...], ...]

    def __getitem__(self, index: tuple[int, int]) -> Cell:
        i, j = index
        return self.rows[i][j]

    def __len__(self) -> int:
        return len(self.rows)


# Module-level names for callers that do not need the calculator class.
pairwise_win_probability = ProbabilityCalculator.calculate_win_probability
matrix = ProbabilityCalculator.matrix

from typing import Iterator, Sequence

from .errors import ConfigurationError

FACES_PER_DIE = 6
MIN_DICE = 3


# ==============================================================================
# Data Structure for a Die
# ==============================================================================

class Die:
    """Six integer faces. Face ``i`` is what a roll index of ``i`` shows."""

    __slots__ = ("_faces",)

    def __init__(self, faces: Sequence[int]):
        faces = tuple(faces)
        if len(faces) != FACES_PER_DIE:
            raise ConfigurationError(
                f"Each die must have exactly {FACES_PER_DIE} faces, got {len(faces)}."
            )
        if not all(isinstance(f, int) and not isinstance(f, bool) for f in faces):
            raise ConfigurationError("All dice faces must be integer values.")
        self._faces = faces

    @property
    def faces(self) -> tuple[int, ...]:
        return self._faces

    def roll(self, index: int) -> int:
        return self._faces[index]

    def __len__(self) -> int:
        return len(self._faces)

    def __iter__(self) -> Iterator[int]:
        return iter(self._faces)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Die):
            return NotImplemented
        return self._faces == other._faces

    def __hash__(self) -> int:
        return hash(self._faces)

    def __str__(self) -> str:
        return "[" + ",".join(map(str, self._faces)) + "]"

    def __repr__(self) -> str:
        return f"Die({list(self._faces)!r})"


# ==============================================================================
# Ordered collection of dice
# ==============================================================================

class DiceSet:
    """
    The dice available for selection, in the order they were given.

    Display index equals selection index. ``take`` removes a die and hands it
    to whoever picked it; the remaining dice keep their relative order.
    """

    def __init__(self, dice: Sequence[Die]):
        dice = list(dice)
        if len(dice) < MIN_DICE:
            raise ConfigurationError(f"Please specify at least {MIN_DICE} dice.")
        self._dice = dice

    def take(self, index: int) -> Die:
        if not 0 <= index < len(self._dice):
            raise IndexError(f"No die at index {index}; {len(self._dice)} available.")
        return self._dice.pop(index)

    def copy(self) -> "DiceSet":
        clone = DiceSet.__new__(DiceSet)
        clone._dice = list(self._dice)
        return clone

    def __getitem__(self, index: int) -> Die:
        return self._dice[index]

    def __len__(self) -> int:
        return len(self._dice)

    def __iter__(self) -> Iterator[Die]:
        return iter(self._dice)


# ==============================================================================
# Command-Line Argument Parser
# ==============================================================================

class DiceParser:
    @staticmethod
    def parse_die(arg: str) -> Die:
        try:
            faces = [int(f) for f in arg.split(",")]
        except ValueError:
            raise ConfigurationError(
                f"All dice faces must be integer values, got '{arg}'."
            ) from None
        if len(faces) != FACES_PER_DIE:
            raise ConfigurationError(
                f"Each die must have exactly {FACES_PER_DIE} faces, got {len(faces)} in '{arg}'."
            )
        return Die(faces)

    @staticmethod
    def parse(args: Sequence[str]) -> DiceSet:
        if len(args) < MIN_DICE:
            raise ConfigurationError(
                f"Please specify at least {MIN_DICE} dice, got {len(args)}."
            )
        return DiceSet([DiceParser.parse_die(arg) for arg in args])

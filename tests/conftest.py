"""
Fair Dice - Test Configuration and Fixtures

Common dice sets, scripted consoles and deterministic draws.
"""

import secrets
from typing import Callable, Iterable

import pytest

from dice_game.dice import Die, DiceSet
from dice_game.fair_random import Commitment, CryptoProvider
from dice_game.protocol import FairDraw
from dice_game.ui import GameUI


# =============================================================================
# DICE
# =============================================================================

CLASSIC_FACES = ([2, 2, 4, 4, 9, 9], [6, 8, 1, 1, 8, 6], [7, 5, 3, 7, 5, 3])


@pytest.fixture
def classic_dice() -> list[Die]:
    """The A/B/C set where A beats B, B beats C and C beats A."""
    return [Die(faces) for faces in CLASSIC_FACES]


@pytest.fixture
def classic_set(classic_dice) -> DiceSet:
    return DiceSet(classic_dice)


# =============================================================================
# CONSOLE
# =============================================================================

class ScriptedConsole:
    """Feeds canned answers to GameUI and records everything it prints."""

    def __init__(self, answers: Iterable[str]):
        self._answers = iter(answers)
        self.prompts: list[str] = []
        self.lines: list[str] = []

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        try:
            return next(self._answers)
        except StopIteration:
            raise EOFError("script exhausted") from None

    def output(self, text: str) -> None:
        self.lines.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def ui(self) -> GameUI:
        return GameUI(input_func=self.input, output_func=self.output)


@pytest.fixture
def console_factory() -> Callable[[Iterable[str]], ScriptedConsole]:
    return ScriptedConsole


# =============================================================================
# DRAWS
# =============================================================================

def honest_commitment(value: int) -> Commitment:
    key = CryptoProvider.generate_key()
    return Commitment(secret_key=key, revealed_value=value, digest=CryptoProvider.calculate_hmac(key, value))


def scripted_draws(values: Iterable[int], lie: bool = False) -> Callable[[int], FairDraw]:
    """
    Draw factory committing to ``values`` in order.

    With ``lie=True`` the digest binds a different value than the one revealed.
    """
    pending = iter(values)

    def generator(range_: int) -> Commitment:
        value = next(pending) % range_
        if not lie:
            return honest_commitment(value)
        key = secrets.token_bytes(32)
        return Commitment(
            secret_key=key,
            revealed_value=value,
            digest=CryptoProvider.calculate_hmac(key, value + 1),
        )

    return lambda range_: FairDraw(range_, generator=generator)


@pytest.fixture
def draws_factory():
    return scripted_draws

import logging
import secrets
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .dice import Die, DiceSet
from .help_table import HelpTableGenerator
from .probability import ProbabilityCalculator
from .protocol import FairDraw
from .ui import HELP, GameUI

logger = logging.getLogger(__name__)

FIRST_MOVE_RANGE = 2


class Winner(Enum):
    USER = "user"
    COMPUTER = "computer"
    DRAW = "draw"


@dataclass(frozen=True)
class RoundResult:
    user_goes_first: bool
    user_die: Die
    computer_die: Die
    user_throw: int
    computer_throw: int

    @property
    def winner(self) -> Winner:
        if self.user_throw > self.computer_throw:
            return Winner.USER
        if self.computer_throw > self.user_throw:
            return Winner.COMPUTER
        return Winner.DRAW


@dataclass
class GameContext:
    """Everything a round needs; passed explicitly instead of living in globals."""
    dice: DiceSet
    ui: GameUI
    draw_factory: Callable[[int], FairDraw] = FairDraw

    def __post_init__(self):
        self.help_table = HelpTableGenerator.for_dice(self.dice)

    def show_help(self):
        self.ui.display_message(self.help_table)


# ==============================================================================
# Provably Fair Random Number Generation & Game Logic
# ==============================================================================

class FairInteraction:
    def __init__(self, context: GameContext):
        self.context = context
        self.ui = context.ui

    def determine_first_player(self) -> bool:
        self.ui.display_message("\nLet's determine who makes the first move.")
        draw = self.context.draw_factory(FIRST_MOVE_RANGE)
        self.ui.display_hmac(FIRST_MOVE_RANGE, draw.digest)

        options = [str(i) for i in range(FIRST_MOVE_RANGE)]
        user_bit = int(self.ui.get_user_choice("Try to guess my selection.", options, allow_help=False))

        # The guess doubles as the contribution; the user wins the first move
        # exactly when it equals the committed bit.
        revealed = draw.settle(user_bit)
        self.ui.display_key_and_move(revealed.key_hex, revealed.value)
        user_goes_first = revealed.value == user_bit
        if user_goes_first:
            self.ui.display_message("You guessed it! You make the first move.")
        else:
            self.ui.display_message("I make the first move.")
        return user_goes_first

    def get_fair_roll_index(self, max_val: int, prompt: str) -> int:
        draw = self.context.draw_factory(max_val)
        self.ui.display_hmac(max_val, draw.digest)

        options = [str(i) for i in range(max_val)]
        while True:
            choice = self.ui.get_user_choice(prompt, options, allow_help=True)
            if choice != HELP:
                break
            self.context.show_help()
            self.ui.display_hmac(max_val, draw.digest)

        revealed = draw.settle(int(choice))
        self.ui.display_key_and_move(revealed.key_hex, revealed.value, name="My number")
        self.ui.display_message(
            f"The fair number generation result is "
            f"{revealed.value} + {revealed.contribution} = {revealed.result} (mod {max_val})."
        )
        return revealed.result


# ==============================================================================
# Main Game Controller
# ==============================================================================

class GameController:
    def __init__(self, context: GameContext):
        self.context = context
        self.ui = context.ui
        self.interaction = FairInteraction(context)

    def run(self, rounds: Optional[int] = None) -> list[RoundResult]:
        self.ui.display_message("--- Welcome to the Non-Transitive Dice Game! ---")
        results = []
        while True:
            results.append(self.play_round())
            if rounds is not None:
                if len(results) >= rounds:
                    break
                continue
            if not self.ui.confirm("\nPlay another round? (y/n): "):
                break
        self.ui.display_message("Thanks for playing!")
        return results

    def play_round(self) -> RoundResult:
        user_goes_first = self.interaction.determine_first_player()
        user_die, computer_die = self._select_dice(user_goes_first)

        num_faces = len(user_die)
        self.ui.display_message("\nIt's time for my throw.")
        computer_throw = computer_die.roll(
            self.interaction.get_fair_roll_index(num_faces, f"Add your number modulo {num_faces}.")
        )
        self.ui.display_message(f"My throw is {computer_throw}.")

        self.ui.display_message("\nIt's time for your throw.")
        user_throw = user_die.roll(
            self.interaction.get_fair_roll_index(num_faces, f"Add your number modulo {num_faces}.")
        )
        self.ui.display_message(f"Your throw is {user_throw}.")

        result = RoundResult(
            user_goes_first=user_goes_first,
            user_die=user_die,
            computer_die=computer_die,
            user_throw=user_throw,
            computer_throw=computer_throw,
        )
        if result.winner is Winner.USER:
            self.ui.display_message(f"You win ({user_throw} > {computer_throw})!")
        elif result.winner is Winner.COMPUTER:
            self.ui.display_message(f"I win ({computer_throw} > {user_throw})!")
        else:
            self.ui.display_message(f"It's a draw ({user_throw} = {computer_throw})!")
        logger.info("Round finished: %s", result.winner.value)
        return result

    def _select_dice(self, user_goes_first: bool) -> tuple[Die, Die]:
        available = self.context.dice.copy()
        if user_goes_first:
            user_die = self._take_player_die(available)
            computer_die = available.take(self._best_counter(available, user_die))
            self.ui.display_message(f"I choose the {computer_die} dice.")
        else:
            computer_die = available.take(secrets.randbelow(len(available)))
            self.ui.display_message(f"I make the first move and choose the {computer_die} dice.")
            user_die = self._take_player_die(available)
        self.ui.display_message(f"You choose the {user_die} dice.")
        return user_die, computer_die

    def _take_player_die(self, available: DiceSet) -> Die:
        while True:
            options = [str(d) for d in available]
            choice = self.ui.get_user_choice("Choose your dice:", options, allow_help=True)
            if choice == HELP:
                self.context.show_help()
                continue
            return available.take(int(choice))

    @staticmethod
    def _best_counter(available: DiceSet, opponent: Die) -> int:
        return max(
            range(len(available)),
            key=lambda i: ProbabilityCalculator.exact_win_probability(available[i], opponent),
        )

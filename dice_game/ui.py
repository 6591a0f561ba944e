from typing import Callable, Optional, Sequence

from .errors import GameExit

HELP = "?"
EXIT = "x"


# ==============================================================================
# Console User Interface
# ==============================================================================

class GameUI:
    """
    Prompts and messages over injectable ``input_func``/``output_func``.

    ``get_user_choice`` loops until it gets a valid option, ``?`` (when help is
    allowed) or ``X``, which raises GameExit.
    """

    def __init__(
        self,
        input_func: Optional[Callable[[str], str]] = None,
        output_func: Optional[Callable[[str], None]] = None,
    ):
        self._input = input_func or input
        self._output = output_func or print

    def display_message(self, text: str):
        self._output(text)

    def display_hmac(self, range_: int, hmac_hex: str):
        self._output(f"I selected a random value in the range 0..{range_ - 1} (HMAC={hmac_hex}).")

    def display_key_and_move(self, key_hex: str, move: int, name: str = "My selection"):
        self._output(f"{name}: {move} (KEY={key_hex}).")

    def ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def get_user_choice(self, prompt: str, options: Sequence[str], allow_help: bool = True) -> str:
        while True:
            self._output(f"\n{prompt}")
            for i, option in enumerate(options):
                self._output(f"{i} - {option}")
            self._output("X - exit")
            if allow_help:
                self._output("? - help")

            choice = self.ask("Your selection: ").lower()

            if choice == EXIT:
                raise GameExit()
            if choice == HELP and allow_help:
                return HELP

            if choice.isdecimal():
                choice_int = int(choice)
                if 0 <= choice_int < len(options):
                    return str(choice_int)

            self._output("Invalid choice. Please enter a valid number, '?', or 'X'.")

    def confirm(self, prompt: str) -> bool:
        return self.ask(prompt).lower() in ("y", "yes")

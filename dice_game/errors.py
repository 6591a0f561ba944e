class DiceGameError(Exception):
    """Base class for every error raised by the dice game."""


# ==============================================================================
# Configuration errors
# ==============================================================================

class ConfigurationError(DiceGameError):
    """
    Raised when the dice given on the command line have the wrong shape.
    Provides a formatted message including an example of correct usage.
    """
    _invocation_command = "python -m dice_game"

    @staticmethod
    def set_invocation_command(command: str):
        """Sets the command shown in the usage example (e.g., 'fair-dice')."""
        ConfigurationError._invocation_command = command

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        example = (
            f"{ConfigurationError._invocation_command} "
            f"2,2,4,4,9,9 6,8,1,1,8,6 7,5,3,7,5,3"
        )
        return f"\nArgument Error: {self.message}\n\nExample usage:\n{example}\n"


# ==============================================================================
# Fair random generation errors
# ==============================================================================

class InvalidRangeError(DiceGameError, ValueError):
    def __init__(self, range_):
        self.range = range_
        super().__init__(f"Range must be a positive integer, got {range_!r}.")


class InvalidContributionError(DiceGameError, ValueError):
    def __init__(self, contribution, range_: int):
        self.contribution = contribution
        self.range = range_
        super().__init__(
            f"Contribution must be an integer in 0..{range_ - 1}, got {contribution!r}."
        )


class MalformedCommitmentError(DiceGameError, ValueError):
    """The key or digest handed to the verifier is not structurally valid."""


class ProtocolStateError(DiceGameError):
    """A fair draw step was attempted out of order."""


class VerificationFailure(DiceGameError):
    """
    The revealed value and key do not reproduce the published digest.

    This means the committing party changed its value after the fact. It is
    fatal to the current round and must never be swallowed.
    """

    def __init__(self, value: int, digest: str):
        self.value = value
        self.digest = digest
        super().__init__(
            f"Commitment check failed: value {value} does not match HMAC {digest}."
        )


# ==============================================================================
# Console flow
# ==============================================================================

class GameExit(DiceGameError):
    """The user asked to leave the game."""


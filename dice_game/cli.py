import argparse
import logging
import sys
from typing import Optional

from . import fair_random
from .controller import GameContext, GameController
from .dice import DiceParser
from .errors import (
    ConfigurationError,
    GameExit,
    MalformedCommitmentError,
    VerificationFailure,
)
from .help_table import HelpTableGenerator
from .ui import GameUI

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_CHEATING = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fair-dice",
        description="Play non-transitive dice against the computer with provably fair throws.",
    )
    parser.add_argument("dice", nargs="*", help="Six comma-separated integers per die, e.g. 2,2,4,4,9,9")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostics written to stderr (default: WARNING)",
    )
    parser.add_argument("--rounds", type=int, default=None, help="Play this many rounds without asking")
    parser.add_argument("--table", action="store_true", help="Print the win probability table and exit")
    parser.add_argument(
        "--verify",
        nargs=3,
        metavar=("VALUE", "KEY", "HMAC"),
        default=None,
        help="Check a revealed value and key against the HMAC shown before your move",
    )
    return parser


def verify_command(value: str, key_hex: str, digest: str) -> int:
    try:
        matched = fair_random.verify(int(value), fair_random.parse_key(key_hex), digest)
    except (ValueError, MalformedCommitmentError) as e:
        print(f"Malformed input: {e}", file=sys.stderr)
        return EXIT_CONFIG
    if matched:
        print("OK: the HMAC matches the revealed value and key.")
        return EXIT_OK
    print("MISMATCH: the revealed value or key does not produce this HMAC.")
    return EXIT_CHEATING


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not sys.argv[0].endswith("__main__.py"):
        ConfigurationError.set_invocation_command(parser.prog)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.verify is not None:
        return verify_command(*args.verify)

    try:
        dice = DiceParser.parse(args.dice)
        if args.rounds is not None and args.rounds < 1:
            raise ConfigurationError("--rounds must be at least 1.")
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        return EXIT_CONFIG

    if args.table:
        print(HelpTableGenerator.for_dice(dice))
        return EXIT_OK

    controller = GameController(GameContext(dice=dice, ui=GameUI()))
    try:
        controller.run(rounds=args.rounds)
    except VerificationFailure as e:
        logger.error("Aborting round: %s", e)
        print(f"\nFairness check failed, the round is void. {e}", file=sys.stderr)
        return EXIT_CHEATING
    except (GameExit, KeyboardInterrupt, EOFError):
        print("\nGame interrupted. Goodbye!")
    return EXIT_OK

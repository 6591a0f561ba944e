"""
Fair draw: one commit-reveal round between the committing side and an opponent.

    COMMITTED -> CONTRIBUTED -> REVEALED -> VERIFIED | VERIFICATION_FAILED

The opponent's contribution is accepted only while the draw is COMMITTED, so it
is always chosen after the digest is published and before the key and value
are. Each FairDraw owns exactly one Commitment and cannot be re-run.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from . import fair_random
from .errors import (
    InvalidContributionError,
    ProtocolStateError,
    VerificationFailure,
)
from .fair_random import Commitment

logger = logging.getLogger(__name__)


class DrawState(Enum):
    COMMITTED = "committed"
    CONTRIBUTED = "contributed"
    REVEALED = "revealed"
    VERIFIED = "verified"
    VERIFICATION_FAILED = "verification_failed"


@dataclass(frozen=True)
class Reveal:
    """What the committing side discloses once the draw is settled."""
    value: int
    key_hex: str
    digest: str
    contribution: int
    result: int
    range: int


class FairDraw:
    def __init__(
        self,
        range_: int,
        generator: Callable[[int], Commitment] = fair_random.generate,
    ):
        self._commitment = generator(range_)
        self._range = range_
        self._contribution: Optional[int] = None
        self._revealed: Optional[Reveal] = None
        self._state = DrawState.COMMITTED

    @property
    def state(self) -> DrawState:
        return self._state

    @property
    def range(self) -> int:
        return self._range

    @property
    def digest(self) -> str:
        return self._commitment.digest

    def contribute(self, contribution: int) -> None:
        self._require(DrawState.COMMITTED, "contribute")
        if (
            isinstance(contribution, bool)
            or not isinstance(contribution, int)
            or not 0 <= contribution < self._range
        ):
            raise InvalidContributionError(contribution, self._range)
        self._contribution = contribution
        self._state = DrawState.CONTRIBUTED
        logger.debug("Draw %s received contribution %d", self.digest[:12], contribution)

    def reveal(self) -> Reveal:
        self._require(DrawState.CONTRIBUTED, "reveal")
        value = self._commitment.revealed_value
        result = (value + self._contribution) % self._range
        self._state = DrawState.REVEALED
        logger.debug("Draw %s revealed value %d, result %d", self.digest[:12], value, result)
        self._revealed = Reveal(
            value=value,
            key_hex=self._commitment.key_hex,
            digest=self._commitment.digest,
            contribution=self._contribution,
            result=result,
            range=self._range,
        )
        return self._revealed

    def verify(self) -> None:
        """Check the published values; raise VerificationFailure on a mismatch."""
        self._require(DrawState.REVEALED, "verify")
        published = self._revealed
        try:
            check_reveal(published)
        except VerificationFailure:
            self._state = DrawState.VERIFICATION_FAILED
            raise
        self._state = DrawState.VERIFIED

    def settle(self, contribution: int) -> Reveal:
        """Contribute, reveal and verify in one go."""
        self.contribute(contribution)
        revealed = self.reveal()
        self.verify()
        return revealed

    def _require(self, expected: DrawState, action: str) -> None:
        if self._state is not expected:
            raise ProtocolStateError(
                f"Cannot {action} a draw in state '{self._state.value}'; "
                f"expected '{expected.value}'."
            )


def check_reveal(published: Reveal) -> None:
    """Verify a reveal using only what was published to the opponent."""
    key = fair_random.parse_key(published.key_hex)
    if not fair_random.verify(published.value, key, published.digest):
        logger.error("Reveal of value %d does not match HMAC=%s", published.value, published.digest)
        raise VerificationFailure(published.value, published.digest)
    if published.result != (published.value + published.contribution) % published.range:
        logger.error("Reveal of HMAC=%s reports a wrong result", published.digest)
        raise VerificationFailure(published.value, published.digest)

"""Non-transitive dice with provably fair, commit-reveal throws."""
from .dice import Die, DiceParser, DiceSet
from .errors import (
    ConfigurationError,
    DiceGameError,
    InvalidContributionError,
    InvalidRangeError,
    MalformedCommitmentError,
    ProtocolStateError,
    VerificationFailure,
)
from .fair_random import Commitment, generate, verify
from .probability import SELF, ProbabilityMatrix, matrix, pairwise_win_probability
from .protocol import DrawState, FairDraw, Reveal

__version__ = "1.0.0"

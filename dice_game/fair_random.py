"""
Commit-reveal primitives for provably fair draws.

``generate`` picks a secret key and an unbiased value, and binds the value with
an HMAC-SHA3-256 digest that can be published before the opponent moves.
``verify`` recomputes that digest once the key and value are revealed.
"""
import hashlib
import hmac
import logging
import re
import secrets
from dataclasses import dataclass, field
from typing import Final

from .errors import InvalidRangeError, MalformedCommitmentError

logger = logging.getLogger(__name__)

KEY_BYTES: Final[int] = 32
DIGEST_HEX_LENGTH: Final[int] = hashlib.sha3_256().digest_size * 2
_HEX_DIGEST = re.compile(r"[0-9a-fA-F]{%d}" % DIGEST_HEX_LENGTH)


# ==============================================================================
# Cryptographic Operations Provider
# ==============================================================================

class CryptoProvider:
    @staticmethod
    def generate_key() -> bytes:
        return secrets.token_bytes(KEY_BYTES)

    @staticmethod
    def generate_secure_random(max_val: int) -> int:
        # randbelow rejects out-of-range samples, so there is no modulo bias.
        return secrets.randbelow(max_val)

    @staticmethod
    def calculate_hmac(key: bytes, message_int: int) -> str:
        message_bytes = str(message_int).encode("utf-8")
        h = hmac.new(key, message_bytes, hashlib.sha3_256)
        return h.hexdigest()


# ==============================================================================
# Commitment
# ==============================================================================

@dataclass(frozen=True)
class Commitment:
    """
    A single-use binding of ``revealed_value`` under ``secret_key``.

    Only ``digest`` may be shown before the opponent has contributed. The key
    is excluded from ``repr`` so it does not leak through logs.
    """
    secret_key: bytes = field(repr=False)
    revealed_value: int = field(repr=False)
    digest: str

    @property
    def key_hex(self) -> str:
        return self.secret_key.hex()


def _check_range(range_) -> int:
    if isinstance(range_, bool) or not isinstance(range_, int) or range_ <= 0:
        raise InvalidRangeError(range_)
    return range_


def generate(range_: int) -> Commitment:
    """Commit to a uniformly random integer in ``[0, range_)``."""
    _check_range(range_)
    key = CryptoProvider.generate_key()
    value = CryptoProvider.generate_secure_random(range_)
    digest = CryptoProvider.calculate_hmac(key, value)
    logger.debug("Committed to a value in range 0..%d (HMAC=%s)", range_ - 1, digest)
    return Commitment(secret_key=key, revealed_value=value, digest=digest)


def verify(revealed_value: int, secret_key: bytes, digest: str) -> bool:
    """
    Check that ``revealed_value`` under ``secret_key`` reproduces ``digest``.

    Returns False on any mismatch. Raises MalformedCommitmentError when the key
    is not at least 32 bytes or the digest is not 64 hex characters (either case).
    """
    if not isinstance(secret_key, (bytes, bytearray)) or len(secret_key) < KEY_BYTES:
        raise MalformedCommitmentError(
            f"Secret key must be at least {KEY_BYTES} bytes."
        )
    if not isinstance(digest, str) or not _HEX_DIGEST.fullmatch(digest):
        raise MalformedCommitmentError(
            f"Digest must be {DIGEST_HEX_LENGTH} hexadecimal characters."
        )
    if isinstance(revealed_value, bool) or not isinstance(revealed_value, int):
        return False

    expected = CryptoProvider.calculate_hmac(bytes(secret_key), revealed_value)
    matched = hmac.compare_digest(expected, digest.lower())
    logger.debug("Verified value %d against HMAC=%s: %s", revealed_value, digest, matched)
    return matched


def parse_key(key_hex: str) -> bytes:
    """Decode a revealed key as displayed to the user."""
    try:
        return bytes.fromhex(key_hex)
    except (TypeError, ValueError):
        raise MalformedCommitmentError("Secret key must be hexadecimal.") from None

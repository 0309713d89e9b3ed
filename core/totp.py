"""
TOTP (Time-based One-Time Password) implementation following RFC 6238.

Produces codes identical to Google Authenticator.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from core.hotp import Algorithm, GenerationRequest, generate
from core.utils import decode_secret

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
DEFAULT_ALGORITHM = Algorithm.SHA1


@dataclass(frozen=True)
class TOTPRequest:
    """Parameters of a time-based code, as entered or read from a URI."""

    secret: str                         # base32 text
    digits: int = DEFAULT_DIGITS
    algorithm: str = DEFAULT_ALGORITHM.value
    period: int = DEFAULT_PERIOD        # seconds
    timestamp: Optional[float] = None   # Unix seconds; None means "now"


def compute_counter(timestamp: Optional[float], period: int) -> int:
    """
    Return the RFC 6238 time step for ``timestamp`` (T0 is always 0).

    The timestamp is truncated to whole seconds and divided by ``period``
    rounding toward zero.
    """
    t = int(timestamp if timestamp is not None else time.time())
    steps = abs(t) // abs(period)
    return steps if (t < 0) == (period < 0) else -steps


def canonical_algorithm(name: str) -> str:
    """Upper-case an algorithm name; an empty name means SHA1."""
    if not name:
        return DEFAULT_ALGORITHM.value
    return name.upper()


def generate_totp(request: TOTPRequest) -> str:
    """
    Generate a TOTP code.

    Zero ``digits`` or ``period`` fall back to the defaults (6 digits,
    30 seconds). Errors from secret decoding and code generation propagate
    unchanged.

    Args:
        request: Secret and generation parameters.

    Returns:
        OTP string, zero-padded to ``digits`` characters.

    Raises:
        InvalidSecretEncoding: If the secret is not valid base32.
        MissingSecret:         If the secret is empty.
        InvalidAlgorithm:      If the algorithm is not supported.
        InvalidDigits:         If ``digits`` is negative.
    """
    digits = request.digits or DEFAULT_DIGITS
    period = request.period or DEFAULT_PERIOD
    counter = compute_counter(request.timestamp, period)
    logger.debug("TOTP step %d (period %ds)", counter, period)

    return generate(
        GenerationRequest(
            secret=decode_secret(request.secret),
            counter=counter,
            digits=digits,
            algorithm=canonical_algorithm(request.algorithm),
        )
    )

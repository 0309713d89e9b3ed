"""
HOTP (HMAC-based One-Time Password) implementation following RFC 4226.

This is the code generator shared by the counter-based and time-based
entry points. HMAC digests are computed with the ``cryptography`` package.
"""

import logging
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Union

from cryptography.hazmat.primitives import hashes, hmac

from core.errors import (
    HMACComputationFailed,
    InvalidAlgorithm,
    InvalidDigits,
    MissingSecret,
)

logger = logging.getLogger(__name__)

# The truncated value is 31 bits wide (max 2_147_483_647), so anything past
# ten digits only adds leading zeros.
MAX_SIGNIFICANT_DIGITS = 10

_COUNTER_MASK = 0xFFFF_FFFF_FFFF_FFFF


class Algorithm(str, Enum):
    """Supported HMAC algorithms."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"


_HASH_MAP: dict[Algorithm, type] = {
    Algorithm.SHA1: hashes.SHA1,
    Algorithm.SHA256: hashes.SHA256,
    Algorithm.SHA512: hashes.SHA512,
}


@dataclass(frozen=True)
class GenerationRequest:
    """Inputs of a single code computation."""

    secret: bytes        # raw, already decoded
    counter: int
    digits: int = 6
    algorithm: Union[Algorithm, str] = Algorithm.SHA1

    def __post_init__(self) -> None:
        if self.digits < 1:
            raise InvalidDigits(f"Digits must be a positive integer, got {self.digits}.")


def _resolve_algorithm(algorithm: Union[Algorithm, str]) -> Algorithm:
    try:
        return Algorithm(algorithm)
    except ValueError:
        raise InvalidAlgorithm(
            "invalid algorithm. Please use any one of SHA1/SHA256/SHA512"
        ) from None


def _hmac_digest(key: bytes, msg: bytes, algorithm: Algorithm) -> bytes:
    try:
        mac = hmac.HMAC(key, _HASH_MAP[algorithm]())
        mac.update(msg)
        return mac.finalize()
    except Exception as exc:
        raise HMACComputationFailed(f"unable to compute HMAC: {exc}") from exc


def _zero_pad(code: int, digits: int) -> str:
    """Render ``code`` as exactly ``digits`` decimal characters."""
    chars = []
    for _ in range(digits):
        code, digit = divmod(code, 10)
        chars.append(chr(ord("0") + digit))
    return "".join(reversed(chars))


def generate(request: GenerationRequest) -> str:
    """
    Core HOTP computation (RFC 4226 §5).

    Args:
        request: Secret, counter, digit count and algorithm.

    Returns:
        Zero-padded OTP string of exactly ``request.digits`` characters.

    Raises:
        MissingSecret:         If the secret is empty.
        InvalidAlgorithm:      If the algorithm is not SHA1/SHA256/SHA512.
        HMACComputationFailed: If the digest cannot be computed.
    """
    if not request.secret:
        raise MissingSecret("no secret key provided")

    msg = struct.pack(">Q", request.counter & _COUNTER_MASK)
    algorithm = _resolve_algorithm(request.algorithm)

    if request.digits > MAX_SIGNIFICANT_DIGITS:
        logger.warning(
            "%d digits requested; codes longer than %d only gain leading zeros",
            request.digits,
            MAX_SIGNIFICANT_DIGITS,
        )
    logger.debug(
        "Computing %d-digit %s code for counter %d",
        request.digits,
        algorithm.value,
        request.counter,
    )

    digest = _hmac_digest(request.secret, msg, algorithm)

    # Dynamic truncation
    offset = digest[-1] & 0x0F
    value = struct.unpack(">I", digest[offset : offset + 4])[0] & 0x7FFF_FFFF

    return _zero_pad(value % 10**request.digits, request.digits)


def generate_hotp(
    secret_bytes: bytes,
    counter: int,
    digits: int = 6,
    algorithm: Union[Algorithm, str] = Algorithm.SHA1,
) -> str:
    """
    Generate an HOTP code.

    Args:
        secret_bytes: Raw decoded secret bytes.
        counter:      Synchronisation counter value.
        digits:       Number of OTP digits.
        algorithm:    HMAC algorithm.

    Returns:
        Zero-padded OTP string.
    """
    return generate(
        GenerationRequest(
            secret=secret_bytes,
            counter=counter,
            digits=digits,
            algorithm=algorithm,
        )
    )

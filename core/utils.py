"""
Base32 secret helpers.
"""

import base64

from core.errors import InvalidSecretEncoding


def normalize_secret(secret: str) -> str:
    """
    Normalise a base32 secret: strip whitespace, uppercase, add padding.

    Whitespace is removed everywhere, not only at the ends, so secrets
    copied in groups ("jbsw y3dp ehpk 3pxp") are accepted.

    Args:
        secret: Raw user-supplied secret string.

    Returns:
        Uppercase base32 string padded with ``=`` to a multiple of 8.
        An empty input stays empty.
    """
    secret = "".join(secret.split()).upper()
    pad = (8 - len(secret) % 8) % 8
    return secret + "=" * pad


def decode_secret(secret: str) -> bytes:
    """
    Decode a base32-encoded secret string to raw bytes.

    Args:
        secret: Base32 secret, normalised with :func:`normalize_secret` first.

    Returns:
        Raw bytes (empty for an empty secret).

    Raises:
        InvalidSecretEncoding: On invalid base32 input.
    """
    try:
        return base64.b32decode(normalize_secret(secret))
    except ValueError as exc:
        raise InvalidSecretEncoding(f"bad secret key: {exc}") from exc


def encode_secret(raw: bytes) -> str:
    """Encode raw bytes as a base32 string (no padding)."""
    return base64.b32encode(raw).decode("ascii").rstrip("=")

"""
Parse otpauth:// URIs as defined by the Google Authenticator Key URI Format.

Reference: https://github.com/google/google-authenticator/wiki/Key-Uri-Format

Only ``totp`` credentials are understood. The label and any query keys other
than ``secret``, ``algorithm``, ``digits`` and ``period`` are ignored.
"""

import logging
import re
import urllib.parse

from core.errors import (
    MalformedIntegerParameter,
    MalformedURI,
    MissingSecretParameter,
    UnsupportedCredentialKind,
)
from core.totp import DEFAULT_DIGITS, DEFAULT_PERIOD, TOTPRequest
from core.utils import normalize_secret

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _first(params: dict[str, list[str]], key: str) -> str:
    return params.get(key, [""])[0]


def _int_param(params: dict[str, list[str]], key: str, default: int) -> int:
    value = _first(params, key)
    if not value:
        return default
    # int() alone would also take "8_0", " 8" and non-ASCII digits
    if not _INTEGER_RE.fullmatch(value):
        raise MalformedIntegerParameter(f"'{key}' must be an integer, got {value!r}.")
    return int(value)


def parse_otpauth_uri(uri: str) -> TOTPRequest:
    """
    Parse an ``otpauth://totp/...`` URI into generation parameters.

    The secret is normalised (whitespace removed, upper-cased, padded) but
    not decoded; decoding happens when a code is generated. The algorithm is
    passed through as written and may be empty. No timestamp is set.

    Args:
        uri: Full otpauth URI string.

    Returns:
        :class:`~core.totp.TOTPRequest` with the URI's parameters.

    Raises:
        MalformedURI:              If the text is not a parseable URI.
        UnsupportedCredentialKind: If the host is not ``totp``.
        MissingSecretParameter:    If ``secret`` is missing or empty.
        MalformedIntegerParameter: If ``digits`` or ``period`` is not an integer.
    """
    try:
        parsed = urllib.parse.urlsplit(uri)
    except ValueError as exc:
        raise MalformedURI(f"cannot parse URI: {exc}") from exc

    # Host without any user info
    host = parsed.netloc.rpartition("@")[2]
    if host.lower() != "totp":
        raise UnsupportedCredentialKind(
            "the only kind of the credential supported is: totp"
        )

    # First value wins for repeated keys, even when it is blank
    params = urllib.parse.parse_qs(parsed.query, keep_blank_values=True)

    raw_secret = _first(params, "secret")
    if not raw_secret:
        raise MissingSecretParameter("secret cannot be empty")

    algorithm = _first(params, "algorithm")
    digits = _int_param(params, "digits", DEFAULT_DIGITS)
    period = _int_param(params, "period", DEFAULT_PERIOD)

    logger.debug(
        "Parsed totp URI: algorithm=%r digits=%d period=%d",
        algorithm,
        digits,
        period,
    )

    return TOTPRequest(
        secret=normalize_secret(raw_secret),
        digits=digits,
        algorithm=algorithm,
        period=period,
    )

"""
Error kinds raised while generating codes or parsing provisioning URIs.

All of them derive from :class:`ValueError` because every failure here is
caused by the input, never by the environment.
"""


class OTPError(ValueError):
    """Base class for every error raised by this package."""


# ── Generation ────────────────────────────────────────────────────────────────

class MissingSecret(OTPError):
    """The secret is absent or decodes to zero bytes."""


class InvalidSecretEncoding(OTPError):
    """The secret is not valid base32 after normalisation."""


class InvalidAlgorithm(OTPError):
    """The algorithm name is not SHA1, SHA256 or SHA512."""


class InvalidDigits(OTPError):
    """The requested code length is not a positive integer."""


class HMACComputationFailed(OTPError):
    """The HMAC digest could not be computed."""


# ── Provisioning URIs ─────────────────────────────────────────────────────────

class MalformedURI(OTPError):
    """The URI text cannot be parsed at all."""


class UnsupportedCredentialKind(OTPError):
    """The URI describes something other than a TOTP credential."""


class MissingSecretParameter(OTPError):
    """The URI carries no ``secret`` query value."""


class MalformedIntegerParameter(OTPError):
    """``digits`` or ``period`` is not an integer."""

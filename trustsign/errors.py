"""Error types raised by the trustsign JWS engine."""

from __future__ import annotations


class JoseError(ValueError):
    """Base class for all signing, verification and key handling errors."""


class KeyFormatError(JoseError):
    """Key material is malformed, not EC, or not on curve P-256."""


class MalformedTokenError(JoseError):
    """Compact JWS is not three valid base64url segments."""


class SignatureFormatError(JoseError):
    """Signature blob is not a 64-byte R||S value."""


class AlgorithmMismatchError(JoseError):
    """Header ``alg`` is not the pinned algorithm."""


class SignatureInvalidError(JoseError):
    """Signature is well formed but does not verify."""


class InvalidHeaderError(JoseError):
    """Header fields supplied for signing are incomplete or invalid."""


__all__ = [
    "JoseError",
    "KeyFormatError",
    "MalformedTokenError",
    "SignatureFormatError",
    "AlgorithmMismatchError",
    "SignatureInvalidError",
    "InvalidHeaderError",
]

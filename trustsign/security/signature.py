"""Raw ES256 signatures in the fixed-length R||S form used by JOSE."""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from ..constants import COORDINATE_SIZE, SIGNATURE_SIZE
from ..errors import SignatureFormatError
from .keys import PrivateKeyLike, PublicKeyLike, as_private_key, as_public_key


def der_to_raw(der: bytes) -> bytes:
    """Convert an ASN.1 DER ECDSA signature into 64-byte R||S."""
    r, s = decode_dss_signature(der)
    return r.to_bytes(COORDINATE_SIZE, "big") + s.to_bytes(COORDINATE_SIZE, "big")


def raw_to_der(raw: bytes) -> bytes:
    """Convert a 64-byte R||S signature into ASN.1 DER."""
    if len(raw) != SIGNATURE_SIZE:
        raise SignatureFormatError(
            f"ES256 signature must be {SIGNATURE_SIZE} bytes, got {len(raw)}"
        )
    r = int.from_bytes(raw[:COORDINATE_SIZE], "big")
    s = int.from_bytes(raw[COORDINATE_SIZE:], "big")
    return encode_dss_signature(r, s)


class SignatureEngine:
    """ECDSA P-256 / SHA-256 over an arbitrary signing input.

    Callers only ever see the R||S form; DER stays inside this module.
    """

    @staticmethod
    def sign(signing_input: bytes, private_key: PrivateKeyLike) -> bytes:
        key = as_private_key(private_key)
        der = key.sign(signing_input, ec.ECDSA(hashes.SHA256()))
        return der_to_raw(der)

    @staticmethod
    def verify(
        signing_input: bytes, signature: bytes, public_key: PublicKeyLike
    ) -> bool:
        """Return whether ``signature`` is valid for ``signing_input``.

        A signature that is not exactly 64 bytes raises
        :class:`SignatureFormatError`; a mismatch returns ``False``.
        """
        der = raw_to_der(signature)
        key = as_public_key(public_key)
        try:
            key.verify(der, signing_input, ec.ECDSA(hashes.SHA256()))
        except InvalidSignature:
            return False
        return True


__all__ = ["SignatureEngine", "der_to_raw", "raw_to_der"]

"""Conversion between EC P-256 key material and its PEM, DER, raw and JWK forms."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from ..constants import ALGORITHM, COORDINATE_SIZE, CURVE_NAME, KEY_TYPE
from ..errors import JoseError, KeyFormatError
from .compact import b64u_decode, b64u_encode
from .models import Jwk, KeyPair

KeyInput = Union[str, bytes, bytearray, memoryview]
PrivateKeyLike = Union[KeyPair, ec.EllipticCurvePrivateKey]
PublicKeyLike = Union[ec.EllipticCurvePublicKey, KeyPair, ec.EllipticCurvePrivateKey]

_PEM_MARKER = b"-----BEGIN"
_SEC1_POINT_SIZES = {1 + COORDINATE_SIZE, 1 + 2 * COORDINATE_SIZE}


def _as_bytes(data: Any) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise KeyFormatError(f"unsupported key input type: {type(data).__name__}")


def _is_pem(raw: bytes) -> bool:
    return raw.lstrip().startswith(_PEM_MARKER)


def _check_curve(key: Any) -> None:
    if not isinstance(key.curve, ec.SECP256R1):
        raise KeyFormatError(f"expected curve P-256, got {key.curve.name}")


def as_private_key(key: PrivateKeyLike) -> ec.EllipticCurvePrivateKey:
    """Return the P-256 private key held by ``key``."""
    if isinstance(key, KeyPair):
        key = key.private_key
    if isinstance(key, ec.EllipticCurvePrivateKey):
        _check_curve(key)
        return key
    raise KeyFormatError(f"not an EC private key: {type(key).__name__}")


def as_public_key(key: PublicKeyLike) -> ec.EllipticCurvePublicKey:
    """Return the P-256 public key held by ``key``."""
    if isinstance(key, (KeyPair, ec.EllipticCurvePrivateKey)):
        return as_private_key(key).public_key()
    if isinstance(key, ec.EllipticCurvePublicKey):
        _check_curve(key)
        return key
    raise KeyFormatError(f"not an EC public key: {type(key).__name__}")


class KeyCodec:
    """Imports and exports ES256 key material.

    Private keys are accepted as PEM, DER (PKCS#8 or SEC1) or a raw 32-byte
    scalar.  Public keys are accepted as PEM or DER SubjectPublicKeyInfo, or
    as a raw SEC1 point.  Only unencrypted keys on P-256 are supported.
    """

    @staticmethod
    def import_private_key(data: Union[KeyInput, ec.EllipticCurvePrivateKey]) -> KeyPair:
        if isinstance(data, ec.EllipticCurvePrivateKey):
            return KeyPair(private_key=as_private_key(data))

        raw = _as_bytes(data)
        try:
            if _is_pem(raw):
                key = serialization.load_pem_private_key(raw, password=None)
            elif len(raw) == COORDINATE_SIZE:
                key = ec.derive_private_key(int.from_bytes(raw, "big"), ec.SECP256R1())
            else:
                key = serialization.load_der_private_key(raw, password=None)
        except (TypeError, ValueError, UnsupportedAlgorithm) as exc:
            raise KeyFormatError(f"unrecognized private key encoding: {exc}") from exc

        if not isinstance(key, ec.EllipticCurvePrivateKey):
            raise KeyFormatError(f"not an EC private key: {type(key).__name__}")
        return KeyPair(private_key=as_private_key(key))

    @staticmethod
    def import_public_key(
        data: Union[KeyInput, ec.EllipticCurvePublicKey]
    ) -> ec.EllipticCurvePublicKey:
        if isinstance(data, ec.EllipticCurvePublicKey):
            return as_public_key(data)

        raw = _as_bytes(data)
        if _is_pem(raw) and b"PRIVATE KEY-----" in raw:
            return KeyCodec.import_private_key(raw).public_key

        try:
            if _is_pem(raw):
                key = serialization.load_pem_public_key(raw)
            elif len(raw) in _SEC1_POINT_SIZES and raw[:1] in (b"\x02", b"\x03", b"\x04"):
                key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256R1(), raw)
            else:
                key = serialization.load_der_public_key(raw)
        except (TypeError, ValueError, UnsupportedAlgorithm) as exc:
            raise KeyFormatError(f"unrecognized public key encoding: {exc}") from exc

        if not isinstance(key, ec.EllipticCurvePublicKey):
            raise KeyFormatError(f"not an EC public key: {type(key).__name__}")
        return as_public_key(key)

    @staticmethod
    def export_public_jwk(
        public_key: PublicKeyLike,
        kid: Optional[str] = None,
        use: Optional[str] = "sig",
        alg: Optional[str] = ALGORITHM,
    ) -> Jwk:
        """Export ``public_key`` as a JWK.

        Coordinates are always written as exactly 32 big-endian bytes, so a
        point whose X or Y has leading zero bytes keeps them.
        """
        numbers = as_public_key(public_key).public_numbers()
        return Jwk(
            kty=KEY_TYPE,
            crv=CURVE_NAME,
            x=b64u_encode(numbers.x.to_bytes(COORDINATE_SIZE, "big")),
            y=b64u_encode(numbers.y.to_bytes(COORDINATE_SIZE, "big")),
            kid=kid,
            use=use,
            alg=alg,
        )

    @staticmethod
    def import_jwk(jwk: Union[Jwk, Mapping[str, Any]]) -> ec.EllipticCurvePublicKey:
        if isinstance(jwk, Jwk):
            model = jwk
        else:
            for name in ("kty", "crv"):
                if name not in jwk:
                    raise KeyFormatError(f"JWK has no {name!r} member")
            try:
                model = Jwk.model_validate(dict(jwk))
            except (TypeError, ValueError) as exc:
                raise KeyFormatError(f"invalid JWK: {exc}") from exc

        if model.kty != KEY_TYPE:
            raise KeyFormatError(f"expected kty {KEY_TYPE!r}, got {model.kty!r}")
        if model.crv != CURVE_NAME:
            raise KeyFormatError(f"expected crv {CURVE_NAME!r}, got {model.crv!r}")
        if model.alg is not None and model.alg != ALGORITHM:
            raise KeyFormatError(f"JWK is bound to algorithm {model.alg!r}")

        coordinates = []
        for name in ("x", "y"):
            try:
                value = b64u_decode(getattr(model, name))
            except JoseError as exc:
                raise KeyFormatError(f"JWK {name} is not base64url") from exc
            if len(value) != COORDINATE_SIZE:
                raise KeyFormatError(
                    f"JWK {name} must be {COORDINATE_SIZE} bytes, got {len(value)}"
                )
            coordinates.append(int.from_bytes(value, "big"))

        try:
            return ec.EllipticCurvePublicNumbers(
                coordinates[0], coordinates[1], ec.SECP256R1()
            ).public_key()
        except ValueError as exc:
            raise KeyFormatError(f"JWK point is not on P-256: {exc}") from exc


__all__ = ["KeyCodec", "as_private_key", "as_public_key"]

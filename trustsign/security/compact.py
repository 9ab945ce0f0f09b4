"""Compact JWS serialization and unpadded base64url helpers."""

from __future__ import annotations

import base64
import binascii
import re
from typing import Tuple

from pydantic import BaseModel, ConfigDict

from ..errors import MalformedTokenError

_B64U_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def b64u_encode(data: bytes) -> str:
    """Base64url encode without padding (RFC 4648 section 5)."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64u_decode(segment: str) -> bytes:
    """Strictly decode unpadded base64url.

    Padding, characters outside the URL-safe alphabet and encodings whose
    unused trailing bits are not zero are rejected, so every byte string has
    exactly one accepted text form.
    """
    if not isinstance(segment, str) or not _B64U_ALPHABET.fullmatch(segment):
        raise MalformedTokenError("segment is not unpadded base64url")
    if len(segment) % 4 == 1:
        raise MalformedTokenError("segment has an impossible base64url length")
    try:
        data = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
    except binascii.Error as exc:
        raise MalformedTokenError(f"segment is not valid base64url: {exc}") from exc
    if b64u_encode(data) != segment:
        raise MalformedTokenError("segment is not canonical base64url")
    return data


class JwsMessage(BaseModel):
    """Decoded segments of a compact JWS."""

    header: bytes
    payload: bytes
    signature: bytes

    model_config = ConfigDict(frozen=True)

    @property
    def signing_input(self) -> bytes:
        """``b64u(header) + "." + b64u(payload)`` as ASCII bytes."""
        return f"{b64u_encode(self.header)}.{b64u_encode(self.payload)}".encode("ascii")


class CompactSerializer:
    """Encodes and decodes the ``header.payload.signature`` form."""

    SEPARATOR = "."

    @staticmethod
    def encode(header: bytes, payload: bytes, signature: bytes) -> str:
        return CompactSerializer.SEPARATOR.join(
            b64u_encode(part) for part in (header, payload, signature)
        )

    @staticmethod
    def split(token: str) -> Tuple[str, str, str]:
        """Split ``token`` into its three text segments without decoding."""
        if not isinstance(token, str):
            raise MalformedTokenError("compact JWS must be a string")
        parts = token.split(CompactSerializer.SEPARATOR)
        if len(parts) != 3:
            raise MalformedTokenError(
                f"compact JWS must have 3 segments, got {len(parts)}"
            )
        return parts[0], parts[1], parts[2]

    @staticmethod
    def decode(token: str) -> JwsMessage:
        header, payload, signature = CompactSerializer.split(token)
        return JwsMessage(
            header=b64u_decode(header),
            payload=b64u_decode(payload),
            signature=b64u_decode(signature),
        )


__all__ = ["CompactSerializer", "JwsMessage", "b64u_decode", "b64u_encode"]

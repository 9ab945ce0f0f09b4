"""JWS signing and verification services."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Tuple, Union

from ..constants import ALGORITHM
from ..errors import (
    AlgorithmMismatchError,
    InvalidHeaderError,
    MalformedTokenError,
    SignatureInvalidError,
)
from .compact import CompactSerializer, JwsMessage
from .keys import PrivateKeyLike, PublicKeyLike
from .models import JwsHeader, VerifiedJws
from .signature import SignatureEngine

logger = logging.getLogger(__name__)

HeaderInput = Union[JwsHeader, Mapping[str, Any]]


def encode_header(fields: Mapping[str, Any]) -> bytes:
    """Serialize header fields to compact UTF-8 JSON."""
    return json.dumps(dict(fields), separators=(",", ":"), ensure_ascii=False).encode(
        "utf-8"
    )


class JwsService:
    """Signs and verifies payloads as compact ES256 JSON Web Signatures.

    The protected header is serialized exactly once when signing and the
    signature covers those bytes.  Verification works on the decoded bytes
    from the token and never re-serializes parsed JSON, so extra header
    members survive untouched.  The algorithm is pinned to ``ES256`` on
    both sides.  Instances hold no mutable state and may be shared between
    threads.
    """

    algorithm = ALGORITHM

    def __init__(
        self,
        serializer: type[CompactSerializer] = CompactSerializer,
        engine: type[SignatureEngine] = SignatureEngine,
    ) -> None:
        self.serializer = serializer
        self.engine = engine

    def _header_fields(self, header: HeaderInput) -> Dict[str, Any]:
        if isinstance(header, JwsHeader):
            fields = header.to_fields()
        else:
            fields = dict(header)
            fields.setdefault("alg", self.algorithm)

        if fields["alg"] != self.algorithm:
            raise AlgorithmMismatchError(
                f"cannot sign with alg {fields['alg']!r}, only {self.algorithm} is supported"
            )
        for name in ("typ", "kid"):
            if not isinstance(fields.get(name), str):
                raise InvalidHeaderError(f"header field {name!r} must be a string")
        return fields

    def sign(self, header: HeaderInput, payload: bytes, private_key: PrivateKeyLike) -> str:
        """Sign ``payload`` and return the compact JWS."""
        header_bytes = encode_header(self._header_fields(header))
        message = JwsMessage(header=header_bytes, payload=bytes(payload), signature=b"")
        signature = self.engine.sign(message.signing_input, private_key)
        logger.debug(
            f"Signed {len(message.payload)} payload bytes with {len(header_bytes)} header bytes"
        )
        return self.serializer.encode(message.header, message.payload, signature)

    def _parse_header(self, header: bytes) -> Dict[str, Any]:
        try:
            fields = json.loads(header.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise MalformedTokenError(f"protected header is not UTF-8 JSON: {exc}") from exc
        if not isinstance(fields, dict):
            raise MalformedTokenError("protected header must be a JSON object")
        if "alg" not in fields:
            raise MalformedTokenError("protected header has no 'alg' member")
        return fields

    def verify(self, token: str, public_key: PublicKeyLike) -> Tuple[Dict[str, Any], bytes]:
        """Verify ``token`` and return ``(header_fields, payload_bytes)``.

        Raises:
            MalformedTokenError: the token or its header cannot be decoded.
            AlgorithmMismatchError: the header names an algorithm other than ES256.
            SignatureFormatError: the signature is not 64 bytes.
            SignatureInvalidError: the signature does not match.
        """
        message = self.serializer.decode(token)
        fields = self._parse_header(message.header)

        if fields["alg"] != self.algorithm:
            raise AlgorithmMismatchError(
                f"token alg {fields['alg']!r} does not match pinned {self.algorithm}"
            )

        if not self.engine.verify(message.signing_input, message.signature, public_key):
            raise SignatureInvalidError("JWS signature verification failed")

        logger.debug(f"Verified JWS for kid={fields.get('kid')}")
        return fields, message.payload

    def verify_message(self, token: str, public_key: PublicKeyLike) -> VerifiedJws:
        """Like :meth:`verify` but returns a :class:`VerifiedJws`."""
        fields, payload = self.verify(token, public_key)
        return VerifiedJws(header=fields, payload=payload)


__all__ = ["JwsService", "encode_header"]

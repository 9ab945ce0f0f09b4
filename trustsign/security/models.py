"""Key, header and message models used by the JWS engine."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from cryptography.hazmat.primitives.asymmetric import ec
from pydantic import BaseModel, ConfigDict, Field

from ..constants import ALGORITHM, COORDINATE_SIZE, CURVE_NAME, KEY_TYPE


class JwsHeader(BaseModel):
    """Protected header of a compact JWS.

    ``alg``, ``typ`` and ``kid`` are always present.  Any additional members
    are kept as-is and serialized after the required ones.
    """

    alg: str = ALGORITHM
    typ: str
    kid: str

    model_config = ConfigDict(extra="allow", frozen=True)

    def to_fields(self) -> Dict[str, Any]:
        """Return the header as a plain mapping in serialization order."""
        return self.model_dump()


class Jwk(BaseModel):
    """Public EC key in JSON Web Key form."""

    kty: str = KEY_TYPE
    crv: str = CURVE_NAME
    x: str = Field(..., description="base64url big-endian X coordinate")
    y: str = Field(..., description="base64url big-endian Y coordinate")
    kid: Optional[str] = None
    use: Optional[str] = None
    alg: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> Dict[str, str]:
        return self.model_dump(exclude_none=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class KeyPair(BaseModel):
    """ECDSA P-256 private key together with its public half."""

    private_key: ec.EllipticCurvePrivateKey

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def public_key(self) -> ec.EllipticCurvePublicKey:
        return self.private_key.public_key()

    @property
    def d(self) -> int:
        return self.private_key.private_numbers().private_value

    @property
    def x(self) -> bytes:
        return self.public_key.public_numbers().x.to_bytes(COORDINATE_SIZE, "big")

    @property
    def y(self) -> bytes:
        return self.public_key.public_numbers().y.to_bytes(COORDINATE_SIZE, "big")


class VerifiedJws(BaseModel):
    """Result of a successful verification."""

    header: Dict[str, Any] = Field(default_factory=dict)
    payload: bytes

    model_config = ConfigDict(frozen=True)

    @property
    def kid(self) -> Optional[str]:
        return self.header.get("kid")

    def payload_json(self) -> Any:
        """Parse the payload as UTF-8 JSON."""
        return json.loads(self.payload.decode("utf-8"))

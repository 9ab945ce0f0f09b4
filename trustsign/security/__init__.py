"""ES256 compact JWS engine."""

from .compact import CompactSerializer, JwsMessage, b64u_decode, b64u_encode
from .jws import JwsService
from .keys import KeyCodec
from .models import Jwk, JwsHeader, KeyPair, VerifiedJws
from .provider import KeyProvider, load_private_key, load_public_key
from .signature import SignatureEngine

__all__ = [
    "CompactSerializer",
    "Jwk",
    "JwsHeader",
    "JwsMessage",
    "JwsService",
    "KeyCodec",
    "KeyPair",
    "KeyProvider",
    "SignatureEngine",
    "VerifiedJws",
    "b64u_decode",
    "b64u_encode",
    "load_private_key",
    "load_public_key",
]

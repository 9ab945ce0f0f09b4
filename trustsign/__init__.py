"""trustsign: ES256 compact JWS signing and verification for trust lists."""

from .constants import ALGORITHM
from .errors import (
    AlgorithmMismatchError,
    InvalidHeaderError,
    JoseError,
    KeyFormatError,
    MalformedTokenError,
    SignatureFormatError,
    SignatureInvalidError,
)
from .security import (
    CompactSerializer,
    Jwk,
    JwsHeader,
    JwsService,
    KeyCodec,
    KeyPair,
    KeyProvider,
    SignatureEngine,
)
from .trustlist import TrustListSigner, verify_trust_list

__version__ = "0.1.0"
__all__ = [
    "ALGORITHM",
    "AlgorithmMismatchError",
    "CompactSerializer",
    "InvalidHeaderError",
    "JoseError",
    "Jwk",
    "JwsHeader",
    "JwsService",
    "KeyCodec",
    "KeyFormatError",
    "KeyPair",
    "KeyProvider",
    "MalformedTokenError",
    "SignatureEngine",
    "SignatureFormatError",
    "SignatureInvalidError",
    "TrustListSigner",
    "verify_trust_list",
]

"""Key management utilities for signing and verification."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from cryptography.hazmat.primitives.asymmetric import ec

from ..errors import KeyFormatError
from .keys import KeyCodec
from .models import KeyPair

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_private_key(path: PathLike) -> KeyPair:
    """Load a PEM or DER EC private key from ``path``."""
    path = Path(path)
    key = KeyCodec.import_private_key(path.read_bytes())
    logger.debug(f"Loaded signing key from {path}")
    return key


def load_public_key(path: PathLike) -> ec.EllipticCurvePublicKey:
    """Load a public key from a PEM, DER or ``.json`` JWK file."""
    path = Path(path)
    raw = path.read_bytes()
    if path.suffix.lower() == ".json":
        try:
            jwk = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise KeyFormatError(f"{path} is not a JSON JWK: {exc}") from exc
        if not isinstance(jwk, dict):
            raise KeyFormatError(f"{path} does not contain a JWK object")
        key = KeyCodec.import_jwk(jwk)
    else:
        key = KeyCodec.import_public_key(raw)
    logger.debug(f"Loaded verification key from {path}")
    return key


class KeyProvider:
    """Provides the signing key and verification key from files.

    Keys are read lazily on first use and kept for later calls.
    """

    def __init__(
        self,
        private_key_path: Optional[PathLike] = None,
        public_key_path: Optional[PathLike] = None,
    ) -> None:
        self.private_key_path = Path(private_key_path) if private_key_path else None
        self.public_key_path = Path(public_key_path) if public_key_path else None
        self._signing_key: Optional[KeyPair] = None
        self._verification_key: Optional[ec.EllipticCurvePublicKey] = None

    def get_signing_key(self) -> KeyPair:
        """Return the private key used for signing."""
        if self._signing_key is None:
            if self.private_key_path is None:
                raise KeyFormatError("no private key path configured")
            self._signing_key = load_private_key(self.private_key_path)
        return self._signing_key

    def get_verification_key(self) -> ec.EllipticCurvePublicKey:
        """Return the public key, falling back to the private key's public half."""
        if self._verification_key is None:
            if self.public_key_path is not None:
                self._verification_key = load_public_key(self.public_key_path)
            else:
                self._verification_key = self.get_signing_key().public_key
        return self._verification_key

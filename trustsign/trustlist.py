"""Signing, verifying and publishing keys for trust list documents."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field

from .config import TrustSignConfig, load_config
from .errors import JoseError
from .security import Jwk, JwsHeader, JwsService, KeyCodec, KeyProvider, VerifiedJws

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def encode_trust_list(document: Any) -> bytes:
    """Serialize a trust list document to compact UTF-8 JSON payload bytes."""
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def load_trust_list(path: PathLike) -> bytes:
    """Read a trust list JSON file and return its payload bytes."""
    with open(path, encoding="utf-8") as f:
        document = json.load(f)
    return encode_trust_list(document)


class SignedTrustList(BaseModel):
    """Outcome of signing a trust list."""

    token: str
    header: Dict[str, Any] = Field(default_factory=dict)
    output_path: Optional[Path] = None

    @property
    def length(self) -> int:
        return len(self.token)


class TrustListSigner:
    """Signs trust lists and exports the signer's public JWK."""

    def __init__(
        self,
        key_provider: KeyProvider,
        kid: str,
        typ: str,
        service: Optional[JwsService] = None,
    ) -> None:
        self.key_provider = key_provider
        self.kid = kid
        self.typ = typ
        self.service = service or JwsService()

    @classmethod
    def from_config(cls, config: Optional[TrustSignConfig] = None) -> "TrustListSigner":
        config = config or load_config()
        provider = KeyProvider(
            private_key_path=config.signer.private_key_path,
            public_key_path=config.signer.public_key_path,
        )
        return cls(provider, kid=config.signer.kid, typ=config.signer.typ)

    @property
    def header(self) -> JwsHeader:
        return JwsHeader(typ=self.typ, kid=self.kid)

    def sign(self, payload: bytes, output_path: Optional[PathLike] = None) -> SignedTrustList:
        """Sign ``payload`` and optionally write the compact JWS to ``output_path``."""
        header = self.header
        token = self.service.sign(header, payload, self.key_provider.get_signing_key())
        result = SignedTrustList(token=token, header=header.to_fields())

        if output_path is not None:
            output = Path(output_path)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(token, encoding="utf-8")
            result = result.model_copy(update={"output_path": output})
            logger.info(f"Signed trust list written to {output} ({len(token)} characters)")
        return result

    def sign_file(
        self, source_path: PathLike, output_path: Optional[PathLike] = None
    ) -> SignedTrustList:
        return self.sign(load_trust_list(source_path), output_path=output_path)

    def export_jwk(self, output_path: Optional[PathLike] = None) -> Jwk:
        """Export the verification key as a JWK, optionally writing it as JSON."""
        jwk = KeyCodec.export_public_jwk(self.key_provider.get_verification_key(), kid=self.kid)
        if output_path is not None:
            output = Path(output_path)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(jwk.to_json(indent=2), encoding="utf-8")
            logger.info(f"Public key JWK exported to {output}")
        return jwk

    def verify(self, token: str) -> VerifiedJws:
        """Verify a signed trust list against the configured verification key."""
        return verify_trust_list(token, self.key_provider.get_verification_key(), self.service)


def verify_trust_list(
    token: str, public_key: Any, service: Optional[JwsService] = None
) -> VerifiedJws:
    """Verify ``token`` and return the header and payload.

    Errors are logged and re-raised to the caller.
    """
    service = service or JwsService()
    try:
        verified = service.verify_message(token.strip(), public_key)
    except JoseError as exc:
        logger.warning(f"Rejected signed trust list: {exc}")
        raise
    logger.info(f"Verified signed trust list for kid={verified.kid}")
    return verified

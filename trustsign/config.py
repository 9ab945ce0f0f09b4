"""Configuration loading for trustsign."""

from __future__ import annotations

import os
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from .constants import DEFAULT_KID, DEFAULT_TYP


class SignerConfig(BaseModel):
    """Signing identity and key locations."""

    kid: str = DEFAULT_KID
    typ: str = DEFAULT_TYP
    private_key_path: str = "keys/trust-list-signer.pem"
    public_key_path: str = "keys/trust-list-signer.pub.pem"
    jwk_path: str = "keys/trust-list-signer.jwk.json"


class TrustListConfig(BaseModel):
    """Trust list source document and signed output."""

    source_path: str = "trust-lists/gym-members.json"
    output_path: str = "trust-lists/gym-members.jws"


class TrustSignConfig(BaseModel):
    """Top-level configuration model."""

    signer: SignerConfig = Field(default_factory=SignerConfig)
    trust_list: TrustListConfig = Field(default_factory=TrustListConfig)


def load_config(path: Optional[str] = None) -> TrustSignConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to TRUSTSIGN_CONFIG env
            variable or 'trustsign.yaml' in the current directory.
    """

    config_path = path or os.getenv("TRUSTSIGN_CONFIG", "trustsign.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = TrustSignConfig(**data)
    else:
        config = TrustSignConfig()

    env_kid = os.getenv("TRUSTSIGN_KID")
    if env_kid:
        config.signer.kid = env_kid
    env_private_key = os.getenv("TRUSTSIGN_PRIVATE_KEY")
    if env_private_key:
        config.signer.private_key_path = env_private_key
    env_public_key = os.getenv("TRUSTSIGN_PUBLIC_KEY")
    if env_public_key:
        config.signer.public_key_path = env_public_key
    return config

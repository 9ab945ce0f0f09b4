"""Shared key fixtures.

Keys are derived from fixed scalars so every run signs with the same pair.
"""

from itertools import count

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from trustsign.security import KeyPair

SIGNER_SCALAR = 0x1F2E3D4C5B6A79880102030405060708090A0B0C0D0E0F101112131415161718
OTHER_SCALAR = 0x0A1B2C3D4E5F60718293A4B5C6D7E8F90112233445566778899AABBCCDDEEFF0


def key_from_scalar(scalar: int) -> KeyPair:
    return KeyPair(private_key=ec.derive_private_key(scalar, ec.SECP256R1()))


def find_key(predicate) -> KeyPair:
    """Return the first key with a small scalar whose public point matches ``predicate``."""
    for scalar in count(2):
        key = key_from_scalar(scalar)
        if predicate(key.public_key.public_numbers()):
            return key
    raise AssertionError("unreachable")


def private_pem(key: KeyPair) -> bytes:
    return key.private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )


def public_pem(key: KeyPair) -> bytes:
    return key.public_key.public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )


@pytest.fixture
def signer_key() -> KeyPair:
    return key_from_scalar(SIGNER_SCALAR)


@pytest.fixture
def other_key() -> KeyPair:
    return key_from_scalar(OTHER_SCALAR)


@pytest.fixture
def key_files(tmp_path, signer_key):
    """Write the signer key pair as PEM files and return their paths."""
    keys_dir = tmp_path / "keys"
    keys_dir.mkdir()
    private_path = keys_dir / "trust-list-signer.pem"
    public_path = keys_dir / "trust-list-signer.pub.pem"
    private_path.write_bytes(private_pem(signer_key))
    public_path.write_bytes(public_pem(signer_key))
    return private_path, public_path

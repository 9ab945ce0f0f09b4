"""Cross-implementation vectors against PyJWT."""

import jwt
from jwt.api_jws import PyJWS

from conftest import find_key
from trustsign.security import JwsService, KeyCodec

HEADER = {"alg": "ES256", "typ": "trustlist+jwt", "kid": "k1"}
PAYLOAD = b'{"version":1,"members":["a","b"]}'


def test_pyjwt_verifies_our_token(signer_key):
    token = JwsService().sign(HEADER, PAYLOAD, signer_key)

    assert PyJWS().decode(token, key=signer_key.public_key, algorithms=["ES256"]) == PAYLOAD
    assert jwt.get_unverified_header(token) == HEADER


def test_we_verify_pyjwt_token(signer_key):
    token = PyJWS().encode(
        PAYLOAD,
        signer_key.private_key,
        algorithm="ES256",
        headers={"typ": "trustlist+jwt", "kid": "k1"},
    )

    header, payload = JwsService().verify(token, signer_key.public_key)
    assert header == HEADER
    assert payload == PAYLOAD


def test_pyjwt_imports_our_padded_jwk():
    key = find_key(lambda numbers: numbers.x < (1 << 248))
    jwk = KeyCodec.export_public_jwk(key.public_key, kid="k1")

    imported = jwt.algorithms.ECAlgorithm.from_jwk(jwk.to_json())
    assert imported.public_numbers() == key.public_key.public_numbers()

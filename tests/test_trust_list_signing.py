"""End-to-end trust list signing and verification."""

import json

import pytest

from trustsign.errors import MalformedTokenError, SignatureInvalidError
from trustsign.security import JwsService, KeyCodec, KeyProvider
from trustsign.trustlist import (
    TrustListSigner,
    encode_trust_list,
    load_trust_list,
    verify_trust_list,
)

HEADER = {"alg": "ES256", "typ": "trustlist+jwt", "kid": "k1"}
PAYLOAD = b'{"version":1,"members":["a","b"]}'


def test_trust_list_scenario(signer_key):
    service = JwsService()
    token = service.sign(HEADER, PAYLOAD, signer_key)

    header, payload = service.verify(token, signer_key.public_key)
    assert header == HEADER
    assert payload == PAYLOAD

    header_segment, payload_segment, signature_segment = token.split(".")
    swapped = f"{payload_segment}.{header_segment}.{signature_segment}"
    with pytest.raises((MalformedTokenError, SignatureInvalidError)):
        service.verify(swapped, signer_key.public_key)


def test_encode_trust_list_matches_compact_json():
    document = {"version": 1, "members": ["a", "b"], "name": "Gym Ünited"}
    assert encode_trust_list(document) == '{"version":1,"members":["a","b"],"name":"Gym Ünited"}'.encode("utf-8")


def test_load_trust_list_normalizes_formatting(tmp_path):
    path = tmp_path / "members.json"
    path.write_text(json.dumps({"version": 1, "members": ["a", "b"]}, indent=4))
    assert load_trust_list(path) == PAYLOAD


def test_signer_signs_file_and_exports_jwk(tmp_path, key_files, signer_key):
    private_path, public_path = key_files
    source = tmp_path / "members.json"
    source.write_text(json.dumps({"version": 1, "members": ["a", "b"]}, indent=2))

    signer = TrustListSigner(
        KeyProvider(private_path, public_path), kid="trust-list-signer-2025", typ="trustlist+jwt"
    )
    result = signer.sign_file(source, output_path=tmp_path / "out" / "members.jws")

    assert result.output_path.read_text() == result.token
    assert result.header == {
        "alg": "ES256",
        "typ": "trustlist+jwt",
        "kid": "trust-list-signer-2025",
    }
    assert result.length == len(result.token)

    jwk = signer.export_jwk(output_path=tmp_path / "signer.jwk.json")
    written = json.loads((tmp_path / "signer.jwk.json").read_text())
    assert written == jwk.to_dict()
    assert written["kid"] == "trust-list-signer-2025"

    verified = verify_trust_list(result.token, KeyCodec.import_jwk(written))
    assert verified.payload == PAYLOAD
    assert verified.payload_json() == {"version": 1, "members": ["a", "b"]}
    assert signer.verify(result.token + "\n").kid == "trust-list-signer-2025"


def test_verify_trust_list_logs_and_reraises(signer_key, other_key, caplog):
    token = JwsService().sign(HEADER, PAYLOAD, signer_key)
    with caplog.at_level("WARNING", logger="trustsign.trustlist"):
        with pytest.raises(SignatureInvalidError):
            verify_trust_list(token, other_key.public_key)
    assert "Rejected signed trust list" in caplog.text

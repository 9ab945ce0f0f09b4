"""Command line interface for signing and verifying trust lists."""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn, Optional

import typer

from trustsign.config import load_config
from trustsign.errors import JoseError
from trustsign.security import KeyProvider, load_public_key
from trustsign.trustlist import TrustListSigner, verify_trust_list

app = typer.Typer(help="CLI for signing trust lists as ES256 JWS")


@app.callback()
def main() -> None:
    """trustsign CLI entry point."""
    pass


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED)
    raise typer.Exit(code=1)


@app.command("sign")
def sign(
    trust_list: Optional[Path] = typer.Option(None, help="Trust list JSON to sign"),
    key: Optional[Path] = typer.Option(None, help="PEM or DER private key"),
    output: Optional[Path] = typer.Option(None, help="Where to write the compact JWS"),
    kid: Optional[str] = typer.Option(None, help="Key identifier for the header"),
    typ: Optional[str] = typer.Option(None, help="Header typ value"),
) -> None:
    """
    Sign a trust list document as a compact JWS.

    Options fall back to the loaded configuration (trustsign.yaml or
    TRUSTSIGN_CONFIG).

    Example:
        trustsign sign --trust-list trust-lists/gym-members.json --key keys/signer.pem
    """
    config = load_config()
    provider = KeyProvider(private_key_path=key or config.signer.private_key_path)
    signer = TrustListSigner(
        provider, kid=kid or config.signer.kid, typ=typ or config.signer.typ
    )
    source = trust_list or Path(config.trust_list.source_path)
    destination = output or Path(config.trust_list.output_path)

    try:
        result = signer.sign_file(source, output_path=destination)
    except (JoseError, OSError, ValueError) as exc:
        _fail(f"Signing failed: {exc}")

    typer.echo(f"Signed trust list created: {result.output_path}")
    typer.echo("")
    typer.echo(f"JWS Header: {json.dumps(result.header, indent=2)}")
    typer.echo("")
    typer.echo(f"JWS Length: {result.length} characters")


@app.command("export-jwk")
def export_jwk(
    public_key: Optional[Path] = typer.Option(None, help="PEM or DER public key"),
    output: Optional[Path] = typer.Option(None, help="Where to write the JWK JSON"),
    kid: Optional[str] = typer.Option(None, help="Key identifier for the JWK"),
) -> None:
    """Export the signer's public key as a JWK with use=sig and alg=ES256."""
    config = load_config()
    provider = KeyProvider(public_key_path=public_key or config.signer.public_key_path)
    signer = TrustListSigner(provider, kid=kid or config.signer.kid, typ=config.signer.typ)
    destination = output or Path(config.signer.jwk_path)

    try:
        jwk = signer.export_jwk(output_path=destination)
    except (JoseError, OSError) as exc:
        _fail(f"JWK export failed: {exc}")

    typer.echo(f"Public key JWK exported: {destination}")
    typer.echo(jwk.to_json(indent=2))


@app.command("verify")
def verify(
    jws_file: Path,
    public_key: Optional[Path] = typer.Option(None, help="PEM or DER public key"),
    jwk: Optional[Path] = typer.Option(None, help="JWK JSON file"),
) -> None:
    """Verify a compact JWS file and print its header and payload."""
    if public_key and jwk:
        _fail("Use either --public-key or --jwk, not both")

    config = load_config()
    key_path = jwk or public_key or Path(config.signer.public_key_path)

    try:
        key = load_public_key(key_path)
        verified = verify_trust_list(jws_file.read_text(encoding="utf-8"), key)
    except (JoseError, OSError, ValueError) as exc:
        _fail(f"Verification failed: {exc}")

    typer.echo(f"JWS Header: {json.dumps(verified.header, indent=2)}")
    typer.echo(f"Payload: {verified.payload.decode('utf-8', errors='replace')}")
    typer.echo("Signature valid")


if __name__ == "__main__":
    app()

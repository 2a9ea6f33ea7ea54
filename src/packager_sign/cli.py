"""CLI entry point for packager-sign."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from packager_sign.config import PRIVATE_KEY_ENV, PRIVATE_KEY_PASSWORD_ENV
from packager_sign.errors import IoWithPath, SigningError
from packager_sign.keys import generate_key, save_keypair, unlocked_secret_key
from packager_sign.models import SigningConfig
from packager_sign.sign import sign_file_with_secret_key

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fail(exc: Exception) -> NoReturn:
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


def _signing_config(
    private_key: str | None,
    private_key_path: Path | None,
    password: str | None,
) -> SigningConfig:
    if private_key and private_key_path:
        raise click.UsageError(
            "--private-key and --private-key-path are mutually exclusive."
        )
    if private_key_path is not None:
        try:
            private_key = private_key_path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            _fail(IoWithPath(private_key_path, exc))
    if not private_key:
        raise click.UsageError(
            f"A private key is required: use --private-key, --private-key-path "
            f"or set {PRIVATE_KEY_ENV}."
        )
    config = SigningConfig.new().with_private_key(private_key)
    if password is not None:
        config = config.with_password(password)
    return config


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="packager-sign")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """packager-sign: signing keys and detached signatures for release artifacts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command("generate")
@click.option(
    "--path",
    "-p",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="PATH",
    help="Write the secret key to PATH and the public key to PATH.pub.",
)
@click.option(
    "--password",
    default=None,
    help="Password for the secret key (empty for none). Prompted if omitted.",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing secret key.")
def generate_command(path: Path | None, password: str | None, force: bool) -> None:
    """Generate a new signing key pair."""
    try:
        keypair = generate_key(password)
        if path is None:
            click.echo(f"Private key: {keypair.secret_key}")
            click.echo(f"Public key : {keypair.public_key}")
            return
        sk_path, pk_path = save_keypair(keypair, path, force)
    except SigningError as exc:
        _fail(exc)

    click.echo("Key pair generated")
    click.echo(f"  Private: {sk_path}")
    click.echo(f"  Public : {pk_path}")
    click.echo("Keep the private key secret; it is needed to sign every release.")


@main.command("sign")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(path_type=Path),
)
@click.option(
    "--private-key",
    "-k",
    envvar=PRIVATE_KEY_ENV,
    default=None,
    help=f"Base64 encoded secret key (or set {PRIVATE_KEY_ENV}).",
)
@click.option(
    "--private-key-path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    metavar="PATH",
    help="Read the secret key from PATH.",
)
@click.option(
    "--password",
    envvar=PRIVATE_KEY_PASSWORD_ENV,
    default=None,
    help=f"Secret key password (or set {PRIVATE_KEY_PASSWORD_ENV}). Prompted if omitted.",
)
def sign_command(
    files: tuple[Path, ...],
    private_key: str | None,
    private_key_path: Path | None,
    password: str | None,
) -> None:
    """Write a detached FILE.sig signature next to each FILE."""
    config = _signing_config(private_key, private_key_path, password)

    try:
        with unlocked_secret_key(config.private_key, config.password) as secret_key:
            for file in files:
                signature_path, signature = sign_file_with_secret_key(secret_key, file)
                click.echo(f"Signed {file}")
                click.echo(f"  Signature file: {signature_path}")
                click.echo(f"  Signature     : {signature}")
    except SigningError as exc:
        _fail(exc)


if __name__ == "__main__":
    main()

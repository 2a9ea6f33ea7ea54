"""packager-sign quickstart: working demonstrations of the main features.

Run this file directly to verify your installation:

    python examples/quickstart.py

Each demo function is self-contained and creates temporary files in the system
temp directory, cleaning up after itself.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import minisign

from packager_sign import (
    KdfConfig,
    SigningConfig,
    SigningKeyExists,
    WrongPassword,
    decode_base64_text,
    generate_key,
    save_keypair,
    sign_file,
)

# Cheap scrypt limits so the demo runs quickly; use the defaults for real keys.
DEMO_KDF = KdfConfig(opslimit=32_768, memlimit=16_777_216)


# ---------------------------------------------------------------------------
# Demo 1: generate, save and sign
# ---------------------------------------------------------------------------

def demo_generate_and_sign() -> None:
    """Generate a password-protected key pair and sign a release artifact."""

    print("\n=== Demo 1: Generate & Sign ===")

    with tempfile.TemporaryDirectory() as tmpdir:
        tmp = Path(tmpdir)

        keypair = generate_key("demo-password", kdf=DEMO_KDF)
        sk_path, pk_path = save_keypair(keypair, tmp / "keys" / "release.key")
        print(f"  Secret key: {sk_path}")
        print(f"  Public key: {pk_path}")

        artifact = tmp / "dist" / "app.exe"
        artifact.parent.mkdir()
        artifact.write_bytes(b"MZ" + b"\x00" * 1024)

        config = (
            SigningConfig.new()
            .with_private_key(sk_path.read_text(encoding="utf-8"))
            .with_password("demo-password")
        )
        signature_path, signature = sign_file(config, artifact)
        box = minisign.Signature.from_bytes(decode_base64_text(signature).encode())
        print(f"  Signature : {signature_path}")
        print(f"  Prehashed : {box.is_prehashed()}")
        print(f"  Trusted   : {box.trusted_comment!r}")


# ---------------------------------------------------------------------------
# Demo 2: safety checks
# ---------------------------------------------------------------------------

def demo_safety_checks() -> None:
    """Show the overwrite guard and the wrong-password error."""

    print("\n=== Demo 2: Safety Checks ===")

    with tempfile.TemporaryDirectory() as tmpdir:
        key_path = Path(tmpdir) / "release.key"
        save_keypair(generate_key(""), key_path)

        try:
            save_keypair(generate_key(""), key_path)
        except SigningKeyExists as exc:
            print(f"  Refused overwrite: {exc}")

        keypair = generate_key("right", kdf=DEMO_KDF)
        artifact = Path(tmpdir) / "setup.msi"
        artifact.write_bytes(b"installer")
        config = SigningConfig.new().with_private_key(keypair.secret_key)
        try:
            sign_file(config.with_password("wrong"), artifact)
        except WrongPassword as exc:
            print(f"  Rejected password: {exc}")


if __name__ == "__main__":
    demo_generate_and_sign()
    demo_safety_checks()

"""Shared test fixtures for packager-sign."""

from __future__ import annotations

import base64
from collections.abc import Callable
from pathlib import Path

import minisign
import pytest

from packager_sign.codec import decode_base64_text, encode_base64
from packager_sign.config import KdfConfig
from packager_sign.keys import generate_key
from packager_sign.models import KeyPair

PASSWORD = "correct horse battery staple"

# Cheapest scrypt cost accepted, keeps key encryption fast in tests.
LIGHT_KDF = KdfConfig(opslimit=32_768, memlimit=16_777_216)

# ---------------------------------------------------------------------------
# Key-pair fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def light_kdf() -> KdfConfig:
    return LIGHT_KDF


@pytest.fixture(scope="session")
def password() -> str:
    return PASSWORD


@pytest.fixture(scope="session")
def encrypted_keypair() -> KeyPair:
    """A key pair whose secret key is protected by :data:`PASSWORD`."""
    return generate_key(PASSWORD, kdf=LIGHT_KDF)


@pytest.fixture(scope="session")
def plain_keypair() -> KeyPair:
    """A key pair whose secret key is stored unencrypted."""
    return generate_key("")


# ---------------------------------------------------------------------------
# Artifact fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def artifact(tmp_path: Path) -> Path:
    """A small release artifact named ``app.exe``."""
    path = tmp_path / "dist" / "app.exe"
    path.parent.mkdir()
    path.write_bytes(b"MZ" + bytes(range(256)) * 16)
    return path


# ---------------------------------------------------------------------------
# Key box helpers
# ---------------------------------------------------------------------------


def _with_kdf_limits(secret_key: str, opslimit: int, memlimit: int) -> str:
    """Rewrite the scrypt limits stored in an encoded secret key box."""
    comment, payload = decode_base64_text(secret_key).splitlines()
    raw = bytearray(base64.b64decode(payload))
    raw[38:46] = opslimit.to_bytes(8, "little")
    raw[46:54] = memlimit.to_bytes(8, "little")
    return encode_base64(f"{comment}\n{base64.b64encode(bytes(raw)).decode('ascii')}\n")


@pytest.fixture(scope="session")
def with_kdf_limits() -> Callable[[str, int, int], str]:
    """``with_kdf_limits(secret_key_b64, opslimit, memlimit) -> secret_key_b64``."""
    return _with_kdf_limits


# ---------------------------------------------------------------------------
# Verification helper
# ---------------------------------------------------------------------------


def _verify(public_key: str, data: bytes, signature: str) -> bool:
    """Check an encoded signature with an independent minisign verifier."""
    pk = minisign.PublicKey.from_bytes(decode_base64_text(public_key).encode("utf-8"))
    sig = minisign.Signature.from_bytes(decode_base64_text(signature).encode("utf-8"))
    try:
        pk.verify(data, sig)
    except minisign.VerifyError:
        return False
    return True


@pytest.fixture(scope="session")
def verify_signature() -> Callable[[str, bytes, str], bool]:
    """``verify_signature(public_key_b64, data, signature_b64) -> bool``."""
    return _verify

"""Adapter over ``py-minisign`` for key and signature boxes.

The library owns the minisign formats and the primitives behind them. This
module turns its text and its exceptions into the ones packager-sign uses.
"""

from __future__ import annotations

from typing import BinaryIO

import minisign
from minisign.scrypt import scrypt_params_from_limits

from packager_sign.config import DEFAULT_KDF, KDF_OPSLIMIT_MAX, KdfConfig
from packager_sign.errors import MalformedKeyBox, SigningError, WrongPassword
from packager_sign.prompt import PasswordPrompt, prompt_password


def to_text(box: minisign.PublicKey | minisign.SecretKey | minisign.Signature) -> str:
    """Serialise a box to its native minisign text form."""
    return bytes(box).decode("utf-8")


def _check_kdf_limits(opslimit: int, memlimit: int) -> None:
    if opslimit > KDF_OPSLIMIT_MAX:
        raise MalformedKeyBox(f"Secret key opslimit {opslimit} is out of range")
    try:
        n, r, p = scrypt_params_from_limits(opslimit, memlimit)
    except minisign.Error as exc:
        raise MalformedKeyBox(f"Secret key scrypt limits are out of range: {exc}") from exc
    if 128 * r * max(n, p) > minisign.MEMLIMIT_MAX:
        raise MalformedKeyBox("Secret key scrypt parameters need too much memory")


def generate_encrypted_keypair(
    password: str | None = None,
    *,
    kdf: KdfConfig | None = None,
    prompt: PasswordPrompt | None = None,
) -> tuple[str, str]:
    """Generate a key pair and return ``(public_key_text, secret_key_text)``.

    ``None`` asks for a password through *prompt*; an empty password leaves
    the secret key unencrypted.
    """
    kdf = kdf or DEFAULT_KDF
    keypair = minisign.KeyPair.generate()
    secret_key = keypair.secret_key
    try:
        if password is None:
            password = (prompt or prompt_password)(
                "Please enter a password to protect the secret key", confirm=True
            )
        if password:
            secret_key.encrypt(password, opslimit=kdf.opslimit, memlimit=kdf.memlimit)
        return to_text(keypair.public_key), to_text(secret_key)
    except minisign.Error as exc:
        raise SigningError(f"Failed to generate signing key: {exc}") from exc
    finally:
        secret_key.wipe()


def secret_key_from_string(text: str) -> minisign.SecretKey:
    """Parse a secret key box, rejecting unusable scrypt limits.

    Raises:
        MalformedKeyBox: if *text* is not a valid secret key box.
    """
    try:
        secret_key = minisign.SecretKey.from_bytes(text.encode("utf-8"))
    except minisign.Error as exc:
        raise MalformedKeyBox(f"Malformed secret key box: {exc}") from exc
    if secret_key.is_encrypted():
        # the library has no public accessor for the stored limits
        _check_kdf_limits(secret_key._kdf_opslimit, secret_key._kdf_memlimit)
    return secret_key


def unlock(
    secret_key: minisign.SecretKey,
    password: str | None = None,
    prompt: PasswordPrompt | None = None,
) -> None:
    """Decrypt *secret_key* in place.

    For an encrypted key a ``None`` password is asked for through *prompt*.
    The password is ignored for an unencrypted key.

    Raises:
        WrongPassword: if *password* does not unlock the key.
        MalformedKeyBox: if the stored scrypt parameters cannot be used.
    """
    if not secret_key.is_encrypted():
        return
    if password is None:
        password = (prompt or prompt_password)("Password", confirm=False)
    try:
        secret_key.decrypt(password)
    except minisign.Error as exc:
        raise WrongPassword() from exc
    except (ValueError, MemoryError) as exc:
        raise MalformedKeyBox(f"Secret key scrypt parameters are unusable: {exc!r}") from exc


def sign(
    secret_key: minisign.SecretKey,
    data: BinaryIO,
    trusted_comment: str,
    untrusted_comment: str,
) -> minisign.Signature:
    """Sign the full contents of *data* (pre-hashed) and bind *trusted_comment*."""
    try:
        return secret_key.sign(
            data,
            prehash=True,
            untrusted_comment=untrusted_comment,
            trusted_comment=trusted_comment,
        )
    except minisign.Error as exc:
        raise SigningError(f"Failed to sign: {exc}") from exc


__all__ = [
    "generate_encrypted_keypair",
    "secret_key_from_string",
    "sign",
    "to_text",
    "unlock",
]

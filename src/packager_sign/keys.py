"""Key pair generation, secret key decoding and key persistence."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import minisign

from packager_sign import boxes
from packager_sign.codec import decode_base64_text, encode_base64
from packager_sign.config import PUBLIC_KEY_SUFFIX, KdfConfig
from packager_sign.errors import SigningKeyExists
from packager_sign.fs import append_suffix, canonicalize, remove_file, write_text_file
from packager_sign.models import KeyPair
from packager_sign.prompt import PasswordPrompt

logger = logging.getLogger(__name__)


def generate_key(
    password: str | None = None,
    *,
    kdf: KdfConfig | None = None,
    prompt: PasswordPrompt | None = None,
) -> KeyPair:
    """Generate a new signing key pair.

    Args:
        password: Password protecting the secret key. ``None`` asks for one
            through *prompt*; an empty string stores the key unencrypted.
        kdf: scrypt cost limits for encrypting the secret key.
        prompt: Password prompt used when *password* is ``None``.

    Returns:
        A :class:`KeyPair` whose halves are the base64 encoded key boxes.
        Nothing is written to disk.
    """
    pk_text, sk_text = boxes.generate_encrypted_keypair(
        password, kdf=kdf, prompt=prompt
    )
    logger.debug("Generated signing key (%s)", pk_text.splitlines()[0])
    return KeyPair(
        public_key=encode_base64(pk_text),
        secret_key=encode_base64(sk_text),
    )


def decode_private_key(
    private_key: str,
    password: str | None = None,
    *,
    prompt: PasswordPrompt | None = None,
) -> minisign.SecretKey:
    """Decode a base64 encoded secret key box and unlock it with *password*.

    Raises:
        InvalidEncoding: if *private_key* is not base64 of UTF-8 text.
        MalformedKeyBox: if the decoded text is not a secret key box.
        WrongPassword: if *password* does not unlock the key.
    """
    secret_key = boxes.secret_key_from_string(decode_base64_text(private_key))
    try:
        boxes.unlock(secret_key, password, prompt=prompt)
    except BaseException:
        secret_key.wipe()
        raise
    logger.debug("Decoded secret key")
    return secret_key


@contextmanager
def unlocked_secret_key(
    private_key: str,
    password: str | None = None,
    *,
    prompt: PasswordPrompt | None = None,
) -> Iterator[minisign.SecretKey]:
    """Decode a secret key for the duration of a ``with`` block, then wipe it."""
    secret_key = decode_private_key(private_key, password, prompt=prompt)
    try:
        yield secret_key
    finally:
        secret_key.wipe()


def save_keypair(
    keypair: KeyPair,
    path: str | os.PathLike[str],
    force: bool = False,
) -> tuple[Path, Path]:
    """Write *keypair* to *path* (secret key) and ``<path>.pub`` (public key).

    An existing secret key is only replaced when *force* is true; nothing is
    touched otherwise. An existing public key file is always replaced.

    Returns:
        The canonical ``(secret_key_path, public_key_path)``.

    Raises:
        SigningKeyExists: if *path* exists and *force* is false.
        IoWithPath: on any filesystem failure.
    """
    sk_path = Path(path)
    pk_path = append_suffix(path, PUBLIC_KEY_SUFFIX)

    if sk_path.exists():
        if not force:
            raise SigningKeyExists(sk_path)
        remove_file(sk_path)

    if pk_path.exists():
        remove_file(pk_path)

    write_text_file(sk_path, keypair.secret_key)
    write_text_file(pk_path, keypair.public_key)
    logger.debug("Saved key pair to %s and %s", sk_path, pk_path)

    return canonicalize(sk_path), canonicalize(pk_path)


__all__ = ["decode_private_key", "generate_key", "save_keypair", "unlocked_secret_key"]

"""Detached signing of artifact files."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

import minisign

from packager_sign import boxes
from packager_sign.codec import encode_base64
from packager_sign.config import SIGNATURE_SUFFIX, UNTRUSTED_SIGNATURE_COMMENT
from packager_sign.errors import FailedToExtractFilename, IoWithPath
from packager_sign.fs import append_suffix, canonicalize, write_text_file
from packager_sign.keys import unlocked_secret_key
from packager_sign.models import SigningConfig

logger = logging.getLogger(__name__)


def _file_name(path: str | os.PathLike[str]) -> str:
    name = os.path.basename(os.fspath(path))
    if name in ("", ".", ".."):
        raise FailedToExtractFilename(path)
    return name


def _comment_safe(name: str) -> str:
    """Render a file name as printable ASCII for the trusted comment.

    Undecodable bytes become U+FFFD, and every character outside printable
    ASCII is written as its Python escape (``\\xe9``, ``\\ufffd``).
    """
    name = name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
    return "".join(
        c if " " <= c < "\x7f" else c.encode("unicode_escape").decode("ascii")
        for c in name
    )


def sign_file(
    config: SigningConfig,
    path: str | os.PathLike[str],
) -> tuple[Path, str]:
    """Sign *path* with the private key described by *config*.

    Returns:
        The canonical signature path and the base64 encoded signature.
    """
    with unlocked_secret_key(config.private_key, config.password) as secret_key:
        return sign_file_with_secret_key(secret_key, path)


def sign_file_with_secret_key(
    secret_key: minisign.SecretKey,
    path: str | os.PathLike[str],
) -> tuple[Path, str]:
    """Sign *path* with an already decoded secret key.

    The signature is written to ``<path>.sig``, replacing any previous one.
    Its trusted comment records the signing time and the file name.

    Raises:
        FailedToExtractFilename: if *path* has no file name component.
        IoWithPath: if *path* cannot be read or the signature cannot be written.
    """
    file_name = _comment_safe(_file_name(path))
    signature_path = Path(os.path.normpath(append_suffix(path, SIGNATURE_SUFFIX)))

    try:
        with open(path, "rb") as fh:
            trusted_comment = f"timestamp:{int(time.time())}\tfile:{file_name}"
            signature = boxes.sign(
                secret_key,
                fh,
                trusted_comment=trusted_comment,
                untrusted_comment=UNTRUSTED_SIGNATURE_COMMENT,
            )
    except OSError as exc:
        raise IoWithPath(path, exc) from exc

    encoded_signature = encode_base64(boxes.to_text(signature))
    write_text_file(signature_path, encoded_signature)
    logger.debug("Signed %s", path)

    return canonicalize(signature_path), encoded_signature


__all__ = ["sign_file", "sign_file_with_secret_key"]

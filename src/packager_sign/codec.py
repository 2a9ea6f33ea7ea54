"""Base64 helpers for storing key and signature boxes as plain text."""

from __future__ import annotations

import base64
import binascii

from packager_sign.errors import InvalidEncoding


def encode_base64(data: bytes | str) -> str:
    """Return the standard, padded base64 encoding of *data*.

    ``str`` input is encoded as UTF-8 first.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.b64encode(data).decode("ascii")


def decode_base64(text: str) -> bytes:
    """Decode standard base64 *text*.

    Raises:
        InvalidEncoding: if *text* is not well-formed base64.
    """
    try:
        return base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidEncoding(f"Invalid base64 data: {exc}") from exc


def decode_base64_text(text: str) -> str:
    """Decode base64 *text* whose payload is expected to be UTF-8 text."""
    raw = decode_base64(text)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidEncoding(f"Decoded data is not valid UTF-8: {exc}") from exc


__all__ = ["decode_base64", "decode_base64_text", "encode_base64"]

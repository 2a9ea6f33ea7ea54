"""Exception hierarchy for packager-sign."""

from __future__ import annotations

from pathlib import Path


class SigningError(Exception):
    """Base exception for every key handling and signing failure."""


class InvalidEncoding(SigningError):
    """Raised when stored text is not valid base64 or not valid UTF-8."""


class MalformedKeyBox(SigningError):
    """Raised when a key or signature box cannot be parsed."""


class DecryptionFailed(SigningError):
    """Raised when an encrypted secret key cannot be unlocked."""


class WrongPassword(DecryptionFailed):
    """Raised when the supplied password does not unlock the secret key."""

    def __init__(self) -> None:
        super().__init__("Wrong password for that key")


class PasswordRequired(SigningError):
    """Raised when a password is needed but none could be obtained."""


class _PathError(SigningError):
    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(message)


class SigningKeyExists(_PathError):
    """Raised when saving a key pair would overwrite an existing secret key."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(
            path,
            f"Signing key already exists at {path}, "
            "use force to overwrite it",
        )


class FailedToExtractFilename(_PathError):
    """Raised when a path to sign has no file name component."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(path, f"Failed to extract filename from {path}")


class IoWithPath(_PathError):
    """Wraps a filesystem error together with the path it happened on."""

    def __init__(self, path: str | Path, cause: OSError) -> None:
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(path, f"I/O error at {path}: {reason}")


__all__ = [
    "DecryptionFailed",
    "FailedToExtractFilename",
    "InvalidEncoding",
    "IoWithPath",
    "MalformedKeyBox",
    "PasswordRequired",
    "SigningError",
    "SigningKeyExists",
    "WrongPassword",
]

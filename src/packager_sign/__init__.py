"""packager-sign: signing keys and detached signatures for release artifacts."""

from packager_sign.codec import decode_base64, decode_base64_text, encode_base64
from packager_sign.config import KdfConfig
from packager_sign.errors import (
    DecryptionFailed,
    FailedToExtractFilename,
    InvalidEncoding,
    IoWithPath,
    MalformedKeyBox,
    PasswordRequired,
    SigningError,
    SigningKeyExists,
    WrongPassword,
)
from packager_sign.keys import (
    decode_private_key,
    generate_key,
    save_keypair,
    unlocked_secret_key,
)
from packager_sign.models import KeyPair, SigningConfig
from packager_sign.sign import sign_file, sign_file_with_secret_key

__version__ = "0.1.0"

__all__ = [
    "DecryptionFailed",
    "FailedToExtractFilename",
    "InvalidEncoding",
    "IoWithPath",
    "KdfConfig",
    "KeyPair",
    "MalformedKeyBox",
    "PasswordRequired",
    "SigningConfig",
    "SigningError",
    "SigningKeyExists",
    "WrongPassword",
    "decode_base64",
    "decode_base64_text",
    "decode_private_key",
    "encode_base64",
    "generate_key",
    "save_keypair",
    "sign_file",
    "sign_file_with_secret_key",
    "unlocked_secret_key",
]

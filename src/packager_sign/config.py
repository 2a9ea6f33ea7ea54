"""Fixed names, suffixes and tunables for packager-sign."""

from __future__ import annotations

import minisign
from pydantic import BaseModel, ConfigDict, Field

PUBLIC_KEY_SUFFIX = ".pub"
SIGNATURE_SUFFIX = ".sig"

UNTRUSTED_SIGNATURE_COMMENT = "signature from packager-sign secret key"

PRIVATE_KEY_ENV = "PACKAGER_SIGN_PRIVATE_KEY"
PRIVATE_KEY_PASSWORD_ENV = "PACKAGER_SIGN_PRIVATE_KEY_PASSWORD"

# Upper bound on the scrypt work a stored secret key may ask for.
KDF_OPSLIMIT_MAX = 1 << 30


class KdfConfig(BaseModel):
    """scrypt cost limits used when encrypting a newly generated secret key.

    The values are stored inside the secret key box, so keys generated with
    one configuration can always be decoded regardless of the current one.
    """

    model_config = ConfigDict(frozen=True)

    opslimit: int = Field(default=minisign.OPSLIMIT, ge=32_768, le=KDF_OPSLIMIT_MAX)
    memlimit: int = Field(default=minisign.MEMLIMIT, gt=0, le=minisign.MEMLIMIT_MAX)


DEFAULT_KDF = KdfConfig()


__all__ = [
    "DEFAULT_KDF",
    "KDF_OPSLIMIT_MAX",
    "KdfConfig",
    "PRIVATE_KEY_ENV",
    "PRIVATE_KEY_PASSWORD_ENV",
    "PUBLIC_KEY_SUFFIX",
    "SIGNATURE_SUFFIX",
    "UNTRUSTED_SIGNATURE_COMMENT",
]

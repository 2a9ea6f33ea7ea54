"""Pydantic models for packager-sign."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from packager_sign.codec import decode_base64
from packager_sign.errors import InvalidEncoding


class KeyPair(BaseModel):
    """A public/secret key pair, each half base64 encoded for storage."""

    model_config = ConfigDict(frozen=True)

    public_key: str = Field(min_length=1)
    secret_key: str = Field(min_length=1, repr=False)

    @field_validator("public_key", "secret_key")
    @classmethod
    def _must_be_base64(cls, value: str) -> str:
        try:
            decode_base64(value)
        except InvalidEncoding as exc:
            raise ValueError(str(exc)) from exc
        return value


class SigningConfig(BaseModel):
    """Parameters for signing one or more files.

    ``password=None`` means the password is asked for interactively;
    ``password=""`` means the secret key is not encrypted. The private key is
    only decoded when a file is actually signed.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    private_key: str = Field(default="", repr=False)
    password: str | None = Field(default=None, repr=False)

    @classmethod
    def new(cls) -> SigningConfig:
        return cls()

    def with_private_key(self, private_key: str) -> SigningConfig:
        """Return a copy using *private_key* (base64 encoded secret key box)."""
        return self.model_copy(update={"private_key": private_key})

    def with_password(self, password: str) -> SigningConfig:
        """Return a copy using *password* to unlock the private key."""
        return self.model_copy(update={"password": password})


__all__ = ["KeyPair", "SigningConfig"]

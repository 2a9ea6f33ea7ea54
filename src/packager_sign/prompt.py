"""Interactive password prompt used when no password is supplied."""

from __future__ import annotations

from typing import Protocol

import click

from packager_sign.errors import PasswordRequired


class PasswordPrompt(Protocol):
    def __call__(self, message: str, *, confirm: bool = False) -> str: ...


def prompt_password(message: str, *, confirm: bool = False) -> str:
    """Ask for a password on the terminal without echoing it.

    An empty answer is accepted and means "no password".

    Raises:
        PasswordRequired: if input is aborted or unavailable.
    """
    try:
        return click.prompt(
            message,
            default="",
            show_default=False,
            hide_input=True,
            confirmation_prompt=confirm,
        )
    except click.Abort as exc:
        raise PasswordRequired("A password is required but none was entered") from exc


__all__ = ["PasswordPrompt", "prompt_password"]

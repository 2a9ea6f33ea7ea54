"""Small filesystem helpers that attach the offending path to every error."""

from __future__ import annotations

import os
from pathlib import Path

from packager_sign.errors import IoWithPath


def append_suffix(path: str | os.PathLike[str], suffix: str) -> Path:
    """``foo/app.exe`` + ``.sig`` -> ``foo/app.exe.sig``."""
    return Path(os.fspath(path) + suffix)


def write_text_file(path: Path, text: str) -> None:
    """Create (or truncate) *path*, creating parent directories, and write *text*."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            fh.write(text)
            fh.flush()
    except OSError as exc:
        raise IoWithPath(path, exc) from exc


def remove_file(path: Path) -> None:
    try:
        path.unlink()
    except OSError as exc:
        raise IoWithPath(path, exc) from exc


def canonicalize(path: Path) -> Path:
    """Resolve *path* to an absolute path without symlinks; it must exist."""
    try:
        return path.resolve(strict=True)
    except OSError as exc:
        raise IoWithPath(path, exc) from exc


__all__ = ["append_suffix", "canonicalize", "remove_file", "write_text_file"]

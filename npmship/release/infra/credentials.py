from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from npmship.core.result import Err, Ok, Result
from npmship.platform.files import atomic_write_text
from npmship.release.errors import FileError

NPMRC = ".npmrc"
NPMIGNORE = ".npmignore"


def npmrc_line(registry: str, token: str) -> str:
    return f"//{registry}/:_authToken={token}\n"


def write_npmrc(home: Path, *, registry: str, token: str) -> Result[Path, FileError]:
    """Replace ``~/.npmrc`` with a single auth token line for ``registry``."""
    path = home / NPMRC
    try:
        atomic_write_text(path, npmrc_line(registry, token), mode=0o600)
    except OSError as e:
        return Err(FileError(path=path, message=f"cannot write npm credentials: {e}"))
    return Ok(path)


def write_ignore_file(bundle_dir: Path, entries: Iterable[str]) -> Result[Path, FileError]:
    """Write ``.npmignore`` so the listed entries stay out of the published tarball."""
    path = bundle_dir / NPMIGNORE
    if not bundle_dir.is_dir():
        return Err(FileError(path=bundle_dir, message="release bundle directory not found"))
    content = "".join(f"{entry}\n" for entry in entries)
    try:
        atomic_write_text(path, content)
    except OSError as e:
        return Err(FileError(path=path, message=f"cannot write ignore file: {e}"))
    return Ok(path)

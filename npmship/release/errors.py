"""Error values for the publish pipeline.

Every variant is fatal except that there is none for "already published":
that is a successful outcome, see ``PublishOutcome``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

PublishStage = Literal["version", "publish"]


@dataclass(frozen=True, slots=True)
class MissingInput:
    """A required environment variable is not set."""

    name: str
    hint: str


@dataclass(frozen=True, slots=True)
class UnsupportedEnvironment:
    value: str


@dataclass(frozen=True, slots=True)
class ArtifactError:
    """The release bundle could not be located, downloaded or unpacked."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class FileError:
    path: Path
    message: str


@dataclass(frozen=True, slots=True)
class PublishFailed:
    """``npm version`` or ``yarn publish`` exited non-zero."""

    stage: PublishStage
    returncode: int
    detail: str = ""


InputError = MissingInput | UnsupportedEnvironment

PublishError = MissingInput | UnsupportedEnvironment | ArtifactError | FileError | PublishFailed

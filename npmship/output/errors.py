"""Error presentation and exit code mapping for publish failures."""

from __future__ import annotations

from typing import TYPE_CHECKING

from npmship.core.config import ConfigError
from npmship.core.errors import ErrorCode
from npmship.output.console import Style
from npmship.release.errors import (
    ArtifactError,
    FileError,
    MissingInput,
    PublishError,
    PublishFailed,
    UnsupportedEnvironment,
)
from npmship.release.domain.environment import Environment

if TYPE_CHECKING:
    from npmship.output.console import ConsoleProtocol

__all__ = ["print_config_error", "print_publish_error", "publish_error_exit_code"]


def print_publish_error(error: PublishError, console: ConsoleProtocol) -> None:
    match error:
        case MissingInput(name=name, hint=hint):
            console.error(f"{name} is not set. {hint}")
        case UnsupportedEnvironment(value=value):
            console.error(f"unsupported NPM_ENVIRONMENT: {value!r}")
            console.print(f"expected one of: {', '.join(e.value for e in Environment)}", Style.DIM)
        case ArtifactError(message=message, hint=hint):
            console.error(message)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case FileError(path=path, message=message):
            console.error(f"{message}: {path}")
        case PublishFailed(stage="version", returncode=rc, detail=detail):
            console.error(f"npm version failed (exit {rc})")
            if detail:
                console.print(detail, Style.DIM)
        case PublishFailed(stage="publish", returncode=rc, detail=detail):
            console.error(f"yarn publish failed (exit {rc})")
            if detail:
                console.print(detail, Style.DIM)


def print_config_error(error: ConfigError, console: ConsoleProtocol) -> None:
    console.error(error.message)


def publish_error_exit_code(error: PublishError) -> int:
    """Every publish failure fails the CI job the same way."""
    return int(ErrorCode.FAILURE)

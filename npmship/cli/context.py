from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from npmship.core.config import CONFIG_FILENAME, PublishConfig, load_config, load_config_or_default
from npmship.core.errors import ErrorCode
from npmship.core.result import Err
from npmship.output.console import ConsoleProtocol, RichConsole
from npmship.output.errors import print_config_error


@dataclass(frozen=True, slots=True)
class CLIContext:
    workdir: Path
    config: PublishConfig
    console: ConsoleProtocol


def build_context(
    *,
    workdir: Path | None = None,
    config_path: Path | None = None,
    console: ConsoleProtocol | None = None,
) -> CLIContext:
    """Resolve the working directory and load configuration.

    An explicit ``--config`` must exist; the default ``npmship.toml`` in the
    working directory is optional.
    """
    out = console if console is not None else RichConsole()
    root = (workdir or Path.cwd()).expanduser().resolve()
    if not root.is_dir():
        out.error(f"working directory not found: {root}")
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    if config_path is not None:
        result = load_config(config_path.expanduser())
    else:
        result = load_config_or_default(root / CONFIG_FILENAME)

    if isinstance(result, Err):
        print_config_error(result.error, out)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    return CLIContext(workdir=root, config=result.value, console=out)

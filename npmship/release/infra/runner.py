"""Echoing command runner shared by the npm and gh adapters."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from npmship.core.result import Ok, Result
from npmship.output.console import ConsoleProtocol
from npmship.platform.process import ProcessError, render_command, run, run_silent


@dataclass(frozen=True, slots=True)
class CommandRunner:
    """Runs external commands, echoing the ones that change state.

    Reads (registry lookups, run listings) always execute, even in dry-run,
    because later steps depend on their answers. Writes are echoed as
    ``+ cmd`` and skipped when ``dry_run`` is set.
    """

    console: ConsoleProtocol
    dry_run: bool = False

    def read(
        self,
        cmd: list[str],
        *,
        cwd: Path,
        extra_env: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        return run(cmd, cwd=cwd, extra_env=extra_env, timeout=timeout)

    def write(
        self,
        cmd: list[str],
        *,
        cwd: Path,
        extra_env: Mapping[str, str] | None = None,
    ) -> Result[None, ProcessError]:
        self.console.command(render_command(cmd))
        if self.dry_run:
            return Ok(None)
        return run_silent(cmd, cwd=cwd, extra_env=extra_env)

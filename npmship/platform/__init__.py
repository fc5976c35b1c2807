"""Platform helpers: subprocesses, files, user paths."""

from .files import atomic_write_text
from .paths import home
from .process import ProcessError, render_command, run, run_silent

__all__ = [
    "ProcessError",
    "atomic_write_text",
    "home",
    "render_command",
    "run",
    "run_silent",
]

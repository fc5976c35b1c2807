"""User-level paths."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

__all__ = ["home", "clear_caches"]


@lru_cache(maxsize=1)
def home() -> Path:
    """Get the invoking user's home directory.

    HOME wins when set (CI runners and containers set it explicitly);
    otherwise fall back to Path.home().
    """
    home_env = os.environ.get("HOME")
    if home_env:
        return Path(home_env)
    return Path.home()


def clear_caches() -> None:
    """Clear cached paths. Useful in tests that change HOME."""
    home.cache_clear()

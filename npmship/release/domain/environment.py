from __future__ import annotations

from enum import StrEnum

from npmship.core.result import Err, Ok, Result
from npmship.release.errors import UnsupportedEnvironment


class Environment(StrEnum):
    """Deployment context selected by ``NPM_ENVIRONMENT``."""

    PRODUCTION = "production"
    STAGING = "staging"
    DEVELOPMENT = "development"

    @property
    def bumps_version(self) -> bool:
        """Production bundles already carry their version from release prep."""
        return self is not Environment.PRODUCTION


def parse_environment(raw: str) -> Result[Environment, UnsupportedEnvironment]:
    """Map the selector to an Environment. Matching is exact."""
    try:
        return Ok(Environment(raw))
    except ValueError:
        return Err(UnsupportedEnvironment(value=raw))

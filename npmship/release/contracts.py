"""Cross-layer contracts for the publish flow."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from npmship.core.config import PublishConfig
from npmship.release.domain.environment import Environment
from npmship.release.domain.model import PublishDecision

PublishStatus = Literal["published", "already_published"]


@dataclass(frozen=True, slots=True)
class PublishRequest:
    """Normalized publish request shared between CLI and flow.

    ``environ`` is a snapshot taken once by the CLI; nothing below the CLI
    reads the process environment.
    """

    workdir: Path
    environ: Mapping[str, str]
    config: PublishConfig = field(default_factory=PublishConfig)
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class PublishOutcome:
    """Flow outcome rendered by the view layer."""

    status: PublishStatus
    environment: Environment
    decision: PublishDecision
    dry_run: bool = False

    @property
    def published(self) -> bool:
        return self.status == "published"

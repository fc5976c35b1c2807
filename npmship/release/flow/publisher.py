from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from npmship.core.result import Err, Ok, Result
from npmship.platform.process import ProcessError
from npmship.release.domain.environment import Environment
from npmship.release.domain.model import PublishDecision
from npmship.release.errors import PublishFailed, PublishStage


class PackageRegistry(Protocol):
    def bump_version(self, bundle_dir: Path, version: str) -> Result[None, ProcessError]: ...

    def publish(self, bundle_dir: Path, tag: str) -> Result[None, ProcessError]: ...


def _failed(stage: PublishStage, error: ProcessError) -> PublishFailed:
    return PublishFailed(stage=stage, returncode=error.returncode, detail=error.stderr.strip())


@dataclass(frozen=True, slots=True)
class Publisher:
    registry: PackageRegistry

    def publish(
        self,
        bundle_dir: Path,
        decision: PublishDecision,
        environment: Environment,
    ) -> Result[None, PublishFailed]:
        """Stamp the release version into the bundle, then publish it under its tag.

        Production bundles are published as-is: release prep already
        committed the version to package.json.
        """
        if environment.bumps_version:
            bumped = self.registry.bump_version(bundle_dir, decision.release_version)
            if isinstance(bumped, Err):
                return Err(_failed("version", bumped.error))

        published = self.registry.publish(bundle_dir, decision.distribution_tag)
        if isinstance(published, Err):
            return Err(_failed("publish", published.error))
        return Ok(None)

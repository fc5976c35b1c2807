"""In-memory stand-ins for the registry and artifact store."""

from __future__ import annotations

import io
import tarfile
from dataclasses import dataclass, field
from pathlib import Path

from npmship.core.result import Err, Ok, Result
from npmship.platform.process import ProcessError
from npmship.release.domain.environment import Environment
from npmship.release.errors import ArtifactError


def proc_error(cmd: str, returncode: int = 1, stderr: str = "") -> ProcessError:
    return ProcessError(command=tuple(cmd.split()), returncode=returncode, stdout="", stderr=stderr)


@dataclass
class FakeRegistry:
    """Registry holding a set of published versions.

    ``publish`` adds the bundle's current version, so running the pipeline
    twice behaves like the real registry.
    """

    versions: set[str] = field(default_factory=set)
    lookup_error: ProcessError | None = None
    bump_error: ProcessError | None = None
    publish_error: ProcessError | None = None
    calls: list[tuple[str, ...]] = field(default_factory=list)
    _pending_version: str | None = None

    def published_version(self, version: str) -> Result[str | None, ProcessError]:
        self.calls.append(("view", version))
        if self.lookup_error is not None:
            return Err(self.lookup_error)
        return Ok(version if version in self.versions else None)

    def bump_version(self, bundle_dir: Path, version: str) -> Result[None, ProcessError]:
        self.calls.append(("version", str(bundle_dir), version))
        if self.bump_error is not None:
            return Err(self.bump_error)
        self._pending_version = version
        return Ok(None)

    def publish(self, bundle_dir: Path, tag: str) -> Result[None, ProcessError]:
        self.calls.append(("publish", str(bundle_dir), tag))
        if self.publish_error is not None:
            return Err(self.publish_error)
        if self._pending_version is not None:
            self.versions.add(self._pending_version)
        return Ok(None)

    @property
    def publish_calls(self) -> list[tuple[str, ...]]:
        return [c for c in self.calls if c[0] == "publish"]

    @property
    def bump_calls(self) -> list[tuple[str, ...]]:
        return [c for c in self.calls if c[0] == "version"]


def make_bundle_archive(path: Path, files: dict[str, bytes]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(path, "w:gz") as tar:
        for name, content in files.items():
            info = tarfile.TarInfo(name=name)
            info.size = len(content)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(content))


@dataclass
class FakeArtifacts:
    """Artifact store that writes a prepared archive on download."""

    files: dict[str, bytes] = field(
        default_factory=lambda: {"release/package.json": b'{"version": "4.0.1"}'}
    )
    archive: str = "package.tar.gz"
    error: ArtifactError | None = None
    calls: list[tuple[str, Path, Environment, str]] = field(default_factory=list)

    def download(
        self,
        name: str,
        dest: Path,
        *,
        environment: Environment,
        branch: str,
    ) -> Result[Path, ArtifactError]:
        self.calls.append((name, dest, environment, branch))
        if self.error is not None:
            return Err(self.error)
        make_bundle_archive(dest / self.archive, self.files)
        return Ok(dest)


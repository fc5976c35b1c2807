"""CI artifact retrieval and bundle extraction.

The packed npm bundle is uploaded as a workflow artifact by the build job.
It is located with ``gh run list`` and fetched with ``gh run download``;
gh authenticates with the token passed as GH_TOKEN.
"""

from __future__ import annotations

import contextlib
import json
import os
import shutil
import tarfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from npmship.core.result import Err, Ok, Result
from npmship.core.structured import as_obj_list, as_str_dict, get_int
from npmship.release.domain.environment import Environment
from npmship.release.errors import ArtifactError
from npmship.release.infra.runner import CommandRunner


def run_event_for(environment: Environment) -> str:
    """Development bundles come from PR builds, the others from pushes."""
    if environment is Environment.DEVELOPMENT:
        return "pull_request"
    return "push"


@dataclass(frozen=True, slots=True)
class ArtifactStore:
    """Workflow artifacts of one repository.

    Attributes:
        runner: Command runner.
        workdir: Checkout the gh commands run in.
        workflow: Workflow file that uploads the artifact.
        token: GitHub token exported as GH_TOKEN.
        repo: Optional owner/name; defaults to the checkout's remote.
    """

    runner: CommandRunner
    workdir: Path
    workflow: str
    token: str
    repo: str | None = None

    def _gh(self, *args: str) -> list[str]:
        cmd = ["gh", *args]
        if self.repo:
            cmd += ["--repo", self.repo]
        return cmd

    def _env(self) -> dict[str, str]:
        return {"GH_TOKEN": self.token} if self.token else {}

    def latest_run_id(self, *, environment: Environment, branch: str) -> Result[int, ArtifactError]:
        """Find the newest successful workflow run for ``branch``."""
        cmd = self._gh(
            "run",
            "list",
            "--workflow",
            self.workflow,
            "--branch",
            branch,
            "--event",
            run_event_for(environment),
            "--status",
            "success",
            "--limit",
            "1",
            "--json",
            "databaseId",
        )
        result = self.runner.read(cmd, cwd=self.workdir, extra_env=self._env())
        if isinstance(result, Err):
            return Err(
                ArtifactError(
                    message=f"failed to list {self.workflow} runs for {branch}",
                    hint=result.error.stderr.strip() or None,
                )
            )

        try:
            obj: object = json.loads(result.value)
        except json.JSONDecodeError as e:
            return Err(ArtifactError(message=f"invalid JSON from gh run list: {e}"))

        runs = as_obj_list(obj)
        if not runs:
            return Err(
                ArtifactError(
                    message=f"no successful {self.workflow} run found for {branch}",
                    hint="Wait for CI to finish, then re-run the publish job.",
                )
            )

        run = as_str_dict(runs[0])
        run_id = get_int(run, "databaseId") if run is not None else None
        if run_id is None:
            return Err(ArtifactError(message="unexpected gh run list payload"))
        return Ok(run_id)

    def download(
        self,
        name: str,
        dest: Path,
        *,
        environment: Environment,
        branch: str,
    ) -> Result[Path, ArtifactError]:
        """Download artifact ``name`` from the latest run on ``branch`` into ``dest``."""
        run_id = self.latest_run_id(environment=environment, branch=branch)
        if isinstance(run_id, Err):
            return run_id

        # gh refuses to overwrite files left by a previous attempt.
        shutil.rmtree(dest, ignore_errors=True)
        cmd = self._gh("run", "download", str(run_id.value), "--name", name, "--dir", str(dest))
        result = self.runner.read(cmd, cwd=self.workdir, extra_env=self._env())
        if isinstance(result, Err):
            return Err(
                ArtifactError(
                    message=f"failed to download artifact {name} from run {run_id.value}",
                    hint=result.error.stderr.strip() or None,
                )
            )
        return Ok(dest)


def _safe_relative_path(member_name: str) -> Path | None:
    """Return a sanitized relative extraction path, or None if unsafe."""
    normalized = member_name.replace("\\", "/")
    if normalized.startswith("/"):
        return None

    parts = tuple(p for p in PurePosixPath(normalized).parts if p != ".")
    if not parts:
        return None
    if any(part in {"", ".."} for part in parts):
        return None
    if parts[0].endswith(":"):
        return None
    return Path(*parts)


def extract_bundle(archive: Path, dest: Path) -> Result[int, ArtifactError]:
    """Unpack a .tar.gz bundle into ``dest``, like ``tar -xzf``.

    Only regular files and directories are extracted; links and entries
    that would land outside ``dest`` are skipped.

    Returns:
        Ok(number of files written), or Err(ArtifactError).
    """
    if not archive.is_file():
        return Err(ArtifactError(message=f"archive not found: {archive}"))

    try:
        dest.mkdir(parents=True, exist_ok=True)
        root = dest.resolve()
        files_count = 0

        with tarfile.open(archive, "r:gz") as tar:
            for member in tar.getmembers():
                rel_path = _safe_relative_path(member.name)
                if rel_path is None:
                    continue

                target = dest / rel_path
                if not target.resolve().is_relative_to(root):
                    continue

                if member.isdir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue
                if not member.isreg():
                    continue

                src = tar.extractfile(member)
                if src is None:
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                with src, open(target, "wb") as out:
                    shutil.copyfileobj(src, out)

                mode = member.mode & 0o777
                if mode:
                    with contextlib.suppress(OSError):
                        os.chmod(target, mode)
                files_count += 1

        return Ok(files_count)

    except tarfile.TarError as e:
        return Err(ArtifactError(message=f"failed to extract {archive}: {e}"))
    except OSError as e:
        return Err(ArtifactError(message=f"IO error extracting {archive}: {e}"))

"""npm and yarn adapter.

``npm view <pkg>@<version> version`` exits 0 with empty output when the
version does not exist, so the lookup result is decided by the output, not
the exit status.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from npmship.core.result import Err, Ok, Result
from npmship.core.structured import as_obj_list
from npmship.platform.process import ProcessError
from npmship.release.infra.runner import CommandRunner


def parse_view_output(stdout: str) -> str | None:
    """Extract the version from ``npm view ... version --json`` output.

    npm prints a JSON string for a single match, a JSON list when a range
    matches several versions, and nothing at all when nothing matches.
    Non-JSON output is taken verbatim.
    """
    text = stdout.strip()
    if not text:
        return None

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError:
        return text

    if isinstance(obj, str):
        return obj.strip() or None
    items = as_obj_list(obj)
    if items:
        last = items[-1]
        if isinstance(last, str):
            return last.strip() or None
    return None


@dataclass(frozen=True, slots=True)
class NpmRegistry:
    """The registry as seen through the npm and yarn CLIs.

    Attributes:
        runner: Command runner (carries the dry-run flag).
        workdir: Directory commands run from.
        package: Package name on the registry.
        query_timeout: Seconds allowed for ``npm view``.
    """

    runner: CommandRunner
    workdir: Path
    package: str
    query_timeout: float | None = None

    def published_version(self, version: str) -> Result[str | None, ProcessError]:
        """Look up ``package@version``; Ok(None) means the registry has no such version."""
        cmd = ["npm", "view", f"{self.package}@{version}", "version", "--json"]
        result = self.runner.read(cmd, cwd=self.workdir, timeout=self.query_timeout)
        if isinstance(result, Err):
            return result
        return Ok(parse_view_output(result.value))

    def bump_version(self, bundle_dir: Path, version: str) -> Result[None, ProcessError]:
        """Rewrite the bundle's package.json version.

        The bundle is not a git checkout, so no commit or tag is attempted.
        """
        return self.runner.write(
            ["npm", "version", version, "--no-git-tag-version"],
            cwd=bundle_dir,
        )

    def publish(self, bundle_dir: Path, tag: str) -> Result[None, ProcessError]:
        return self.runner.write(
            ["yarn", "publish", "--non-interactive", str(bundle_dir), "--tag", tag],
            cwd=self.workdir,
        )

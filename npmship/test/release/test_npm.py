from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import pytest

from npmship.core.result import Err, Ok, Result
from npmship.output.console import MockConsole
from npmship.platform.process import ProcessError
from npmship.release.infra import runner as runner_mod
from npmship.release.infra.npm import NpmRegistry, parse_view_output
from npmship.release.infra.runner import CommandRunner


@pytest.mark.parametrize(
    ("stdout", "expected"),
    [
        ('"4.0.1"\n', "4.0.1"),
        ('["4.0.0", "4.0.1"]', "4.0.1"),
        ("", None),
        ("   \n", None),
        ("4.0.1\n", "4.0.1"),
        ("[]", None),
        ("{}", None),
    ],
)
def test_parse_view_output(stdout: str, expected: str | None) -> None:
    assert parse_view_output(stdout) == expected


class _Recorder:
    def __init__(self, stdout: str = "", error: ProcessError | None = None) -> None:
        self.stdout = stdout
        self.error = error
        self.runs: list[tuple[list[str], Path, float | None]] = []
        self.silent: list[tuple[list[str], Path]] = []

    def run(
        self,
        cmd: list[str],
        cwd: Path,
        extra_env: Mapping[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        self.runs.append((cmd, cwd, timeout))
        if self.error is not None:
            return Err(self.error)
        return Ok(self.stdout)

    def run_silent(
        self,
        cmd: list[str],
        cwd: Path,
        extra_env: Mapping[str, str] | None = None,
    ) -> Result[None, ProcessError]:
        self.silent.append((cmd, cwd))
        if self.error is not None:
            return Err(self.error)
        return Ok(None)


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> _Recorder:
    rec = _Recorder()
    monkeypatch.setattr(runner_mod, "run", rec.run)
    monkeypatch.setattr(runner_mod, "run_silent", rec.run_silent)
    return rec


def _registry(tmp_path: Path, console: MockConsole, *, dry_run: bool = False) -> NpmRegistry:
    return NpmRegistry(
        runner=CommandRunner(console=console, dry_run=dry_run),
        workdir=tmp_path,
        package="code-server",
        query_timeout=30.0,
    )


def test_published_version_queries_exact_version(tmp_path: Path, recorder: _Recorder) -> None:
    recorder.stdout = '"4.0.1-beta-abc"'
    registry = _registry(tmp_path, MockConsole())

    result = registry.published_version("4.0.1-beta-abc")

    assert result == Ok("4.0.1-beta-abc")
    assert recorder.runs == [
        (["npm", "view", "code-server@4.0.1-beta-abc", "version", "--json"], tmp_path, 30.0)
    ]


def test_published_version_empty_output_is_none(tmp_path: Path, recorder: _Recorder) -> None:
    registry = _registry(tmp_path, MockConsole())
    assert registry.published_version("9.9.9") == Ok(None)


def test_published_version_failure_is_err(tmp_path: Path, recorder: _Recorder) -> None:
    recorder.error = ProcessError(("npm", "view"), 1, "", "E404")
    registry = _registry(tmp_path, MockConsole())

    result = registry.published_version("1.0.0")

    assert isinstance(result, Err)
    assert result.error.stderr == "E404"


def test_lookup_runs_during_dry_run(tmp_path: Path, recorder: _Recorder) -> None:
    registry = _registry(tmp_path, MockConsole(), dry_run=True)
    registry.published_version("1.0.0")
    assert len(recorder.runs) == 1


def test_bump_runs_in_bundle_dir(tmp_path: Path, recorder: _Recorder) -> None:
    console = MockConsole()
    bundle = tmp_path / "release"
    registry = _registry(tmp_path, console)

    assert registry.bump_version(bundle, "4.0.1-4769-abc") == Ok(None)

    assert recorder.silent == [(["npm", "version", "4.0.1-4769-abc", "--no-git-tag-version"], bundle)]
    assert console.commands == ["npm version 4.0.1-4769-abc --no-git-tag-version"]


def test_publish_is_non_interactive_with_tag(tmp_path: Path, recorder: _Recorder) -> None:
    bundle = tmp_path / "release"
    registry = _registry(tmp_path, MockConsole())

    assert registry.publish(bundle, "beta") == Ok(None)

    assert recorder.silent == [
        (["yarn", "publish", "--non-interactive", str(bundle), "--tag", "beta"], tmp_path)
    ]


def test_dry_run_echoes_but_does_not_write(tmp_path: Path, recorder: _Recorder) -> None:
    console = MockConsole()
    registry = _registry(tmp_path, console, dry_run=True)

    assert registry.bump_version(tmp_path / "release", "1.0.0-beta-x") == Ok(None)
    assert registry.publish(tmp_path / "release", "beta") == Ok(None)

    assert recorder.silent == []
    assert len(console.commands) == 2
    assert console.commands[1].startswith("yarn publish --non-interactive")

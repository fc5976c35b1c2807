"""Publish pipeline: inputs -> bundle -> resolve -> gate -> publish.

Each step runs once, in order, and the first error ends the run. There is
no retry; CI re-runs the whole job instead.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from npmship.core.result import Err, Ok, Result
from npmship.output.console import ConsoleProtocol, Style
from npmship.platform.paths import home
from npmship.release.contracts import PublishOutcome, PublishRequest
from npmship.release.domain.environment import Environment
from npmship.release.domain.model import PublishInputs
from npmship.release.domain.resolver import resolve
from npmship.release.errors import ArtifactError, PublishError
from npmship.release.flow.gate import PublishGate, RegistryLookup
from npmship.release.flow.publisher import PackageRegistry, Publisher
from npmship.release.infra.artifacts import ArtifactStore, extract_bundle
from npmship.release.infra.credentials import write_ignore_file, write_npmrc
from npmship.release.infra.npm import NpmRegistry
from npmship.release.infra.runner import CommandRunner
from npmship.release.resolve.inputs import build_inputs


class Registry(RegistryLookup, PackageRegistry, Protocol):
    pass


class ArtifactSource(Protocol):
    def download(
        self,
        name: str,
        dest: Path,
        *,
        environment: Environment,
        branch: str,
    ) -> Result[Path, ArtifactError]: ...


@dataclass(frozen=True, slots=True)
class PublishServices:
    """External collaborators of the pipeline, swappable in tests."""

    registry: Registry
    artifacts: ArtifactSource
    home: Path


ServicesFactory = Callable[[PublishRequest, PublishInputs, ConsoleProtocol], PublishServices]


def default_services(
    request: PublishRequest,
    inputs: PublishInputs,
    console: ConsoleProtocol,
) -> PublishServices:
    runner = CommandRunner(console=console, dry_run=request.dry_run)
    cfg = request.config
    return PublishServices(
        registry=NpmRegistry(
            runner=runner,
            workdir=request.workdir,
            package=cfg.package,
            query_timeout=cfg.query_timeout,
        ),
        artifacts=ArtifactStore(
            runner=runner,
            workdir=request.workdir,
            workflow=cfg.workflow,
            token=inputs.github_token,
            repo=cfg.repo,
        ),
        home=home(),
    )


def _provision_credentials(
    request: PublishRequest,
    inputs: PublishInputs,
    services: PublishServices,
    console: ConsoleProtocol,
) -> Result[None, PublishError]:
    # Outside CI the developer's own ~/.npmrc is left alone.
    if not inputs.ci:
        return Ok(None)
    if request.dry_run:
        console.print(f"dry run: not writing {services.home / '.npmrc'}", Style.DIM)
        return Ok(None)

    written = write_npmrc(services.home, registry=request.config.registry, token=inputs.npm_token)
    if isinstance(written, Err):
        return written
    console.print(f"wrote npm credentials to {written.value}", Style.DIM)
    return Ok(None)


def _prepare_bundle(
    request: PublishRequest,
    inputs: PublishInputs,
    services: PublishServices,
    console: ConsoleProtocol,
) -> Result[Path, PublishError]:
    cfg = request.config
    ctx = inputs.context
    artifact_dir = request.workdir / cfg.artifact_dir

    console.info(f"downloading {cfg.artifact} ({ctx.environment}, branch {ctx.branch_ref})")
    downloaded = services.artifacts.download(
        cfg.artifact,
        artifact_dir,
        environment=ctx.environment,
        branch=ctx.branch_ref,
    )
    if isinstance(downloaded, Err):
        return downloaded

    extracted = extract_bundle(downloaded.value / cfg.archive, request.workdir)
    if isinstance(extracted, Err):
        return extracted
    console.print(f"extracted {extracted.value} files from {cfg.archive}", Style.DIM)

    bundle_dir = request.workdir / cfg.bundle_dir
    ignored = write_ignore_file(bundle_dir, cfg.ignore)
    if isinstance(ignored, Err):
        return ignored
    return Ok(bundle_dir)


def run_publish(
    request: PublishRequest,
    console: ConsoleProtocol,
    *,
    make_services: ServicesFactory = default_services,
) -> Result[PublishOutcome, PublishError]:
    """Run the whole publish for one CI job.

    Returns:
        Ok(PublishOutcome) when the version was published or was already on
        the registry; Err with the first failure otherwise.
    """
    built = build_inputs(request.environ)
    if isinstance(built, Err):
        return built
    inputs = built.value
    ctx = inputs.context
    services = make_services(request, inputs, console)

    provisioned = _provision_credentials(request, inputs, services, console)
    if isinstance(provisioned, Err):
        return provisioned

    bundle = _prepare_bundle(request, inputs, services, console)
    if isinstance(bundle, Err):
        return bundle

    decision = resolve(ctx)
    if ctx.environment.bumps_version:
        console.info(f"found environment: {ctx.environment}")
    console.info(f"using tag: {decision.distribution_tag}")

    gate = PublishGate(lookup=services.registry, console=console)
    if not gate.should_publish(decision.release_version):
        return Ok(
            PublishOutcome(
                status="already_published",
                environment=ctx.environment,
                decision=decision,
                dry_run=request.dry_run,
            )
        )

    published = Publisher(registry=services.registry).publish(
        bundle.value, decision, ctx.environment
    )
    if isinstance(published, Err):
        return published

    return Ok(
        PublishOutcome(
            status="published",
            environment=ctx.environment,
            decision=decision,
            dry_run=request.dry_run,
        )
    )

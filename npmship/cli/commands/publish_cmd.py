from __future__ import annotations

import os
from pathlib import Path

import typer

from npmship.cli.context import build_context
from npmship.core.result import Err
from npmship.output.errors import print_publish_error, publish_error_exit_code
from npmship.release.contracts import PublishRequest
from npmship.release.domain.resolver import resolve
from npmship.release.flow.pipeline import run_publish
from npmship.release.resolve.inputs import build_inputs
from npmship.release.view.render import decision_json, render_decision, render_outcome


def publish(
    workdir: Path | None = typer.Option(
        None,
        "--workdir",
        help="Directory to download, unpack and publish from (default: cwd).",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Path to npmship.toml (default: <workdir>/npmship.toml if present).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print npm/yarn commands instead of bumping and publishing.",
    ),
) -> None:
    """Publish the CI-built npm bundle under the version and tag for NPM_ENVIRONMENT."""
    ctx = build_context(workdir=workdir, config_path=config)
    request = PublishRequest(
        workdir=ctx.workdir,
        environ=dict(os.environ),
        config=ctx.config,
        dry_run=dry_run,
    )

    result = run_publish(request, ctx.console)
    if isinstance(result, Err):
        print_publish_error(result.error, ctx.console)
        raise typer.Exit(code=publish_error_exit_code(result.error))

    render_outcome(ctx.console, result.value)


def resolve_cmd(
    as_json: bool = typer.Option(False, "--json", help="Print the decision as JSON."),
) -> None:
    """Show the version and tag this environment would publish, without touching anything."""
    ctx = build_context()
    built = build_inputs(dict(os.environ))
    if isinstance(built, Err):
        print_publish_error(built.error, ctx.console)
        raise typer.Exit(code=publish_error_exit_code(built.error))

    release_ctx = built.value.context
    decision = resolve(release_ctx)
    if as_json:
        typer.echo(decision_json(release_ctx, decision))
        return
    render_decision(ctx.console, release_ctx, decision)

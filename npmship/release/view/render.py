from __future__ import annotations

import json

from npmship.output.console import ConsoleProtocol, Style
from npmship.release.contracts import PublishOutcome
from npmship.release.domain.model import PublishDecision, ReleaseContext


def render_decision(console: ConsoleProtocol, ctx: ReleaseContext, decision: PublishDecision) -> None:
    console.header(f"npm release ({ctx.environment})")
    console.print(f"base version:  {ctx.base_version}")
    console.print(f"branch:        {ctx.branch_ref}")
    console.print(f"version:       {decision.release_version}")
    console.print(f"tag:           {decision.distribution_tag}")


def decision_json(ctx: ReleaseContext, decision: PublishDecision) -> str:
    """Machine-readable decision for ``npmship resolve --json``."""
    return json.dumps(
        {
            "environment": str(ctx.environment),
            "branch": ctx.branch_ref,
            "version": decision.release_version,
            "tag": decision.distribution_tag,
        },
        sort_keys=True,
    )


def render_outcome(console: ConsoleProtocol, outcome: PublishOutcome) -> None:
    version = outcome.decision.release_version
    tag = outcome.decision.distribution_tag
    if not outcome.published:
        console.success(f"{version} is already published")
        return
    if outcome.dry_run:
        console.print(f"dry run: would publish {version} with tag {tag}", Style.DIM)
        return
    console.success(f"published {version} with tag {tag}")

"""Version and distribution tag resolution.

    production   4.0.1                  latest
    staging      4.0.1-beta-<sha>       beta
    development  4.0.1-<pr>-<sha>       <pr>

Development and staging versions embed the commit so every build publishes
a new version; the registry refuses to overwrite an existing one.
"""

from __future__ import annotations

from typing import assert_never

from npmship.release.domain.environment import Environment
from npmship.release.domain.model import BETA_TAG, LATEST_TAG, PublishDecision, ReleaseContext


def pr_number_from_ref(source_ref: str) -> str:
    """Return the third "/"-separated field of ``source_ref``.

    For ``refs/pull/4769/merge`` this is the PR number. Other ref shapes are
    not corrected: ``refs/heads/main`` yields ``"main"`` and a ref with fewer
    than three fields yields ``""``.
    """
    fields = source_ref.split("/")
    if len(fields) < 3:
        return ""
    return fields[2]


def resolve(ctx: ReleaseContext) -> PublishDecision:
    match ctx.environment:
        case Environment.PRODUCTION:
            return PublishDecision(release_version=ctx.base_version, distribution_tag=LATEST_TAG)
        case Environment.STAGING:
            return PublishDecision(
                release_version=f"{ctx.base_version}-beta-{ctx.commit_id}",
                distribution_tag=BETA_TAG,
            )
        case Environment.DEVELOPMENT:
            pr_number = pr_number_from_ref(ctx.source_ref)
            return PublishDecision(
                release_version=f"{ctx.base_version}-{pr_number}-{ctx.commit_id}",
                distribution_tag=pr_number,
            )
        case _:
            assert_never(ctx.environment)

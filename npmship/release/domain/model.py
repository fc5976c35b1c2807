from __future__ import annotations

from dataclasses import dataclass

from npmship.release.domain.environment import Environment

DEFAULT_BRANCH = "main"
LATEST_TAG = "latest"
BETA_TAG = "beta"


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """Everything the version resolver needs, captured once per run."""

    environment: Environment
    base_version: str
    commit_id: str
    branch_ref: str
    source_ref: str

    def __post_init__(self) -> None:
        if self.environment is not Environment.PRODUCTION and not self.commit_id:
            raise ValueError(f"commit id is required for {self.environment} releases")


@dataclass(frozen=True, slots=True)
class PublishInputs:
    """Validated inputs for a publish run.

    Tokens are kept apart from ReleaseContext so version resolution never
    sees credentials.
    """

    context: ReleaseContext
    npm_token: str
    github_token: str
    ci: bool


@dataclass(frozen=True, slots=True)
class PublishDecision:
    release_version: str
    distribution_tag: str

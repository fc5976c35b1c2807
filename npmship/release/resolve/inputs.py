"""Build validated publish inputs from an environment snapshot.

All required variables are checked up front, in a fixed order, whatever
environment is being targeted. The first one missing stops the run.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from npmship.core.result import Err, Ok, Result
from npmship.release.domain.environment import parse_environment
from npmship.release.domain.model import DEFAULT_BRANCH, PublishInputs, ReleaseContext
from npmship.release.errors import InputError, MissingInput

NPM_TOKEN = "NPM_TOKEN"
GITHUB_TOKEN = "GITHUB_TOKEN"
NPM_ENVIRONMENT = "NPM_ENVIRONMENT"
VERSION = "VERSION"
GITHUB_REF = "GITHUB_REF"
GITHUB_REF_NAME = "GITHUB_REF_NAME"
GITHUB_SHA = "GITHUB_SHA"
CI = "CI"


@dataclass(frozen=True, slots=True)
class RequiredInput:
    name: str
    hint: str
    # Values that end up in a version string or auth line cannot be blank.
    allow_blank: bool = False


REQUIRED_INPUTS: tuple[RequiredInput, ...] = (
    RequiredInput(NPM_TOKEN, "Cannot publish to npm without credentials."),
    RequiredInput(
        GITHUB_TOKEN,
        "Cannot download npm release artifact without GitHub credentials.",
    ),
    RequiredInput(NPM_ENVIRONMENT, "Cannot determine npm tag without NPM_ENVIRONMENT."),
    RequiredInput(VERSION, "Cannot publish to npm without VERSION."),
    RequiredInput(
        GITHUB_REF,
        "Are you running this locally? We rely on values provided by GitHub.",
    ),
    RequiredInput(
        GITHUB_REF_NAME,
        "Are you running this locally? We rely on values provided by GitHub.",
        allow_blank=True,
    ),
    RequiredInput(GITHUB_SHA, "Are you running this locally? We rely on values provided by GitHub."),
)


def first_missing(environ: Mapping[str, str]) -> MissingInput | None:
    for item in REQUIRED_INPUTS:
        value = environ.get(item.name)
        if value is None or (not item.allow_blank and not value.strip()):
            return MissingInput(name=item.name, hint=item.hint)
    return None


def default_branch(ref_name: str | None) -> str:
    """Pushes to main and release workflows carry no ref name."""
    if ref_name is None or not ref_name.strip():
        return DEFAULT_BRANCH
    return ref_name.strip()


def build_inputs(environ: Mapping[str, str]) -> Result[PublishInputs, InputError]:
    """Validate ``environ`` and build PublishInputs.

    Args:
        environ: Snapshot of the process environment (or a test dict).

    Returns:
        Ok(PublishInputs), Err(MissingInput) naming the first absent variable,
        or Err(UnsupportedEnvironment) for an unknown NPM_ENVIRONMENT.
    """
    missing = first_missing(environ)
    if missing is not None:
        return Err(missing)

    env_result = parse_environment(environ[NPM_ENVIRONMENT].strip())
    if isinstance(env_result, Err):
        return env_result

    context = ReleaseContext(
        environment=env_result.value,
        base_version=environ[VERSION].strip(),
        commit_id=environ[GITHUB_SHA].strip(),
        branch_ref=default_branch(environ.get(GITHUB_REF_NAME)),
        source_ref=environ[GITHUB_REF].strip(),
    )

    return Ok(
        PublishInputs(
            context=context,
            npm_token=environ[NPM_TOKEN].strip(),
            github_token=environ[GITHUB_TOKEN].strip(),
            ci=bool(environ.get(CI)),
        )
    )

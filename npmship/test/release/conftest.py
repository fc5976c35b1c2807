from __future__ import annotations

import pytest


@pytest.fixture
def ci_environ() -> dict[str, str]:
    """A complete environment as GitHub Actions provides it for a PR build."""
    return {
        "NPM_TOKEN": "npm-secret",
        "GITHUB_TOKEN": "gh-secret",
        "NPM_ENVIRONMENT": "development",
        "VERSION": "4.0.1",
        "GITHUB_REF": "refs/pull/4769/merge",
        "GITHUB_REF_NAME": "feature/npm-bundle",
        "GITHUB_SHA": "abc123",
    }

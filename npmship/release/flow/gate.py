"""Idempotency gate: never publish a version the registry already has."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from npmship.core.result import Err, Result
from npmship.output.console import ConsoleProtocol
from npmship.platform.process import ProcessError


class RegistryLookup(Protocol):
    def published_version(self, version: str) -> Result[str | None, ProcessError]: ...


@dataclass(frozen=True, slots=True)
class PublishGate:
    lookup: RegistryLookup
    console: ConsoleProtocol

    def existing_version(self, release_version: str) -> str | None:
        """Return the registry's version string for ``release_version``, if any.

        A failed lookup counts as "not published": the registry query tool
        does not reliably distinguish "not found" from other failures, and a
        real conflict will still be rejected by the publish itself.
        """
        result = self.lookup.published_version(release_version)
        if isinstance(result, Err):
            detail = result.error.stderr.strip().splitlines()
            suffix = f" ({detail[-1]})" if detail else ""
            self.console.warning(f"registry lookup for {release_version} failed{suffix}")
            return None
        return result.value

    def should_publish(self, release_version: str) -> bool:
        return self.existing_version(release_version) != release_version

"""Exit codes for the npmship CLI.

CI only distinguishes success from failure, so every failure kind maps to
the same non-zero status. A skipped publish (version already on the
registry) is a success.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values are part of the CI contract."""

    OK = 0
    FAILURE = 1

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

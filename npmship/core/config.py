"""Typed publish configuration.

Settings live in an optional ``npmship.toml`` under a ``[publish]`` table.
Every key has a default matching the code-server release layout, so most
pipelines need no file at all.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "PublishConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "npmship.toml"

DEFAULT_PACKAGE = "code-server"
DEFAULT_REGISTRY = "registry.npmjs.org"
DEFAULT_ARTIFACT = "npm-package"
DEFAULT_ARTIFACT_DIR = "release-npm-package"
DEFAULT_ARCHIVE = "package.tar.gz"
DEFAULT_BUNDLE_DIR = "release"
DEFAULT_WORKFLOW = "ci.yaml"
# node_modules.asar is a symlink in the bundle and must not be packed.
DEFAULT_IGNORE = ("node_modules.asar",)
DEFAULT_QUERY_TIMEOUT = 60.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PublishConfig:
    """Where the bundle comes from and where it goes.

    Attributes:
        package: npm package name queried on the registry.
        registry: Registry host used for the auth token line in .npmrc.
        artifact: CI artifact name holding the packed bundle.
        artifact_dir: Directory the artifact is downloaded into.
        archive: Archive file name inside ``artifact_dir``.
        bundle_dir: Directory the archive unpacks to; this is what gets published.
        workflow: Workflow file whose runs produce the artifact.
        repo: owner/name passed to gh; None uses the checkout in the workdir.
        ignore: Entries written to ``bundle_dir/.npmignore``.
        query_timeout: Seconds allowed for a registry lookup.
    """

    package: str = DEFAULT_PACKAGE
    registry: str = DEFAULT_REGISTRY
    artifact: str = DEFAULT_ARTIFACT
    artifact_dir: str = DEFAULT_ARTIFACT_DIR
    archive: str = DEFAULT_ARCHIVE
    bundle_dir: str = DEFAULT_BUNDLE_DIR
    workflow: str = DEFAULT_WORKFLOW
    repo: str | None = None
    ignore: tuple[str, ...] = field(default=DEFAULT_IGNORE)
    query_timeout: float = DEFAULT_QUERY_TIMEOUT

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> PublishConfig:
        """Create a config from parsed TOML (the whole document)."""
        publish: StrDict = get_table(data, "publish") or {}

        ignore = get_str_list(publish, "ignore")
        timeout = get_float(publish, "query_timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"query_timeout must be positive, got {timeout}")

        return cls(
            package=get_str(publish, "package") or DEFAULT_PACKAGE,
            registry=get_str(publish, "registry") or DEFAULT_REGISTRY,
            artifact=get_str(publish, "artifact") or DEFAULT_ARTIFACT,
            artifact_dir=get_str(publish, "artifact_dir") or DEFAULT_ARTIFACT_DIR,
            archive=get_str(publish, "archive") or DEFAULT_ARCHIVE,
            bundle_dir=get_str(publish, "bundle_dir") or DEFAULT_BUNDLE_DIR,
            workflow=get_str(publish, "workflow") or DEFAULT_WORKFLOW,
            repo=get_str(publish, "repo"),
            ignore=DEFAULT_IGNORE if ignore is None else ignore,
            query_timeout=DEFAULT_QUERY_TIMEOUT if timeout is None else timeout,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[PublishConfig, ConfigError]:
    """Load and parse publish configuration from a TOML file.

    Args:
        path: Path to npmship.toml

    Returns:
        Ok(PublishConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(PublishConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[PublishConfig, ConfigError]:
    """Load config if the file exists, otherwise return defaults.

    A file that exists but is invalid is still an error.
    """
    if not path.exists():
        return Ok(PublishConfig())
    return load_config(path)

"""Tests for npmship.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from npmship.core.config import (
    PublishConfig,
    load_config,
    load_config_or_default,
)
from npmship.core.result import Err, Ok


class TestPublishConfig:
    def test_defaults_match_release_layout(self) -> None:
        config = PublishConfig()
        assert config.package == "code-server"
        assert config.registry == "registry.npmjs.org"
        assert config.artifact == "npm-package"
        assert config.artifact_dir == "release-npm-package"
        assert config.archive == "package.tar.gz"
        assert config.bundle_dir == "release"
        assert config.workflow == "ci.yaml"
        assert config.repo is None
        assert config.ignore == ("node_modules.asar",)
        assert config.query_timeout == 60.0

    def test_frozen(self) -> None:
        config = PublishConfig()
        with pytest.raises(AttributeError):
            config.package = "other"  # type: ignore[misc]

    def test_from_dict_reads_publish_table(self) -> None:
        config = PublishConfig.from_dict(
            {
                "publish": {
                    "package": "my-pkg",
                    "repo": "acme/my-pkg",
                    "ignore": ["a", " ", "b"],
                    "query_timeout": 5,
                }
            }
        )
        assert config.package == "my-pkg"
        assert config.repo == "acme/my-pkg"
        assert config.ignore == ("a", "b")
        assert config.query_timeout == 5.0
        assert config.bundle_dir == "release"

    def test_from_dict_empty_ignore_list_is_kept(self) -> None:
        config = PublishConfig.from_dict({"publish": {"ignore": []}})
        assert config.ignore == ()

    def test_from_dict_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValueError, match="query_timeout"):
            PublishConfig.from_dict({"publish": {"query_timeout": 0}})


class TestLoadConfig:
    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "npmship.toml"
        path.write_text('[publish]\npackage = "x"\nworkflow = "build.yml"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.package == "x"
        assert result.value.workflow == "build.yml"

    def test_missing_file_is_error(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "nope.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml_is_error(self, tmp_path: Path) -> None:
        path = tmp_path / "npmship.toml"
        path.write_text("[publish\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_invalid_structure_is_error(self, tmp_path: Path) -> None:
        path = tmp_path / "npmship.toml"
        path.write_text("[publish]\nquery_timeout = -1\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid config structure" in result.error.message

    def test_or_default_without_file(self, tmp_path: Path) -> None:
        result = load_config_or_default(tmp_path / "npmship.toml")
        assert result == Ok(PublishConfig())

    def test_or_default_still_reports_broken_file(self, tmp_path: Path) -> None:
        path = tmp_path / "npmship.toml"
        path.write_text("not toml = = =", encoding="utf-8")
        assert isinstance(load_config_or_default(path), Err)

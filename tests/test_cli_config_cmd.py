"""Tests for archivectl CLI config commands."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from archivectl.cli.main import cli
from archivectl.core.config import Config, Profile
from archivectl.uploaders.constants import MIB


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ARCHIVECTL_PROFILE", raising=False)


def _write_config(path: Path) -> None:
    cfg = Config(
        default_profile="default",
        profiles={
            "default": Profile(),
            "prod": Profile(aws_profile="backup", part_size=64 * MIB, upload_workers=16),
        },
    )
    cfg.save(path)


class TestConfigInit:
    """Tests for config init command."""

    def test_config_init_new(self, runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"

        with patch("archivectl.cli.config_cmd.CONFIG_FILE", config_file):
            result = runner.invoke(
                cli,
                ["config", "init", "--aws-profile", "backup", "--part-size", str(8 * MIB)],
            )

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(config_file.read_text())
        assert data["default_profile"] == "default"
        assert data["profiles"]["default"]["aws_profile"] == "backup"
        assert data["profiles"]["default"]["part_size"] == 8 * MIB

    def test_config_init_invalid_part_size(self, runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"

        with patch("archivectl.cli.config_cmd.CONFIG_FILE", config_file):
            result = runner.invoke(cli, ["config", "init", "--part-size", "1000"])

        assert result.exit_code == 1
        assert not config_file.exists()

    def test_config_init_existing_profile_no_force(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        config_file = tmp_path / "config.yaml"
        _write_config(config_file)

        with patch("archivectl.cli.config_cmd.CONFIG_FILE", config_file):
            result = runner.invoke(cli, ["config", "init", "--profile", "prod"])

        assert result.exit_code != 0
        assert "already exists" in result.output

    def test_config_init_with_force(self, runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        _write_config(config_file)

        with patch("archivectl.cli.config_cmd.CONFIG_FILE", config_file):
            result = runner.invoke(
                cli,
                ["config", "init", "--profile", "prod", "--workers", "8", "--force"],
            )

        assert result.exit_code == 0
        cfg = Config.load(config_file)
        assert cfg.profiles["prod"].upload_workers == 8
        assert cfg.default_profile == "default"


class TestConfigShow:
    """Tests for config show command."""

    def test_config_show_json(self, runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        _write_config(config_file)

        with patch("archivectl.cli.config_cmd.CONFIG_FILE", config_file):
            result = runner.invoke(cli, ["config", "show", "-o", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["profiles"] == ["default", "prod"]
        assert data["profile_details"]["prod"]["aws_profile"] == "backup"

    def test_config_show_table(self, runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        _write_config(config_file)

        with patch("archivectl.cli.config_cmd.CONFIG_FILE", config_file):
            result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert "Profile: default (default)" in result.output
        assert "Profile: prod" in result.output

    def test_config_show_no_config(self, runner: CliRunner, tmp_path: Path) -> None:
        with patch("archivectl.cli.config_cmd.CONFIG_FILE", tmp_path / "missing.yaml"):
            result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 1


class TestConfigUseContext:
    """Tests for config use-context command."""

    def test_use_context(self, runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        _write_config(config_file)

        with patch("archivectl.cli.config_cmd.CONFIG_FILE", config_file):
            result = runner.invoke(cli, ["config", "use-context", "prod"])

        assert result.exit_code == 0
        assert Config.load(config_file).default_profile == "prod"

    def test_use_context_unknown(self, runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        _write_config(config_file)

        with patch("archivectl.cli.config_cmd.CONFIG_FILE", config_file):
            result = runner.invoke(cli, ["config", "use-context", "nope"])

        assert result.exit_code == 1
        assert "Available profiles: default, prod" in result.output

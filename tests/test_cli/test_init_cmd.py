"""Tests for pagegate init command."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from pagegate.cli.main import app
from pagegate.core.config import DEFAULT_CONFIG_FILENAME, load_config

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_init_writes_loadable_config(project: Path) -> None:
    result = runner.invoke(
        app,
        ["init", "--base-url", "https://www.saucedemo.com", "--timeout-ms", "15000"],
    )
    assert result.exit_code == 0, result.output
    config = load_config(config_path=project / DEFAULT_CONFIG_FILENAME)
    assert config.base_url == "https://www.saucedemo.com"
    assert config.wait.timeout_ms == 15000
    assert config.wait.poll_interval_ms == 500
    assert (project / "pages").is_dir()


def test_init_custom_pages_dir_and_browser(project: Path) -> None:
    result = runner.invoke(app, ["init", "--pages-dir", "screens", "--browser", "firefox"])
    assert result.exit_code == 0
    config = load_config(config_path=project / DEFAULT_CONFIG_FILENAME)
    assert config.pages_dir == "screens"
    assert config.driver.browser == "firefox"
    assert (project / "screens").is_dir()


def test_init_refuses_to_overwrite(project: Path) -> None:
    (project / DEFAULT_CONFIG_FILENAME).write_text("base_url: https://mine\n", encoding="utf-8")
    result = runner.invoke(app, ["init", "--base-url", "https://other"])
    assert result.exit_code == 1
    assert "already exists" in result.output
    assert load_config(config_path=project / DEFAULT_CONFIG_FILENAME).base_url == "https://mine"


def test_init_force_overwrites(project: Path) -> None:
    (project / DEFAULT_CONFIG_FILENAME).write_text("base_url: https://mine\n", encoding="utf-8")
    result = runner.invoke(app, ["init", "--force", "--base-url", "https://other"])
    assert result.exit_code == 0
    assert load_config(config_path=project / DEFAULT_CONFIG_FILENAME).base_url == "https://other"


def test_init_rejects_interval_not_below_timeout(project: Path) -> None:
    result = runner.invoke(app, ["init", "--timeout-ms", "400"])
    assert result.exit_code == 1
    assert "Invalid settings" in result.output
    assert not (project / DEFAULT_CONFIG_FILENAME).exists()

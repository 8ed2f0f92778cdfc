from __future__ import annotations

from pathlib import Path

import pytest

from practice_form.config import BASE_DIR, DEFAULT_BLOCKED_HOSTS, AppConfig, BrowserConfig


def test_defaults_without_environment() -> None:
    config = AppConfig.from_env({})
    assert config.base_url == "https://demoqa.com"
    assert config.form_url == "https://demoqa.com/automation-practice-form"
    assert config.browser.navigation_timeout_ms == 20000
    assert config.browser.command_timeout_ms == 10000
    assert (config.browser.viewport_width, config.browser.viewport_height) == (1280, 800)
    assert config.browser.blocked_hosts == DEFAULT_BLOCKED_HOSTS
    assert config.fixtures_dir == BASE_DIR / "fixtures"


def test_environment_overrides() -> None:
    config = AppConfig.from_env(
        {
            "BASE_URL": "http://localhost:3000",
            "NAV_TIMEOUT_MS": "5000",
            "CMD_TIMEOUT_MS": "2500",
            "VIEWPORT_WIDTH": "1920",
            "VIEWPORT_HEIGHT": "1080",
            "E2E_HEADLESS": "false",
            "E2E_LOG_LEVEL": "debug",
            "E2E_FIXTURES_DIR": "/tmp/fixtures",
        }
    )
    assert config.form_url == "http://localhost:3000/automation-practice-form"
    assert config.browser.navigation_timeout_ms == 5000
    assert config.browser.command_timeout_ms == 2500
    assert config.browser.viewport_width == 1920
    assert config.browser.viewport_height == 1080
    assert config.browser.headless is False
    assert config.log_level == "DEBUG"
    assert config.fixtures_dir == Path("/tmp/fixtures")


def test_malformed_integer_fails_at_startup() -> None:
    with pytest.raises(ValueError, match="NAV_TIMEOUT_MS"):
        AppConfig.from_env({"NAV_TIMEOUT_MS": "twenty"})


def test_retries_follow_execution_mode() -> None:
    assert AppConfig(browser=BrowserConfig(headless=True)).scenario_retries == 1
    assert AppConfig(browser=BrowserConfig(headless=False)).scenario_retries == 0


def test_dotenv_does_not_override_process_environment(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / ".env").write_text("BASE_URL=http://from-dotenv\n# comment\nCMD_TIMEOUT_MS='4000'\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BASE_URL", "http://from-process")
    # Registered with monkeypatch so the value loaded from .env is removed afterwards.
    monkeypatch.setenv("CMD_TIMEOUT_MS", "1")
    monkeypatch.delenv("CMD_TIMEOUT_MS")
    config = AppConfig.from_env()
    assert config.base_url == "http://from-process"
    assert config.browser.command_timeout_ms == 4000

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple
from urllib.parse import urljoin

BASE_DIR = Path(__file__).parent
FORM_PATH = "/automation-practice-form"

DEFAULT_BLOCKED_HOSTS: Tuple[str, ...] = (
    "*.doubleclick.net",
    "*.googlesyndication.com",
    "*.googletagservices.com",
    "*.adnxs.com",
    "*.ad.plus",
    "cdn.ad.plus",
)


def _load_dotenv() -> None:
    repo_root = Path(__file__).resolve().parents[2]
    candidates = [repo_root / ".env", Path.cwd() / ".env"]
    for env_path in candidates:
        if not env_path.exists():
            continue
        for line in env_path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or "=" not in stripped:
                continue
            key, value = stripped.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value
        break


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class BrowserConfig:
    headless: bool = True
    slow_mo_ms: int = 0
    viewport_width: int = 1280
    viewport_height: int = 800
    navigation_timeout_ms: int = 20000
    command_timeout_ms: int = 10000
    trace: bool = False
    blocked_hosts: Tuple[str, ...] = DEFAULT_BLOCKED_HOSTS


@dataclass(frozen=True)
class RetryConfig:
    run_mode: int = 1
    open_mode: int = 0


@dataclass(frozen=True)
class AppConfig:
    base_url: str = "https://demoqa.com"
    form_path: str = FORM_PATH
    log_level: str = "INFO"
    fixtures_dir: Path = BASE_DIR / "fixtures"
    runs_dir: Path = BASE_DIR / "runs"
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    retries: RetryConfig = field(default_factory=RetryConfig)

    @property
    def interactive(self) -> bool:
        return not self.browser.headless

    @property
    def scenario_retries(self) -> int:
        return self.retries.open_mode if self.interactive else self.retries.run_mode

    @property
    def form_url(self) -> str:
        return urljoin(self.base_url, self.form_path)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build the configuration once at process start.

        When ``environ`` is omitted the process environment is used, after
        filling it from a ``.env`` file at the repo root or working directory.
        Variables already set are never overridden by the file.
        """
        if environ is None:
            _load_dotenv()
            environ = os.environ
        browser = BrowserConfig(
            headless=_env_bool(environ, "E2E_HEADLESS", True),
            slow_mo_ms=_env_int(environ, "E2E_SLOW_MO_MS", 0),
            viewport_width=_env_int(environ, "VIEWPORT_WIDTH", 1280),
            viewport_height=_env_int(environ, "VIEWPORT_HEIGHT", 800),
            navigation_timeout_ms=_env_int(environ, "NAV_TIMEOUT_MS", 20000),
            command_timeout_ms=_env_int(environ, "CMD_TIMEOUT_MS", 10000),
            trace=_env_bool(environ, "E2E_TRACE", False),
        )
        fixtures_dir = environ.get("E2E_FIXTURES_DIR")
        runs_dir = environ.get("E2E_RUNS_DIR")
        return cls(
            base_url=environ.get("BASE_URL") or cls.base_url,
            log_level=(environ.get("E2E_LOG_LEVEL") or cls.log_level).upper(),
            fixtures_dir=Path(fixtures_dir) if fixtures_dir else BASE_DIR / "fixtures",
            runs_dir=Path(runs_dir) if runs_dir else BASE_DIR / "runs",
            browser=browser,
        )


def configure_logging(config: AppConfig) -> None:
    logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s - %(message)s")

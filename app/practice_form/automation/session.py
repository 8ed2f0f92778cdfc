from __future__ import annotations

import logging
from datetime import datetime, timezone
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, Optional
from urllib.parse import urlparse

from playwright.sync_api import sync_playwright

from ..config import AppConfig
from .page_errors import PageErrorGuard

LOGGER = logging.getLogger(__name__)


def append_run_log(run_dir: Path, message: str) -> None:
    timestamp = datetime.now(timezone.utc).isoformat()
    with (run_dir / "run.log").open("a") as f:
        f.write(f"[{timestamp}] {message}\n")


def is_blocked_host(host: Optional[str], patterns: Iterable[str]) -> bool:
    if not host:
        return False
    host = host.lower()
    return any(fnmatch(host, pattern.lower()) for pattern in patterns)


class BrowserSession:
    """One Chromium browser, context and page for a single scenario attempt.

    Use as a context manager; everything is closed on exit, including when
    the scenario fails.
    """

    def __init__(self, config: AppConfig, run_dir: Path, guard: Optional[PageErrorGuard] = None) -> None:
        self.config = config
        self.run_dir = Path(run_dir)
        self.guard = guard or PageErrorGuard()
        self.trace_path = self.run_dir / "trace.zip"
        self.blocked_requests = 0
        self._playwright = None
        self.browser = None
        self.context = None
        self.page = None

    def _route(self, route) -> None:
        host = urlparse(route.request.url).hostname
        if is_blocked_host(host, self.config.browser.blocked_hosts):
            self.blocked_requests += 1
            route.abort()
            return
        route.continue_()

    def open(self) -> "BrowserSession":
        browser_cfg = self.config.browser
        self.run_dir.mkdir(parents=True, exist_ok=True)
        append_run_log(
            self.run_dir,
            "Session start. "
            f"Base URL: {self.config.base_url} | headless={browser_cfg.headless} | "
            f"viewport={browser_cfg.viewport_width}x{browser_cfg.viewport_height}",
        )
        try:
            self._playwright = sync_playwright().start()
            self.browser = self._playwright.chromium.launch(
                headless=browser_cfg.headless, slow_mo=browser_cfg.slow_mo_ms
            )
            self.context = self.browser.new_context(
                base_url=self.config.base_url,
                viewport={"width": browser_cfg.viewport_width, "height": browser_cfg.viewport_height},
            )
            self.context.set_default_timeout(browser_cfg.command_timeout_ms)
            self.context.set_default_navigation_timeout(browser_cfg.navigation_timeout_ms)
            if browser_cfg.trace:
                self.context.tracing.start(screenshots=True, snapshots=True, sources=True)
            if browser_cfg.blocked_hosts:
                self.context.route("**/*", self._route)
            self.page = self.context.new_page()
            self.page.on("pageerror", self.guard.on_page_error)
        except Exception:
            self.close()
            raise
        return self

    def close(self) -> None:
        """Stop tracing, close the context and browser, stop Playwright.

        Each step runs even when an earlier one raises; the first error
        propagates once everything is shut down.
        """
        context, browser, playwright = self.context, self.browser, self._playwright
        self.context = self.browser = self._playwright = self.page = None
        try:
            if context is not None:
                if self.config.browser.trace:
                    try:
                        context.tracing.stop(path=str(self.trace_path))
                    except Exception as exc:  # noqa: BLE001
                        LOGGER.warning("Trace capture failed: %s", exc)
                context.close()
        finally:
            try:
                if browser is not None:
                    browser.close()
            finally:
                try:
                    if playwright is not None:
                        playwright.stop()
                finally:
                    append_run_log(
                        self.run_dir,
                        f"Session closed. Blocked requests: {self.blocked_requests}; "
                        f"ignored page errors: {len(self.guard.ignored)}; "
                        f"unexpected: {len(self.guard.unexpected)}",
                    )

    def __enter__(self) -> "BrowserSession":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        # Keep the scenario's own failure as the one that propagates.
        try:
            self.close()
        except Exception as close_exc:  # noqa: BLE001
            LOGGER.warning("Session teardown failed after %s: %s", exc_type.__name__, close_exc)

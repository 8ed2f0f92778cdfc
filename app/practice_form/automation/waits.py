from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

DEFAULT_POLL_INTERVAL_MS = 100


@dataclass(frozen=True)
class WaitResult:
    ok: bool
    elapsed_ms: int
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


def poll_until(
    check: Callable[[], bool],
    timeout_ms: int,
    interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> WaitResult:
    """Call ``check`` until it returns true or ``timeout_ms`` elapses.

    ``check`` is always evaluated at least once. Exceptions raised by it
    propagate.
    """
    start = clock()
    deadline = start + timeout_ms / 1000
    while True:
        if check():
            return WaitResult(True, int((clock() - start) * 1000))
        now = clock()
        if now >= deadline:
            return WaitResult(False, int((now - start) * 1000), "timeout")
        sleep(min(interval_ms / 1000, deadline - now))


def wait_for_locator(locator, timeout_ms: int, state: str = "visible") -> WaitResult:
    start = time.monotonic()
    try:
        locator.wait_for(state=state, timeout=timeout_ms)
    except PlaywrightTimeoutError:
        return WaitResult(False, int((time.monotonic() - start) * 1000), f"not {state}")
    return WaitResult(True, int((time.monotonic() - start) * 1000))

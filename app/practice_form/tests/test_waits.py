from __future__ import annotations

import pytest

from practice_form.automation.waits import poll_until


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def test_poll_succeeds_once_check_passes() -> None:
    clock = FakeClock()
    results = iter([False, False, True])
    result = poll_until(lambda: next(results), timeout_ms=1000, interval_ms=100, clock=clock, sleep=clock.sleep)
    assert result.ok
    assert result.elapsed_ms == 200
    assert bool(result) is True


def test_poll_times_out_without_exceeding_budget() -> None:
    clock = FakeClock()
    result = poll_until(lambda: False, timeout_ms=250, interval_ms=100, clock=clock, sleep=clock.sleep)
    assert not result
    assert result.reason == "timeout"
    assert 240 <= result.elapsed_ms <= 250
    assert sum(clock.sleeps) == pytest.approx(0.25)


def test_poll_checks_at_least_once_with_zero_timeout() -> None:
    clock = FakeClock()
    calls = []
    result = poll_until(lambda: calls.append(1) or False, timeout_ms=0, clock=clock, sleep=clock.sleep)
    assert not result
    assert calls == [1]
    assert clock.sleeps == []


def test_poll_propagates_check_errors() -> None:
    def broken() -> bool:
        raise RuntimeError("detached")

    with pytest.raises(RuntimeError):
        poll_until(broken, timeout_ms=100)

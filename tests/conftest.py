# tests/conftest.py

from __future__ import annotations

import pytest

from delounce.scheduler import Scheduler, reset_scheduler

from .fakes import FakeTimer


@pytest.fixture()
def scheduler() -> Scheduler:
    """Fresh scheduler per test, on the real event loop timer."""
    return Scheduler()


@pytest.fixture()
def fake_timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture()
def manual_scheduler(fake_timer: FakeTimer) -> Scheduler:
    """Scheduler whose debounce timers only fire when the test says so."""
    return Scheduler(timer=fake_timer)


@pytest.fixture(autouse=True)
def _no_default_scheduler_leaks():
    reset_scheduler()
    yield
    reset_scheduler()

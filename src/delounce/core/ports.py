# src/delounce/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) for the timer facility.

The debounce registry depends on these Protocols instead of a concrete loop.
asyncio.AbstractEventLoop satisfies TimerFacility as-is (call_later returns a
TimerHandle), and tests can swap in a manual timer.
"""

from typing import Any, Callable, Protocol


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class TimerFacility(Protocol):
    """Schedule a callback after `delay` seconds; the handle cancels it."""

    def call_later(self, delay: float, callback: Callable[..., object], *args: Any) -> Cancellable: ...

# src/delounce/tasks/timing.py

from __future__ import annotations

"""
Time-bound wrappers.

- sleep:    resolve after N ms
- at_least: floor on elapsed time, keeps the task's outcome
- at_most:  ceiling, signals "done or timed out" only
- limit:    floor + ceiling, keeps the outcome when it lands inside the window

All durations are milliseconds. The wrapped task starts when the wrapper is awaited.
"""

import asyncio
import logging
from typing import Any

from ..core.errors import InvalidArgumentError
from .resolver import resolve_task

logger = logging.getLogger(__name__)

# Tasks that outlived their at_most/limit ceiling. Held here so the loop
# does not garbage-collect them mid-flight.
_detached: set[asyncio.Future[Any]] = set()


def _check_ms(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(f"{name} must be a number of milliseconds, got {value!r}")
    if value < 0:
        raise InvalidArgumentError(f"{name} must be >= 0, got {value!r}")
    return float(value)


def _on_detached_done(fut: asyncio.Future[Any]) -> None:
    _detached.discard(fut)
    if fut.cancelled():
        return
    exc = fut.exception()
    if exc is not None:
        logger.debug("Task failed after its deadline passed: %r", exc)


def _detach(fut: asyncio.Future[Any]) -> None:
    _detached.add(fut)
    fut.add_done_callback(_on_detached_done)


async def _race(fut: asyncio.Future[Any], timeout_ms: float) -> bool:
    """Wait for `fut` at most `timeout_ms`. Returns True if it settled in time."""
    if timeout_ms == 0:
        # Let a freshly scheduled task take its first step; an immediate
        # value settles there.
        await asyncio.sleep(0)
    done, _ = await asyncio.wait({fut}, timeout=timeout_ms / 1000.0)
    if fut in done:
        return True
    _detach(fut)
    return False


async def sleep(ms: float | None) -> None:
    """Resolve after `ms` milliseconds. Zero or None returns right away."""
    if not ms:
        return
    await asyncio.sleep(_check_ms("ms", ms) / 1000.0)


async def _wait_remaining(started: float, min_ms: float) -> None:
    loop = asyncio.get_running_loop()
    remaining = min_ms / 1000.0 - (loop.time() - started)
    if remaining > 0:
        await asyncio.sleep(remaining)


async def at_least(min_ms: float, task: Any) -> Any:
    """
    Run `task`, but do not hand back its outcome before `min_ms` has passed.

    Success values and failures are both delayed the same way; failures are
    re-raised, not swallowed. If the task already took longer than `min_ms`,
    the outcome is delivered immediately.
    """
    floor = _check_ms("min_ms", min_ms)
    started = asyncio.get_running_loop().time()

    try:
        result = await resolve_task(task)
    except Exception:
        await _wait_remaining(started, floor)
        raise

    await _wait_remaining(started, floor)
    return result


async def at_most(max_ms: float, task: Any) -> None:
    """
    Wait for `task` to settle, or for `max_ms`, whichever comes first.

    Always returns None and never raises the task's failure: this only tells
    the caller "done or timed out". A task still running at the deadline keeps
    running in the background.
    """
    ceiling = _check_ms("max_ms", max_ms)
    fut = asyncio.ensure_future(resolve_task(task))

    if await _race(fut, ceiling):
        if not fut.cancelled() and fut.exception() is not None:
            logger.debug("at_most: task failed before deadline: %r", fut.exception())
    else:
        logger.debug("at_most: deadline of %sms reached", max_ms)


async def limit(min_ms: float, max_ms: float, task: Any) -> Any:
    """
    at_most(max_ms, at_least(min_ms, task)), keeping the task's outcome.

    - task settles before min_ms:          outcome delivered at min_ms
    - task settles inside [min_ms, max_ms]: outcome delivered right away
    - task overruns max_ms:                returns None at max_ms; the late
                                           value is discarded
    """
    floor = _check_ms("min_ms", min_ms)
    ceiling = _check_ms("max_ms", max_ms)
    if floor > ceiling:
        raise InvalidArgumentError(f"min_ms ({min_ms}) must not exceed max_ms ({max_ms})")

    fut = asyncio.ensure_future(at_least(floor, task))
    if await _race(fut, ceiling):
        return fut.result()

    logger.debug("limit: deadline of %sms reached, dropping result", max_ms)
    return None

# src/delounce/tasks/debounce.py

from __future__ import annotations

"""
Debounce registry.

A name is registered once with a reaction and a delay. Every debounce() call
under that name restarts the quiet-period timer and adds its input to the
batch; when the timer finally fires the reaction runs once with the whole
batch, in submission order, and every submitter's future resolves.
"""

import asyncio
import logging
from typing import Any

from ..core.errors import InvalidArgumentError, NotFoundError
from ..core.models import DebounceRecord
from ..core.ports import TimerFacility
from .resolver import resolve_task

logger = logging.getLogger(__name__)


def _check_delay(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise InvalidArgumentError(f"delay_ms must be a positive number, got {value!r}")
    return float(value)


class DebounceRegistry:
    def __init__(self, timer: TimerFacility | None = None) -> None:
        # None -> the running event loop's call_later
        self._timer = timer
        self._records: dict[str, DebounceRecord] = {}
        self._running: set[asyncio.Task[None]] = set()

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def names(self) -> list[str]:
        return list(self._records)

    def pending(self, name: str) -> list[Any]:
        """Inputs waiting for the next firing under `name` (copy)."""
        return list(self._get(name).pending)

    def record(self, name: str) -> DebounceRecord:
        return self._get(name)

    def _get(self, name: str) -> DebounceRecord:
        rec = self._records.get(name)
        if rec is None:
            raise NotFoundError(f"no debounce reaction registered under {name!r}")
        return rec

    def _timer_facility(self) -> TimerFacility:
        if self._timer is not None:
            return self._timer
        return asyncio.get_running_loop()

    def create_reaction(self, name: str, reaction: Any = None, delay_ms: float | None = None) -> None:
        """
        Register (or re-register) `name`.

        Re-registering resets the record: a pending timer is cancelled and the
        futures of submissions that never fired are cancelled.
        """
        if not name or not reaction or not delay_ms:
            raise InvalidArgumentError("create_debounce_reaction needs name, reaction and delay_ms")
        if not isinstance(name, str):
            raise InvalidArgumentError(f"debounce name must be a string, got {name!r}")
        delay = _check_delay(delay_ms)

        old = self._records.get(name)
        if old is not None:
            self._discard(old)

        self._records[name] = DebounceRecord(name=name, reaction=reaction, delay_ms=delay)
        logger.debug("Debounce registered name=%s delay_ms=%s", name, delay)

    def _discard(self, rec: DebounceRecord) -> None:
        if rec.timer_handle is not None:
            rec.timer_handle.cancel()

        dropped, waiters = rec.take_batch()
        if dropped:
            logger.warning(
                "Debounce %s re-registered with %s unfired submission(s); dropping them",
                rec.name,
                len(dropped),
            )
        for w in waiters:
            if not w.done():
                w.cancel()

    def debounce(
        self,
        name: str,
        task_input: Any,
        delay_ms: float | None = None,
        reaction: Any = None,
    ) -> asyncio.Future[None]:
        """
        Add `task_input` to the batch of `name` and restart its timer.

        Optional `delay_ms`/`reaction` replace the registered ones from now on.
        Returns a future resolved (with None) once the batch holding this input
        has been handled by the reaction, whatever the reaction's outcome.
        """
        rec = self._get(name)

        if delay_ms is not None:
            rec.delay_ms = _check_delay(delay_ms)
        if reaction is not None:
            rec.reaction = reaction

        if rec.timer_handle is not None:
            rec.timer_handle.cancel()

        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        rec.pending.append(task_input)
        rec.waiters.append(waiter)
        rec.timer_handle = self._timer_facility().call_later(rec.delay_ms / 1000.0, self._fire, rec)

        logger.debug("Debounce %s: %s pending, firing in %sms", name, len(rec.pending), rec.delay_ms)
        return waiter

    def _fire(self, rec: DebounceRecord) -> None:
        if self._records.get(rec.name) is not rec:
            # Re-registered after this timer was armed.
            return

        batch, waiters = rec.take_batch()
        if not batch:
            return

        rec.fired += 1
        task = asyncio.get_running_loop().create_task(self._react(rec.name, rec.reaction, batch, waiters))
        self._running.add(task)
        task.add_done_callback(self._running.discard)

    @staticmethod
    async def _react(
        name: str,
        reaction: Any,
        batch: list[Any],
        waiters: list[asyncio.Future[None]],
    ) -> None:
        logger.debug("Debounce %s firing with %s input(s)", name, len(batch))
        try:
            await resolve_task(reaction, batch)
        except Exception:
            logger.exception("Debounce reaction failed name=%s batch_size=%s", name, len(batch))
        finally:
            for w in waiters:
                if not w.done():
                    w.set_result(None)

    async def drain(self) -> None:
        """Wait for reactions that are already running (not for armed timers)."""
        while self._running:
            await asyncio.wait(set(self._running))

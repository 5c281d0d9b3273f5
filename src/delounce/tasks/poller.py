# src/delounce/tasks/poller.py

from __future__ import annotations

import asyncio
import logging
from typing import Any, Generator

from ..core.errors import InvalidArgumentError, PollCancelled
from ..core.models import PollState
from .resolver import resolve_task

logger = logging.getLogger(__name__)


class PollHandle:
    """
    One running poll loop.

    - completion: future resolved with None once the predicate returns a truthy
      value; fails with PollCancelled after cancel(), or with the predicate's
      own exception if it raises
    - cancel(): stop the loop at its next suspension point

    The handle itself is awaitable (same as awaiting completion).
    """

    def __init__(self, interval_ms: float, predicate: Any, args: tuple[Any, ...]) -> None:
        self.interval_ms = interval_ms
        self._predicate = predicate
        self._args = args

        self._loop = asyncio.get_running_loop()
        self.completion: asyncio.Future[None] = self._loop.create_future()
        self._state = PollState.IDLE
        self._cancelled = False
        self._runner: asyncio.Task[None] | None = None
        self.attempts = 0

    @property
    def state(self) -> PollState:
        return self._state

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def __await__(self) -> Generator[Any, None, None]:
        return self.completion.__await__()

    def start(self) -> PollHandle:
        if self._runner is None and not self._state.terminal:
            self._runner = self._loop.create_task(self._run())
        return self

    def cancel(self) -> None:
        """
        Cancel the loop. Latched: works before the loop's first wait, and any
        call after the first (or after the loop finished) does nothing.
        """
        if self._cancelled or self._state.terminal:
            return

        self._cancelled = True
        self._settle(PollState.CANCELLED, PollCancelled())
        if self._runner is not None and not self._runner.done():
            self._runner.cancel()
        logger.debug("Poll cancelled after %s attempt(s)", self.attempts)

    def _settle(self, state: PollState, exc: BaseException | None = None) -> None:
        if self._state.terminal:
            return
        self._state = state
        if self.completion.done():
            return
        if exc is None:
            self.completion.set_result(None)
        else:
            self.completion.set_exception(exc)
            if isinstance(exc, PollCancelled):
                # Cancel-and-forget is a normal use; mark the outcome as
                # retrieved so asyncio does not log it at GC time.
                self.completion.exception()

    async def _run(self) -> None:
        if self._cancelled:
            return

        self._state = PollState.RUNNING
        interval = self.interval_ms / 1000.0
        try:
            while not self._cancelled:
                await asyncio.sleep(interval)
                if self._cancelled:
                    return

                self.attempts += 1
                ok = await resolve_task(self._predicate, *self._args)
                if self._cancelled:
                    return
                if ok:
                    logger.debug("Poll resolved after %s attempt(s)", self.attempts)
                    self._settle(PollState.RESOLVED)
                    return
        except asyncio.CancelledError:
            if self._cancelled:
                # cancel() already settled completion.
                return
            self._settle(PollState.CANCELLED, PollCancelled())
            raise
        except Exception as e:
            logger.debug("Poll predicate raised on attempt %s: %r", self.attempts, e)
            self._settle(PollState.FAILED, e)


def polling(interval_ms: float, predicate: Any, *args: Any) -> PollHandle:
    """
    Call `predicate(*args)` every `interval_ms` until it returns something truthy.

    Each evaluation settles before the next wait starts, so evaluations never
    overlap. Needs a running event loop.
    """
    if isinstance(interval_ms, bool) or not isinstance(interval_ms, (int, float)) or interval_ms <= 0:
        raise InvalidArgumentError(f"interval_ms must be a positive number, got {interval_ms!r}")

    return PollHandle(float(interval_ms), predicate, args).start()

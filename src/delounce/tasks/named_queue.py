# src/delounce/tasks/named_queue.py

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..core.errors import InvalidArgumentError
from .resolver import resolve_task

logger = logging.getLogger(__name__)


class NamedQueueRegistry:
    """
    Serializes tasks submitted under the same name.

    Each name keeps only its tail: the step representing "everything submitted
    so far under this name has settled". enqueue() chains a new step after the
    tail and makes it the new tail, so memory per name stays constant.

    Failures do not break the chain: the next step still runs and receives the
    exception instance as its input.
    """

    def __init__(self) -> None:
        self._tails: dict[str, asyncio.Future[Any]] = {}
        self._submitted: dict[str, int] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._tails

    def __len__(self) -> int:
        return len(self._tails)

    def names(self) -> list[str]:
        return list(self._tails)

    def tail(self, name: str) -> asyncio.Future[Any] | None:
        return self._tails.get(name)

    def enqueue(self, name: str, task: Any) -> asyncio.Future[Any]:
        """
        Run `task` after every task previously enqueued under `name`.

        The task is called with the previous task's value (if it takes an
        argument). Returns the step future, which settles with the task's own
        value or failure.
        """
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(f"queue name must be a non-empty string, got {name!r}")

        loop = asyncio.get_running_loop()
        prev = self._tails.get(name)
        if prev is not None and prev.get_loop() is not loop:
            # Left over from another event loop; it can't be awaited from here.
            prev = None

        seq = self._submitted.get(name, 0) + 1
        self._submitted[name] = seq

        step = loop.create_task(self._run_step(name, seq, prev, task))
        self._tails[name] = step
        logger.debug("Enqueued step %s on queue=%s", seq, name)
        return step

    @staticmethod
    async def _previous_input(name: str, prev: asyncio.Future[Any] | None) -> Any:
        if prev is None:
            return None

        await asyncio.wait({prev})
        if prev.cancelled():
            return None

        exc = prev.exception()
        if exc is not None:
            logger.debug("queue=%s: previous step failed, passing %r on", name, exc)
            return exc
        return prev.result()

    async def _run_step(
        self,
        name: str,
        seq: int,
        prev: asyncio.Future[Any] | None,
        task: Any,
    ) -> Any:
        previous = await self._previous_input(name, prev)
        logger.debug("queue=%s: running step %s", name, seq)
        return await resolve_task(task, previous)

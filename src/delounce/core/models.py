# src/delounce/core/models.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .ports import Cancellable


class PollState(StrEnum):
    """
    Poll loop lifecycle.

    idle -> running -> resolved | cancelled | failed
    Terminal states never change again.
    """

    IDLE = "idle"
    RUNNING = "running"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (PollState.RESOLVED, PollState.CANCELLED, PollState.FAILED)


@dataclass(slots=True)
class DebounceRecord:
    """
    Aggregation state of one debounce name.

    `pending` and `waiters` are parallel lists: waiters[i] is the future handed
    back to whoever submitted pending[i].
    """

    name: str
    reaction: Any
    delay_ms: float

    pending: list[Any] = field(default_factory=list)
    waiters: list[asyncio.Future[None]] = field(default_factory=list)
    timer_handle: Cancellable | None = None
    fired: int = 0

    def take_batch(self) -> tuple[list[Any], list[asyncio.Future[None]]]:
        """Detach the current batch and reset the record for the next cycle."""
        batch, waiters = self.pending, self.waiters
        self.pending = []
        self.waiters = []
        self.timer_handle = None
        return batch, waiters

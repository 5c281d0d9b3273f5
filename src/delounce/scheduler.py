# src/delounce/scheduler.py

from __future__ import annotations

"""
Scheduler service.

Owns the name-keyed state (named queues, debounce records) so it can be
created per test or per component. Most callers just use the process-wide
default through the module-level enqueue/debounce functions.
"""

import asyncio
import logging
from typing import Any

from .core.ports import TimerFacility
from .tasks.debounce import DebounceRegistry
from .tasks.named_queue import NamedQueueRegistry

logger = logging.getLogger(__name__)


class Scheduler:
    def __init__(self, timer: TimerFacility | None = None) -> None:
        self.queues = NamedQueueRegistry()
        self.debounces = DebounceRegistry(timer=timer)

    def enqueue(self, name: str, task: Any) -> asyncio.Future[Any]:
        return self.queues.enqueue(name, task)

    def create_debounce_reaction(
        self,
        name: str,
        reaction: Any = None,
        delay_ms: float | None = None,
    ) -> None:
        self.debounces.create_reaction(name, reaction, delay_ms)

    def debounce(
        self,
        name: str,
        task_input: Any,
        delay_ms: float | None = None,
        reaction: Any = None,
    ) -> asyncio.Future[None]:
        return self.debounces.debounce(name, task_input, delay_ms, reaction)


_DEFAULT: Scheduler | None = None


def get_scheduler() -> Scheduler:
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = Scheduler()
        logger.debug("Default scheduler created")
    return _DEFAULT


def reset_scheduler() -> None:
    """Forget the default scheduler (queues and debounce records included)."""
    global _DEFAULT
    _DEFAULT = None


def enqueue(name: str, task: Any) -> asyncio.Future[Any]:
    return get_scheduler().enqueue(name, task)


def create_debounce_reaction(name: str, reaction: Any = None, delay_ms: float | None = None) -> None:
    get_scheduler().create_debounce_reaction(name, reaction, delay_ms)


def debounce(
    name: str,
    task_input: Any,
    delay_ms: float | None = None,
    reaction: Any = None,
) -> asyncio.Future[None]:
    return get_scheduler().debounce(name, task_input, delay_ms, reaction)

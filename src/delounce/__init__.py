"""
delounce: asyncio timing primitives.

- at_least / at_most / limit / sleep: time-bound wrappers
- enqueue: serialize tasks under a queue name
- create_debounce_reaction / debounce: batch bursts of calls into one reaction
- polling: re-check a predicate until it holds or the poll is cancelled
"""

from .core.errors import DelounceError, InvalidArgumentError, NotFoundError, PollCancelled
from .core.models import PollState
from .scheduler import (
    Scheduler,
    create_debounce_reaction,
    debounce,
    enqueue,
    get_scheduler,
    reset_scheduler,
)
from .tasks.poller import PollHandle, polling
from .tasks.resolver import resolve_task
from .tasks.timing import at_least, at_most, limit, sleep

__all__ = [
    "DelounceError",
    "InvalidArgumentError",
    "NotFoundError",
    "PollCancelled",
    "PollHandle",
    "PollState",
    "Scheduler",
    "at_least",
    "at_most",
    "create_debounce_reaction",
    "debounce",
    "enqueue",
    "get_scheduler",
    "limit",
    "polling",
    "reset_scheduler",
    "resolve_task",
    "sleep",
]

# tests/test_named_queue.py

from __future__ import annotations

import asyncio

import pytest

from delounce.core.errors import InvalidArgumentError
from delounce.scheduler import Scheduler


@pytest.mark.asyncio
async def test_tasks_run_in_submission_order(scheduler: Scheduler) -> None:
    order: list[str] = []

    async def slow():
        await asyncio.sleep(0.05)
        order.append("slow")

    def fast():
        order.append("fast")

    first = scheduler.enqueue("q", slow)
    second = scheduler.enqueue("q", fast)
    await second

    assert first.done()
    assert order == ["slow", "fast"]


@pytest.mark.asyncio
async def test_previous_result_is_passed_on(scheduler: Scheduler) -> None:
    scheduler.enqueue("pipe", 1)
    scheduler.enqueue("pipe", lambda prev: prev + 1)
    last = scheduler.enqueue("pipe", lambda prev: prev * 10)

    assert await last == 20


@pytest.mark.asyncio
async def test_first_task_gets_none(scheduler: Scheduler) -> None:
    seen = []
    await scheduler.enqueue("fresh", lambda prev: seen.append(prev))
    assert seen == [None]


@pytest.mark.asyncio
async def test_failure_does_not_abort_the_chain(scheduler: Scheduler) -> None:
    def boom():
        raise RuntimeError("step failed")

    failed = scheduler.enqueue("q", boom)
    after = scheduler.enqueue("q", lambda prev: ("ran", prev))

    with pytest.raises(RuntimeError):
        await failed

    tag, prev = await after
    assert tag == "ran"
    assert isinstance(prev, RuntimeError)


@pytest.mark.asyncio
async def test_queues_with_different_names_are_independent(scheduler: Scheduler) -> None:
    order: list[str] = []

    async def slow():
        await asyncio.sleep(0.1)
        order.append("a")

    a = scheduler.enqueue("a", slow)
    b = scheduler.enqueue("b", lambda: order.append("b"))
    await asyncio.gather(a, b)

    assert order == ["b", "a"]
    assert sorted(scheduler.queues.names()) == ["a", "b"]


@pytest.mark.asyncio
async def test_registry_keeps_one_tail_per_name(scheduler: Scheduler) -> None:
    steps = [scheduler.enqueue("q", i) for i in range(5)]
    await asyncio.gather(*steps)

    assert len(scheduler.queues) == 1
    assert scheduler.queues.tail("q") is steps[-1]


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", None, 42])
async def test_bad_name_is_rejected(scheduler: Scheduler, name) -> None:
    with pytest.raises(InvalidArgumentError):
        scheduler.enqueue(name, 1)
    assert name not in scheduler.queues

# src/delounce/tasks/resolver.py

from __future__ import annotations

import inspect
from typing import Any


def _accepted_args(fn: Any, args: tuple[Any, ...]) -> tuple[Any, ...]:
    """
    Fit `args` to what `fn` can take positionally.

    Zero-argument callables get nothing, *args callables get everything.
    Callables without an inspectable signature get everything too.
    Required positional parameters left without a value get None.
    """
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return args

    n = 0
    required = 0
    var_positional = False
    for p in params:
        if p.kind == inspect.Parameter.VAR_POSITIONAL:
            var_positional = True
        elif p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            n += 1
            if p.default is inspect.Parameter.empty:
                required += 1

    if len(args) < required:
        return args + (None,) * (required - len(args))
    if var_positional:
        return args
    return args[:n]


async def resolve_task(task: Any, *args: Any) -> Any:
    """
    Turn a task input into its value.

    A task input may be:
    - an awaitable (coroutine, Future, Task): awaited
    - a callable: called with the args it accepts; an awaitable result is awaited
    - anything else: returned as-is

    Exceptions raised by a synchronous callable surface when this coroutine is
    awaited, same as an async failure.
    """
    value = task
    if callable(value) and not inspect.isawaitable(value):
        value = value(*_accepted_args(value, args))

    if inspect.isawaitable(value):
        value = await value

    return value

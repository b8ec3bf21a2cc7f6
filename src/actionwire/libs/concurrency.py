# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any

__all__ = ("accepts_context", "call_maybe_async", "is_coro_func")


def is_coro_func(func: Callable[..., Any]) -> bool:
    """Check whether calling ``func`` produces an awaitable coroutine."""
    while isinstance(func, functools.partial):
        func = func.func
    if inspect.iscoroutinefunction(func):
        return True
    call = getattr(func, "__call__", None)
    return call is not None and inspect.iscoroutinefunction(call)


@functools.lru_cache(maxsize=1024)
def _signature_has(func: Callable[..., Any], name: str) -> bool:
    try:
        params = inspect.signature(func).parameters
    except (TypeError, ValueError):
        return False
    param = params.get(name)
    return param is not None and param.kind in (
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
        inspect.Parameter.KEYWORD_ONLY,
    )


def accepts_context(func: Callable[..., Any]) -> bool:
    """Whether ``func`` declares a ``context`` parameter."""
    try:
        return _signature_has(func, "context")
    except TypeError:
        # unhashable callables cannot be cached
        return _signature_has.__wrapped__(func, "context")


async def call_maybe_async(func: Callable[..., Any], /, *args: Any, context: Any = None) -> Any:
    """Call sync or async ``func``; pass ``context`` only if it asks for it."""
    kwargs = {"context": context} if accepts_context(func) else {}
    if is_coro_func(func):
        return await func(*args, **kwargs)
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        return await result
    return result

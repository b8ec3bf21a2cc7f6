# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Ordered validator and formatter chains for a single value."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from ..errors import ValidatorFailure, describe_error
from ..libs.concurrency import call_maybe_async

if TYPE_CHECKING:
    from .lookup import LookupTable
    from .spec import ChainEntry

__all__ = ("resolve_chain", "run_formatters", "run_validators")


def resolve_chain(
    entries: Sequence[ChainEntry],
    table: LookupTable,
    *,
    root: str | None = None,
) -> list[Callable[..., Any]]:
    """Turn a mix of callables and lookup references into callables.

    Raises:
        UnresolvedReferenceError: If a reference is not in ``table``.
    """
    return [table.resolve(e, root=root) if isinstance(e, str) else e for e in entries]


async def run_formatters(
    formatters: Sequence[Callable[..., Any]],
    value: Any,
    *,
    context: Any = None,
) -> Any:
    """Pipe ``value`` through each formatter in declared order."""
    for formatter in formatters:
        value = await call_maybe_async(formatter, value, context=context)
    return value


async def run_validators(
    validators: Sequence[Callable[..., Any]],
    value: Any,
    *,
    path: str = "",
    context: Any = None,
) -> None:
    """Run validators in declared order, stopping at the first failure.

    A validator passes by returning ``None`` or ``True``. Any other return
    value is the failure and is reported as-is; ``False`` carries no message,
    so a generic one naming ``path`` is used instead.

    Raises:
        ValidatorFailure: For the first validator that fails.
    """
    for validator in validators:
        try:
            result = await call_maybe_async(validator, value, context=context)
        except ValidatorFailure as e:
            raise ValidatorFailure(e.value, path=path) from e
        except Exception as e:
            raise ValidatorFailure(describe_error(e), path=path) from e

        if result is None or result is True:
            continue
        if result is False:
            result = f"{path} failed validation" if path else "parameter failed validation"
        raise ValidatorFailure(result, path=path)

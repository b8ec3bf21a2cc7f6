# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Sentinel values.

``Undefined`` marks a key that was never supplied, as opposed to one supplied
with ``None``. The parameter engine relies on the difference: ``None`` is only
"missing" when the active policy says so, ``Undefined`` always is.
"""

from __future__ import annotations

from typing import Any, Final

__all__ = (
    "Undefined",
    "UndefinedType",
    "is_sentinel",
    "not_sentinel",
)


class UndefinedType:
    """Singleton for values that were never provided."""

    __slots__ = ()
    _instance: UndefinedType | None = None

    def __new__(cls) -> UndefinedType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Undefined"

    def __copy__(self) -> UndefinedType:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> UndefinedType:
        return self

    def __reduce__(self) -> str:
        return "Undefined"


Undefined: Final = UndefinedType()


def is_sentinel(value: Any) -> bool:
    return value is Undefined


def not_sentinel(value: Any) -> bool:
    return value is not Undefined

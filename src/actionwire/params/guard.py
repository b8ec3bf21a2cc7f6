# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Read-only views over validated params.

Handlers receive a ``FrozenParams`` tree: nested mappings become
``FrozenParams``, lists and tuples become ``FrozenList`` and sets become
``FrozenSet``. Reads behave like the underlying containers (item access,
iteration, equality with plain containers, plus attribute access for mapping
keys). Every write raises ``ImmutableMutationError``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence, Set
from typing import Any, NoReturn

from ..errors import ImmutableMutationError

__all__ = ("FrozenList", "FrozenParams", "FrozenSet", "freeze", "thaw")


class FrozenParams(Mapping[str, Any]):
    __slots__ = ("_data", "_path")

    def __init__(self, data: Mapping[str, Any] | None = None, *, _path: str = "params"):
        object.__setattr__(self, "_path", _path)
        object.__setattr__(
            self,
            "_data",
            {k: freeze(v, path=f"{_path}.{k}") for k, v in (data or {}).items()},
        )

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getattr__(self, name: str) -> Any:
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(name) from None

    def _reject(self, key: Any, *_: Any) -> NoReturn:
        raise ImmutableMutationError(key, owner=self._path)

    __setitem__ = _reject
    __delitem__ = _reject
    __setattr__ = _reject
    __delattr__ = _reject

    def pop(self, key: Any, *_: Any) -> NoReturn:
        self._reject(key)

    def update(self, *args: Any, **kwargs: Any) -> NoReturn:
        keys = list(dict(*args, **kwargs)) or ["<update>"]
        self._reject(keys[0])

    def setdefault(self, key: Any, *_: Any) -> NoReturn:
        self._reject(key)

    def clear(self) -> NoReturn:
        self._reject("<clear>")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FrozenParams({self._data!r})"

    def __copy__(self) -> FrozenParams:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> dict[str, Any]:
        return thaw(self)


class FrozenList(Sequence[Any]):
    __slots__ = ("_items", "_path")

    def __init__(self, items: Sequence[Any] = (), *, _path: str = "params"):
        object.__setattr__(self, "_path", _path)
        object.__setattr__(
            self,
            "_items",
            tuple(freeze(v, path=f"{_path}[{i}]") for i, v in enumerate(items)),
        )

    def __getitem__(self, index: Any) -> Any:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def _reject(self, key: Any, *_: Any) -> NoReturn:
        raise ImmutableMutationError(key, owner=self._path)

    __setitem__ = _reject
    __delitem__ = _reject
    __setattr__ = _reject
    __delattr__ = _reject

    def append(self, value: Any) -> NoReturn:
        self._reject(len(self._items))

    def extend(self, values: Any) -> NoReturn:
        self._reject(len(self._items))

    def insert(self, index: int, value: Any) -> NoReturn:
        self._reject(index)

    def pop(self, index: int = -1) -> NoReturn:
        self._reject(index)

    def remove(self, value: Any) -> NoReturn:
        self._reject(value)

    def sort(self, *args: Any, **kwargs: Any) -> NoReturn:
        self._reject("<sort>")

    def reverse(self) -> NoReturn:
        self._reject("<reverse>")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (list, tuple, FrozenList)):
            return list(self._items) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FrozenList({list(self._items)!r})"

    def __copy__(self) -> FrozenList:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> list[Any]:
        return thaw(self)


class FrozenSet(Set[Any]):
    """Read-only set. Elements are hashable, so they are kept as they are."""

    __slots__ = ("_items", "_path")

    def __init__(self, items: Iterable[Any] = (), *, _path: str = "params"):
        object.__setattr__(self, "_path", _path)
        object.__setattr__(self, "_items", frozenset(items))

    @classmethod
    def _from_iterable(cls, it: Iterable[Any]) -> FrozenSet:
        return cls(it)

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def _reject(self, key: Any, *_: Any) -> NoReturn:
        raise ImmutableMutationError(key, owner=self._path)

    __setattr__ = _reject
    __delattr__ = _reject

    def add(self, value: Any) -> NoReturn:
        self._reject(value)

    def discard(self, value: Any) -> NoReturn:
        self._reject(value)

    def remove(self, value: Any) -> NoReturn:
        self._reject(value)

    def pop(self) -> NoReturn:
        self._reject("<pop>")

    def clear(self) -> NoReturn:
        self._reject("<clear>")

    def update(self, *others: Any) -> NoReturn:
        self._reject("<update>")

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"FrozenSet({set(self._items)!r})"

    def __copy__(self) -> FrozenSet:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> set[Any]:
        return thaw(self)


def freeze(value: Any, *, path: str = "params") -> Any:
    """Wrap ``value`` (and everything below it) in read-only containers."""
    if isinstance(value, (FrozenParams, FrozenList, FrozenSet)):
        return value
    if isinstance(value, Mapping):
        return FrozenParams(value, _path=path)
    if isinstance(value, (list, tuple)):
        return FrozenList(value, _path=path)
    if isinstance(value, (set, frozenset)):
        return FrozenSet(value, _path=path)
    return value


def thaw(value: Any) -> Any:
    """Return a plain mutable copy of a frozen tree."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, (FrozenList, list)):
        return [thaw(v) for v in value]
    if isinstance(value, (FrozenSet, set, frozenset)):
        return set(value)
    return value

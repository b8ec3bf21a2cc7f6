# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

__all__ = ("Safelist",)


class Safelist:
    """Top-level raw input names that may be echoed back to the caller.

    The set is the union of the framework-reserved names and every input name
    of every registered action. It only grows during registration; names are
    reference counted so unregistering an action drops names no other action
    declares.
    """

    def __init__(self, reserved: Iterable[str] = ()):
        self._reserved: frozenset[str] = frozenset(reserved)
        self._counts: dict[str, int] = {}

    @property
    def reserved(self) -> frozenset[str]:
        return self._reserved

    def add(self, names: Iterable[str]) -> None:
        for name in names:
            self._counts[name] = self._counts.get(name, 0) + 1

    def discard(self, names: Iterable[str]) -> None:
        for name in names:
            count = self._counts.get(name, 0) - 1
            if count > 0:
                self._counts[name] = count
            else:
                self._counts.pop(name, None)

    def names(self) -> frozenset[str]:
        return self._reserved.union(self._counts)

    def filter(
        self,
        raw: Mapping[str, Any] | None,
        *,
        extra: Iterable[str] = (),
    ) -> dict[str, Any]:
        """Keep only safelisted top-level keys, values untouched.

        ``extra`` names are kept as well, e.g. per-call reserved params.
        """
        if not raw:
            return {}
        allowed = frozenset(extra)
        return {k: v for k, v in raw.items() if k in self or k in allowed}

    def clear(self) -> None:
        self._counts.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._reserved or name in self._counts

    def __len__(self) -> int:
        return len(self.names())

    def __repr__(self) -> str:
        return f"Safelist(names={sorted(self.names())})"

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Lookup table for validators and formatters referenced by name.

Actions may declare ``validator="validators.only_strings"`` instead of passing
the callable. References are dotted paths into a nested namespace that is
populated outside the action definition and resolved at invocation time, so
entries can be registered or replaced between calls.

Usage:
    table = get_lookup_table()
    table.register("validators.only_strings", only_strings)
    table.update("formatters", {"upper": str.upper})

    table.resolve("api.validators.only_strings", root="api")
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from ..errors import UnresolvedReferenceError

__all__ = ("LookupTable", "get_lookup_table")


class LookupTable:
    """Nested namespace of callables addressed by dotted references."""

    def __init__(self, entries: Mapping[str, Any] | None = None):
        self._root: dict[str, Any] = {}
        if entries:
            for name, value in entries.items():
                if isinstance(value, Mapping):
                    self.update(name, value)
                else:
                    self.register(name, value)

    def register(self, reference: str, func: Callable[..., Any], *, override: bool = True) -> None:
        """Register ``func`` under a dotted reference, creating namespaces as needed.

        Raises:
            ValueError: If the reference is empty, collides with a namespace,
                or already exists while ``override`` is False.
            TypeError: If ``func`` is not callable.
        """
        if not callable(func):
            raise TypeError(f"Lookup entry '{reference}' must be callable, got {type(func)}")
        *parents, leaf = self._split(reference)
        node = self._root
        for part in parents:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise ValueError(f"'{part}' in '{reference}' is an entry, not a namespace")
            node = child
        if isinstance(node.get(leaf), dict):
            raise ValueError(f"'{reference}' is a namespace and cannot be replaced by an entry")
        if leaf in node and not override:
            raise ValueError(
                f"Lookup entry '{reference}' already registered. Use override=True to replace."
            )
        node[leaf] = func

    def update(self, namespace: str, entries: Mapping[str, Any]) -> None:
        """Register every entry of ``entries`` below ``namespace``."""
        for name, value in entries.items():
            reference = f"{namespace}.{name}"
            if isinstance(value, Mapping):
                self.update(reference, value)
            else:
                self.register(reference, value)

    def unregister(self, reference: str) -> bool:
        """Remove an entry or a whole namespace. Returns True if removed."""
        *parents, leaf = self._split(reference)
        node = self._root
        for part in parents:
            node = node.get(part)
            if not isinstance(node, dict):
                return False
        if leaf in node:
            del node[leaf]
            return True
        return False

    def resolve(self, reference: str, *, root: str | None = None) -> Callable[..., Any]:
        """Resolve a dotted reference to its callable.

        A leading ``root`` segment (the configured table root name) is
        optional: ``"api.validators.a"`` and ``"validators.a"`` are equivalent
        when ``root="api"`` and no namespace is itself named ``api``.

        Raises:
            UnresolvedReferenceError: If any segment is missing or the target
                is a namespace rather than a callable.
        """
        parts = self._split(reference)
        if root and parts[0] == root and root not in self._root and len(parts) > 1:
            parts = parts[1:]

        node: Any = self._root
        for part in parts:
            if not isinstance(node, dict) or part not in node:
                raise UnresolvedReferenceError(
                    f"cannot resolve '{reference}'", details={"reference": reference}
                )
            node = node[part]

        if not callable(node):
            raise UnresolvedReferenceError(
                f"'{reference}' does not name a callable", details={"reference": reference}
            )
        return node

    def has(self, reference: str, *, root: str | None = None) -> bool:
        try:
            self.resolve(reference, root=root)
        except UnresolvedReferenceError:
            return False
        return True

    def list_references(self) -> list[str]:
        """List every registered dotted reference."""
        found: list[str] = []

        def _walk(node: dict[str, Any], prefix: str) -> None:
            for name, value in node.items():
                ref = f"{prefix}.{name}" if prefix else name
                if isinstance(value, dict):
                    _walk(value, ref)
                else:
                    found.append(ref)

        _walk(self._root, "")
        return found

    def clear(self) -> None:
        self._root.clear()

    @staticmethod
    def _split(reference: str) -> list[str]:
        parts = [p for p in reference.strip().split(".") if p]
        if not parts:
            raise ValueError("Lookup reference cannot be empty")
        return parts

    def __contains__(self, reference: str) -> bool:
        return self.has(reference)

    def __len__(self) -> int:
        return len(self.list_references())

    def __repr__(self) -> str:
        return f"LookupTable(entries={len(self)})"


_lookup_table: LookupTable | None = None


def get_lookup_table() -> LookupTable:
    """Get the process-wide lookup table (singleton)."""
    global _lookup_table
    if _lookup_table is None:
        _lookup_table = LookupTable()
    return _lookup_table

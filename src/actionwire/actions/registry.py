# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Versioned action registry.

ActionRegistry maps action names to their registered versions. It is
populated during setup and read by the dispatcher on every invocation;
mutating it while requests are in flight is unsupported.

Every successful registration also feeds the registry's ``Safelist`` so
the dispatcher knows which raw input names may be echoed to callers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..config import DEFAULT_RESERVED_PARAMS
from ..errors import RegistrationError
from ..params import Safelist
from .definition import Action, ActionDefinition, build_definition, is_action, validate_definition

__all__ = ("ActionRegistry", "ActionVersionSet")

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActionVersionSet:
    """Registered versions of one action, ascending, plus the latest."""

    name: str
    versions: tuple[int, ...]

    @property
    def latest(self) -> int:
        return self.versions[-1]

    def __contains__(self, version: object) -> bool:
        return version in self.versions

    def __iter__(self):
        return iter(self.versions)

    def __len__(self) -> int:
        return len(self.versions)


class ActionRegistry:
    """Registry of action definitions keyed by ``(name, version)``.

    Usage:
        registry = ActionRegistry()
        registry.register(ActionDefinition(name="echo", handler=echo))
        registry.register(MyAction())          # Action instances work too

        registry.lookup("echo", 1)             # ActionDefinition | None
        registry.versions_of("echo").latest    # 1
    """

    def __init__(self, *, reserved_params: Iterable[str] = DEFAULT_RESERVED_PARAMS):
        self._actions: dict[str, dict[int, ActionDefinition]] = {}
        self._versions: dict[str, ActionVersionSet] = {}
        self.reserved_params: frozenset[str] = frozenset(reserved_params)
        self.safelist = Safelist(self.reserved_params)

    def register(
        self,
        action: ActionDefinition | Action | Any,
        *,
        override: bool = False,
    ) -> ActionDefinition:
        """Validate and register one action version.

        Args:
            action: ActionDefinition, or an object carrying the ``__action__``
                marker (such as an ``Action`` instance)
            override: If True, allow replacing an existing (name, version)

        Returns:
            The registered ActionDefinition

        Raises:
            RegistrationError: Missing name, invalid version, missing handler,
                or duplicate (name, version) without override
            ReservedParamError: An input collides with a reserved param name
        """
        definition = self._to_definition(action)
        validate_definition(definition, self.reserved_params)

        name, version = definition.name, definition.version

        versions = self._actions.setdefault(name, {})
        previous = versions.get(version)
        if previous is not None:
            if not override:
                raise RegistrationError(
                    f"Action '{name}' version {version} already registered. "
                    f"Use override=True to replace."
                )
            self.safelist.discard(previous.inputs)

        versions[version] = definition
        self.safelist.add(definition.inputs)
        self._refresh_versions(name)
        logger.debug(f"Registered action {name} v{version} (inputs: {list(definition.inputs)})")
        return definition

    def lookup(self, name: str, version: int) -> ActionDefinition | None:
        """Get the definition for an exact (name, version), or None."""
        return self._actions.get(name, {}).get(version)

    def versions_of(self, name: str) -> ActionVersionSet | None:
        """Get the registered versions of ``name``, or None if unknown."""
        return self._versions.get(name)

    def latest(self, name: str) -> ActionDefinition | None:
        """Get the highest registered version of ``name``, or None."""
        version_set = self._versions.get(name)
        if version_set is None:
            return None
        return self._actions[name][version_set.latest]

    def unregister(self, name: str, version: int | None = None) -> bool:
        """Unregister one version, or every version when ``version`` is None.

        Returns True if anything was removed.
        """
        versions = self._actions.get(name)
        if not versions:
            return False

        targets = list(versions) if version is None else [version]
        removed = False
        for v in targets:
            definition = versions.pop(v, None)
            if definition is not None:
                self.safelist.discard(definition.inputs)
                removed = True

        self._refresh_versions(name)
        return removed

    def list_names(self) -> list[str]:
        """List all registered action names."""
        return list(self._versions.keys())

    def definitions(self) -> list[ActionDefinition]:
        """All registered definitions, grouped by name, ascending version."""
        return [
            self._actions[name][v]
            for name, version_set in self._versions.items()
            for v in version_set.versions
        ]

    def clear(self) -> None:
        """Remove every action. Primarily for tests."""
        self._actions.clear()
        self._versions.clear()
        self.safelist.clear()

    def _refresh_versions(self, name: str) -> None:
        versions = self._actions.get(name)
        if not versions:
            self._actions.pop(name, None)
            self._versions.pop(name, None)
            return
        self._versions[name] = ActionVersionSet(name=name, versions=tuple(sorted(versions)))

    @staticmethod
    def _to_definition(action: Any) -> ActionDefinition:
        if isinstance(action, ActionDefinition):
            return action
        if is_action(action):
            return build_definition(action)
        raise RegistrationError(
            f"Cannot register {type(action).__name__}: expected ActionDefinition or Action"
        )

    def __contains__(self, name: str) -> bool:
        return name in self._versions

    def __len__(self) -> int:
        return len(self._versions)

    def __repr__(self) -> str:
        return f"ActionRegistry(actions={self.list_names()})"

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..errors import UnknownActionOrInvalidVersionError

if TYPE_CHECKING:
    from .definition import ActionDefinition
    from .registry import ActionRegistry

__all__ = ("coerce_version", "resolve_action")


def coerce_version(requested: Any) -> int | None:
    """Normalize a caller-supplied version.

    ``None`` means "latest". Integers and integral strings (``"2"``) are
    accepted; anything else raises.

    Raises:
        UnknownActionOrInvalidVersionError: If the value cannot name a version
    """
    if requested is None:
        return None
    if isinstance(requested, bool):
        raise UnknownActionOrInvalidVersionError(details={"apiVersion": requested})
    if isinstance(requested, int):
        return requested
    if isinstance(requested, float) and requested.is_integer():
        return int(requested)
    if isinstance(requested, str) and requested.strip().lstrip("-").isdigit():
        return int(requested.strip())
    raise UnknownActionOrInvalidVersionError(details={"apiVersion": requested})


def resolve_action(
    registry: ActionRegistry,
    name: str,
    requested_version: Any = None,
) -> ActionDefinition:
    """Select the definition to invoke.

    No version requested selects the latest registered one. An unknown action
    and an unregistered version of a known action raise the same error.

    Raises:
        UnknownActionOrInvalidVersionError: No definition matches
    """
    version_set = registry.versions_of(name)
    if version_set is None:
        raise UnknownActionOrInvalidVersionError(details={"action": name})

    version = coerce_version(requested_version)
    if version is None:
        version = version_set.latest

    definition = registry.lookup(name, version)
    if definition is None:
        raise UnknownActionOrInvalidVersionError(
            details={"action": name, "apiVersion": requested_version}
        )
    return definition

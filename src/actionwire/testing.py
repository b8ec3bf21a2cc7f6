# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Testing utilities for actionwire and downstream projects.

Basic usage:
    from actionwire.testing import create_test_dispatcher, run_action

    async def test_my_action():
        dispatcher = create_test_dispatcher(MyAction())
        envelope = await run_action(dispatcher, "myAction", {"id": 1})
        assert envelope.error is None
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .actions import Action, ActionDefinition, ActionDispatcher, ResponseEnvelope
from .config import ActionConfig
from .params import LookupTable

__all__ = (
    "create_test_dispatcher",
    "make_action",
    "run_action",
)


def create_test_dispatcher(
    *actions: ActionDefinition | Action,
    config: ActionConfig | None = None,
    lookup: LookupTable | None = None,
    id: str = "test-server",
) -> ActionDispatcher:
    """Dispatcher with an isolated registry and lookup table."""
    dispatcher = ActionDispatcher(
        config=config,
        lookup=lookup if lookup is not None else LookupTable(),
        id=id,
    )
    for item in actions:
        dispatcher.register(item)
    return dispatcher


def make_action(
    name: str,
    handler: Any,
    *,
    version: int = 1,
    inputs: Mapping[str, Any] | None = None,
    description: str = "test action",
) -> ActionDefinition:
    return ActionDefinition(
        name=name,
        version=version,
        description=description,
        inputs=dict(inputs or {}),
        handler=handler,
    )


async def run_action(
    dispatcher: ActionDispatcher,
    name: str,
    params: Mapping[str, Any] | None = None,
    *,
    config: ActionConfig | None = None,
) -> ResponseEnvelope:
    """Invoke ``name`` the way a transport would: version travels in ``params``."""
    return await dispatcher.invoke(name, params or {}, config=config)

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Small actions every deployment can expose."""

from __future__ import annotations

import random
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .definition import Action

if TYPE_CHECKING:
    from .dispatcher import ActionDispatcher
    from .registry import ActionRegistry

__all__ = ("RandomNumber", "Status", "register_builtin_actions")


class RandomNumber(Action):
    name = "randomNumber"
    description = "I am an API method which will generate a random number"
    output_example = {"randomNumber": 0.123, "stringRandomNumber": "Your random number is 0.123"}

    async def run(self, params: Mapping[str, Any], response: dict[str, Any]) -> None:
        number = random.random()
        response["randomNumber"] = number
        response["stringRandomNumber"] = f"Your random number is {number}"


class Status(Action):
    """Reports which dispatcher answered and what it serves."""

    name = "status"
    description = "I will return some basic information about the API"
    output_example = {"id": "actionwire-0a1b2c3d4e5f", "uptime": 12.5, "actions": ["status"]}

    def __init__(self, dispatcher: ActionDispatcher):
        self.dispatcher = dispatcher

    async def run(self, params: Mapping[str, Any], response: dict[str, Any], context=None) -> None:
        response["id"] = context.id if context is not None else self.dispatcher.id
        response["uptime"] = self.dispatcher.uptime
        response["actions"] = sorted(self.dispatcher.registry.list_names())


def register_builtin_actions(
    dispatcher: ActionDispatcher,
    registry: ActionRegistry | None = None,
) -> None:
    """Register ``randomNumber`` and ``status`` on ``registry`` (default: the dispatcher's)."""
    target = registry if registry is not None else dispatcher.registry
    target.register(RandomNumber())
    target.register(Status(dispatcher))

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from .builtin import RandomNumber, Status, register_builtin_actions
from .definition import (
    Action,
    ActionDefinition,
    ActionHandler,
    build_definition,
    is_action,
    validate_definition,
)
from .dispatcher import ActionDispatcher, DispatchStage, action, get_dispatcher
from .envelope import RequestEnvelope, RequesterInformation, ResponseEnvelope
from .registry import ActionRegistry, ActionVersionSet
from .resolver import coerce_version, resolve_action

__all__ = (
    "Action",
    "ActionDefinition",
    "ActionDispatcher",
    "ActionHandler",
    "ActionRegistry",
    "ActionVersionSet",
    "DispatchStage",
    "RandomNumber",
    "RequestEnvelope",
    "RequesterInformation",
    "ResponseEnvelope",
    "Status",
    "action",
    "build_definition",
    "coerce_version",
    "get_dispatcher",
    "is_action",
    "register_builtin_actions",
    "resolve_action",
    "validate_definition",
)

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from .actions import (
    Action,
    ActionDefinition,
    ActionDispatcher,
    ActionRegistry,
    ActionVersionSet,
    RequestEnvelope,
    ResponseEnvelope,
    action,
    get_dispatcher,
    register_builtin_actions,
)
from .config import ACTION_PARAM, VERSION_PARAM, ActionConfig
from .errors import (
    ActionwireError,
    HandlerFault,
    ImmutableMutationError,
    MissingRequiredParameterError,
    RegistrationError,
    ReservedParamError,
    UnknownActionOrInvalidVersionError,
    UnresolvedReferenceError,
    ValidatorFailure,
)
from .params import (
    FrozenParams,
    InvocationContext,
    LookupTable,
    ParameterSpec,
    ParameterValidator,
    get_lookup_table,
)
from .routes import RouteTable
from .types import Undefined, UndefinedType

__version__ = "0.1.0"

__all__ = (
    "ACTION_PARAM",
    "VERSION_PARAM",
    "Action",
    "ActionConfig",
    "ActionDefinition",
    "ActionDispatcher",
    "ActionRegistry",
    "ActionVersionSet",
    "ActionwireError",
    "FrozenParams",
    "HandlerFault",
    "ImmutableMutationError",
    "InvocationContext",
    "LookupTable",
    "MissingRequiredParameterError",
    "ParameterSpec",
    "ParameterValidator",
    "RegistrationError",
    "RequestEnvelope",
    "ReservedParamError",
    "ResponseEnvelope",
    "RouteTable",
    "Undefined",
    "UndefinedType",
    "UnknownActionOrInvalidVersionError",
    "UnresolvedReferenceError",
    "ValidatorFailure",
    "action",
    "get_dispatcher",
    "get_lookup_table",
    "register_builtin_actions",
)

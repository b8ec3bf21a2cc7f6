# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Action definitions.

An action is declared either as an ``ActionDefinition`` value or as an
``Action`` subclass whose instances are converted at registration time:

    class Greet(Action):
        name = "greet"
        description = "say hello"
        inputs = {"who": {"required": True}}

        async def run(self, params, response):
            response["greeting"] = f"hello {params['who']}"

Handlers receive ``(params, response)`` and may declare a ``context``
parameter to receive the ``InvocationContext``. Sync and async handlers are
both accepted; return values are ignored.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..config import DEFAULT_RESERVED_PARAMS
from ..errors import RegistrationError, ReservedParamError
from ..params import ParameterSpec, coerce_inputs

__all__ = (
    "Action",
    "ActionDefinition",
    "ActionHandler",
    "build_definition",
    "is_action",
    "validate_definition",
)

ActionHandler = Callable[..., Any]


class ActionDefinition(BaseModel):
    """One version of one action."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str | None = Field(None, description="Action name, unique together with version")
    description: str = ""
    version: int = Field(1, description="Positive version number, 1 unless declared")
    inputs: dict[str, Any] = Field(
        default_factory=dict,
        description="Input name → ParameterSpec (dict form accepted)",
    )
    output_example: dict[str, Any] = Field(default_factory=dict)
    handler: ActionHandler | None = Field(None, exclude=True)

    @field_validator("inputs", mode="before")
    @classmethod
    def _coerce_inputs(cls, v: Any) -> dict[str, ParameterSpec]:
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            raise TypeError("inputs must be a mapping of input names to specs")
        return coerce_inputs(v)

    def describe(self) -> dict[str, Any]:
        """Documentation view: everything but the handler."""
        return {
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "inputs": {k: v.to_dict() for k, v in self.inputs.items()},
            "outputExample": self.output_example,
        }


class Action:
    """Base class for class-declared actions.

    Subclasses override the class attributes and implement ``run``. The
    ``__action__`` marker is what the registry checks; plain objects that set
    it and provide the same attributes are accepted too.
    """

    __action__: ClassVar[bool] = True

    name: ClassVar[str | None] = None
    description: ClassVar[str] = ""
    version: ClassVar[int] = 1
    inputs: ClassVar[Mapping[str, Any]] = {}
    output_example: ClassVar[Mapping[str, Any]] = {}

    async def run(self, params: Mapping[str, Any], response: dict[str, Any]) -> Any:
        raise NotImplementedError(f"{type(self).__name__}.run() is not implemented")

    def to_definition(self) -> ActionDefinition:
        return ActionDefinition(
            name=self.name,
            description=self.description,
            version=self.version,
            inputs=dict(self.inputs or {}),
            output_example=dict(self.output_example or {}),
            handler=self.run,
        )

    def validate(self, reserved: Iterable[str] = DEFAULT_RESERVED_PARAMS) -> ActionDefinition:
        """Check the declaration and return its definition.

        Raises:
            RegistrationError: If the name is missing or the version is invalid
            ReservedParamError: If an input uses a reserved param name
        """
        definition = build_definition(self)
        validate_definition(definition, reserved)
        return definition


def build_definition(action: Any) -> ActionDefinition:
    """Convert a class-declared action, reporting bad declarations as ``RegistrationError``."""
    try:
        return action.to_definition()
    except (ValidationError, TypeError, ValueError) as e:
        name = getattr(action, "name", None) or type(action).__name__
        raise RegistrationError(
            f"invalid definition for action `{name}`: {e}",
            details={"action": name},
            cause=e,
        ) from e


def is_action(obj: Any) -> bool:
    """Capability check for class-declared actions (instances, not classes)."""
    return getattr(obj, "__action__", False) is True and not isinstance(obj, type)


def validate_definition(
    definition: ActionDefinition,
    reserved: Iterable[str] = DEFAULT_RESERVED_PARAMS,
) -> None:
    """Raise if ``definition`` cannot be registered."""
    name = definition.name
    if not name:
        raise RegistrationError("name is required for this action")

    if isinstance(definition.version, bool) or definition.version < 1:
        raise RegistrationError(
            f"version of action `{name}` must be a positive integer",
            details={"version": definition.version},
        )

    if definition.handler is None or not callable(definition.handler):
        raise RegistrationError(f"action `{name}` has no callable handler")

    reserved_names = set(reserved)
    for input_name in definition.inputs:
        if input_name in reserved_names:
            raise ReservedParamError(
                f"input `{input_name}` in action `{name}` is a reserved param",
                details={"action": name, "input": input_name},
            )

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .types import Undefined

__all__ = (
    "ACTION_PARAM",
    "DEFAULT_MISSING_PARAM_CHECKS",
    "DEFAULT_RESERVED_PARAMS",
    "VERSION_PARAM",
    "ActionConfig",
)

ACTION_PARAM = "action"
VERSION_PARAM = "apiVersion"

DEFAULT_MISSING_PARAM_CHECKS: tuple[Any, ...] = (None, "", Undefined)
DEFAULT_RESERVED_PARAMS: tuple[str, ...] = (ACTION_PARAM, VERSION_PARAM, "file", "callback")


class ActionConfig(BaseModel):
    """Per-invocation configuration for the action pipeline.

    Instances are frozen. Derive a variant with ``model_copy(update=...)`` and
    hand it to ``ActionDispatcher.invoke(config=...)`` rather than mutating the
    dispatcher's default, so concurrent invocations never observe each other's
    policy.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    missing_param_checks: tuple[Any, ...] = Field(
        default=DEFAULT_MISSING_PARAM_CHECKS,
        description="Values treated as absent for required and default handling",
    )
    lookup_root: str = Field(
        default="api",
        description="Optional leading segment of validator/formatter references",
    )
    reserved_params: tuple[str, ...] = Field(
        default=DEFAULT_RESERVED_PARAMS,
        description="Framework-owned input names, always safelisted, never declarable",
    )
    echo_api_version: bool = Field(
        default=True,
        description="Write the resolved version into receivedParams",
    )

    @field_validator("missing_param_checks", mode="before")
    @classmethod
    def _coerce_checks(cls, v: Any) -> tuple[Any, ...]:
        if v is None:
            return ()
        if isinstance(v, (list, tuple, set, frozenset)):
            return tuple(v)
        return (v,)

    @field_validator("reserved_params", mode="before")
    @classmethod
    def _coerce_reserved(cls, v: Any) -> tuple[str, ...]:
        if isinstance(v, str):
            return (v,)
        return tuple(v)

    def is_missing(self, value: Any) -> bool:
        """Whether ``value`` counts as absent under this policy.

        Comparison is type-strict so ``False`` never matches ``0`` and an
        empty list never matches an empty string.
        """
        if value is Undefined:
            return True
        for check in self.missing_param_checks:
            if value is check:
                return True
            if type(value) is type(check) and value == check:
                return True
        return False

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Parameter engine - normalizes raw inputs against declared specs.

Per leaf, in fixed order:
    missing check → default → required → formatters → validators

Schema-shaped specs run the first three steps on the container, then
recurse into each declared child with the dotted path extended
(``schemaParam.requiredParam``). Undeclared keys never reach the output.

Every leaf is processed even after an earlier one failed; the first failure
in declaration order is what the invocation reports.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..config import ActionConfig
from ..errors import (
    MissingRequiredParameterError,
    ParameterError,
    ValidatorFailure,
    describe_error,
)
from ..libs.concurrency import call_maybe_async
from ..types import Undefined
from .chain import resolve_chain, run_formatters, run_validators
from .lookup import LookupTable, get_lookup_table
from .spec import ParameterSpec

__all__ = ("InvocationContext", "ParameterValidator", "ValidationContext")


@dataclass(frozen=True, slots=True)
class InvocationContext:
    """Explicit context passed to validators, formatters and handlers.

    Any of those callables that declares a ``context`` parameter receives it.
    """

    id: str
    action: str
    version: int


@dataclass(slots=True)
class ValidationContext:
    """State for one validation pass. Never shared between invocations."""

    raw: Mapping[str, Any]
    config: ActionConfig
    table: LookupTable
    invocation: InvocationContext | None = None
    output: dict[str, Any] = field(default_factory=dict)
    errors: list[ParameterError] = field(default_factory=list)
    validation_log: list[dict[str, Any]] = field(default_factory=list)

    def fail(self, error: ParameterError, value: Any = Undefined) -> None:
        self.errors.append(error)
        self.validation_log.append(
            {
                "field": error.path,
                "value": None if value is Undefined else value,
                "error": error.message,
                "timestamp": datetime.now().isoformat(),
            }
        )

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> ParameterError | None:
        return self.errors[0] if self.errors else None

    def get_validation_summary(self) -> dict[str, Any]:
        return {
            "total_errors": len(self.errors),
            "fields_with_errors": sorted({e.path for e in self.errors}),
            "error_entries": self.validation_log,
        }


class ParameterValidator:
    """Validates a raw input bag against an action's ``inputs`` mapping.

    Usage:
        validator = ParameterValidator()
        ctx = await validator.validate(
            {"name": " Ocean "},
            {"name": ParameterSpec(required=True, formatters=(str.strip,))},
        )
        ctx.output  # {"name": "Ocean"}
    """

    def __init__(
        self,
        config: ActionConfig | None = None,
        table: LookupTable | None = None,
    ):
        self.config = config or ActionConfig()
        self.table = table if table is not None else get_lookup_table()

    async def validate(
        self,
        raw: Mapping[str, Any] | None,
        inputs: Mapping[str, ParameterSpec],
        *,
        config: ActionConfig | None = None,
        invocation: InvocationContext | None = None,
    ) -> ValidationContext:
        """Validate every declared input.

        Args:
            raw: Caller-supplied values, keyed by top-level input name
            inputs: Declared specs, processed in their declaration order
            config: Per-call override of the missing-value policy and lookup root
            invocation: Context forwarded to validators/formatters/producers

        Returns:
            ValidationContext whose ``output`` holds normalized values and
            whose ``errors`` holds failures in the order they were found.
            Values rejected by a validator stay in ``output`` in their
            formatted form; ``output`` is only safe to use when ``ok``.
        """
        ctx = ValidationContext(
            raw=raw or {},
            config=config or self.config,
            table=self.table,
            invocation=invocation,
        )
        for name, spec in inputs.items():
            value = await self.validate_spec(spec, ctx.raw.get(name, Undefined), name, ctx)
            if value is not Undefined:
                ctx.output[name] = value
        return ctx

    async def validate_spec(
        self,
        spec: ParameterSpec,
        value: Any,
        path: str,
        ctx: ValidationContext,
    ) -> Any:
        """Normalize one value. Returns ``Undefined`` when nothing should be kept."""
        if ctx.config.is_missing(value):
            if spec.has_default:
                try:
                    value = await self._produce_default(spec, ctx)
                except Exception as e:
                    ctx.fail(ValidatorFailure(describe_error(e), path=path))
                    return Undefined
            elif spec.required:
                ctx.fail(MissingRequiredParameterError(path), value)
                return Undefined
            else:
                return value

        if spec.is_schema:
            return await self._validate_schema(spec, value, path, ctx)
        return await self._validate_leaf(spec, value, path, ctx)

    async def _validate_schema(
        self,
        spec: ParameterSpec,
        value: Any,
        path: str,
        ctx: ValidationContext,
    ) -> Any:
        if not isinstance(value, Mapping):
            ctx.fail(ValidatorFailure(f"{path} must be a mapping of parameters", path=path), value)
            return Undefined

        normalized: dict[str, Any] = {}
        for child, child_spec in spec.children().items():
            child_value = await self.validate_spec(
                child_spec, value.get(child, Undefined), f"{path}.{child}", ctx
            )
            if child_value is not Undefined:
                normalized[child] = child_value
        return normalized

    async def _validate_leaf(
        self,
        spec: ParameterSpec,
        value: Any,
        path: str,
        ctx: ValidationContext,
    ) -> Any:
        try:
            formatters = resolve_chain(spec.formatters, ctx.table, root=ctx.config.lookup_root)
            validators = resolve_chain(spec.validators, ctx.table, root=ctx.config.lookup_root)
        except ParameterError as e:
            e.path = path
            ctx.fail(e, value)
            return Undefined

        if formatters:
            try:
                value = await run_formatters(formatters, value, context=ctx.invocation)
            except Exception as e:
                ctx.fail(ValidatorFailure(describe_error(e), path=path), value)
                return Undefined

        if validators:
            try:
                await run_validators(validators, value, path=path, context=ctx.invocation)
            except ValidatorFailure as e:
                ctx.fail(e, value)
                # still echoed back in its formatted form
                return value

        return value

    async def _produce_default(self, spec: ParameterSpec, ctx: ValidationContext) -> Any:
        if callable(spec.default):
            return await call_maybe_async(spec.default, context=ctx.invocation)
        return copy.deepcopy(spec.default)

    def __repr__(self) -> str:
        return f"ParameterValidator(lookup_root={self.config.lookup_root!r})"

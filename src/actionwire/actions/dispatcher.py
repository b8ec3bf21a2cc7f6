# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""ActionDispatcher - runs one action invocation end to end.

    received → resolved → validated → guarded → executed → responded
                   ↘          ↘           ↘           ↘
                                 failed → responded

``invoke`` never raises. Whatever goes wrong (unknown action or version,
invalid params, a handler writing to its frozen params, a handler fault)
ends up in the ``error`` field of a well-formed ``ResponseEnvelope``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import ValidationError

from ..config import VERSION_PARAM, ActionConfig
from ..errors import (
    HandlerFault,
    ParameterError,
    RegistrationError,
    UnknownActionOrInvalidVersionError,
    ValidatorFailure,
    describe_error,
)
from ..libs.concurrency import call_maybe_async
from ..params import (
    FrozenParams,
    InvocationContext,
    LookupTable,
    ParameterValidator,
    freeze,
    get_lookup_table,
)
from .definition import Action, ActionDefinition, ActionHandler
from .envelope import RequestEnvelope, RequesterInformation, ResponseEnvelope
from .registry import ActionRegistry
from .resolver import resolve_action

__all__ = ("ActionDispatcher", "DispatchStage", "action", "get_dispatcher")

logger = logging.getLogger(__name__)


class DispatchStage(str, Enum):
    RECEIVED = "received"
    RESOLVED = "resolved"
    VALIDATED = "validated"
    GUARDED = "guarded"
    EXECUTED = "executed"


class ActionDispatcher:
    """Resolves, validates, guards and executes actions.

    Example:
        >>> dispatcher = ActionDispatcher()
        >>> dispatcher.register(ActionDefinition(name="ping", handler=ping))
        >>> envelope = await dispatcher.invoke("ping", {"apiVersion": 1})
        >>> envelope.error is None
        True
    """

    def __init__(
        self,
        registry: ActionRegistry | None = None,
        *,
        config: ActionConfig | None = None,
        lookup: LookupTable | None = None,
        id: str | None = None,
    ):
        """Initialize dispatcher.

        Args:
            registry: Action registry (a fresh one if None)
            config: Default config; ``invoke(config=...)`` overrides per call
            lookup: Table for validator/formatter references (process-wide if None)
            id: Identifier reported in envelopes and invocation contexts
        """
        self.config = config or ActionConfig()
        self.registry = (
            registry
            if registry is not None
            else ActionRegistry(reserved_params=self.config.reserved_params)
        )
        self.lookup = lookup if lookup is not None else get_lookup_table()
        self.id = id or f"actionwire-{uuid4().hex[:12]}"
        self.started_at = time.time()
        self.validator = ParameterValidator(self.config, self.lookup)

    def register(self, action: ActionDefinition | Action, *, override: bool = False):
        """Shortcut for ``self.registry.register``."""
        return self.registry.register(action, override=override)

    async def handle(
        self,
        request: RequestEnvelope,
        *,
        config: ActionConfig | None = None,
    ) -> ResponseEnvelope:
        return await self.invoke(
            request.action, request.params, request.api_version, config=config
        )

    async def invoke(
        self,
        name: str,
        raw_params: Mapping[str, Any] | None = None,
        requested_version: Any = None,
        *,
        config: ActionConfig | None = None,
    ) -> ResponseEnvelope:
        """Run one action and package the outcome.

        Args:
            name: Action name
            raw_params: Caller-supplied inputs (may carry ``apiVersion``)
            requested_version: Explicit version; falls back to
                ``raw_params["apiVersion"]``, then to the latest version
            config: Per-call config override

        Returns:
            ResponseEnvelope; ``error`` is set when any stage failed
        """
        info = RequesterInformation(id=self.id, action=name)
        response: dict[Any, Any] = {}
        try:
            return await self._invoke(
                name, raw_params, requested_version, config or self.config, info, response
            )
        except Exception as e:
            logger.exception(f"Unexpected failure while invoking {name}")
            response.pop("error", None)
            return ResponseEnvelope(
                response=response, error=describe_error(e), requester_information=info
            )

    async def _invoke(
        self,
        name: str,
        raw_params: Mapping[str, Any] | None,
        requested_version: Any,
        config: ActionConfig,
        info: RequesterInformation,
        response: dict[Any, Any],
    ) -> ResponseEnvelope:
        raw = dict(raw_params or {})
        if requested_version is None:
            requested_version = raw.get(VERSION_PARAM)
        if config.is_missing(requested_version):
            requested_version = None

        info.received_params = self.registry.safelist.filter(raw, extra=config.reserved_params)
        received = info.received_params
        stage = DispatchStage.RECEIVED
        logger.debug(f"Invoking {name} (apiVersion={requested_version!r})")

        try:
            definition = resolve_action(self.registry, name, requested_version)
        except UnknownActionOrInvalidVersionError as e:
            return self._failed(stage, e.message, response, info)

        stage = DispatchStage.RESOLVED
        info.version = definition.version
        if config.echo_api_version:
            received[VERSION_PARAM] = definition.version

        invocation = InvocationContext(id=self.id, action=name, version=definition.version)
        ctx = await self.validator.validate(
            raw, definition.inputs, config=config, invocation=invocation
        )
        for key, value in ctx.output.items():
            if key in raw:
                received[key] = value

        if ctx.first_error is not None:
            error = ctx.first_error
            summary = ctx.get_validation_summary()
            logger.info(
                f"Invalid params for {name} v{definition.version}: {error.message} "
                f"({summary['total_errors']} error(s) in {summary['fields_with_errors']})"
            )
            logger.debug(f"Validation log for {name}: {summary['error_entries']}")
            return self._failed(stage, self._error_value(error), response, info)

        stage = DispatchStage.VALIDATED
        params = freeze(ctx.output)
        stage = DispatchStage.GUARDED

        try:
            await self._execute(definition, params, response, invocation)
        except Exception as e:
            fault = HandlerFault(describe_error(e), cause=e)
            logger.exception(f"Action {name} v{definition.version} failed")
            return self._failed(stage, fault.message, response, info)

        error = response.pop("error", None)
        logger.debug(f"Invocation of {name} v{definition.version} {DispatchStage.EXECUTED.value}")
        return ResponseEnvelope(response=response, error=error, requester_information=info)

    async def _execute(
        self,
        definition: ActionDefinition,
        params: FrozenParams,
        response: dict[Any, Any],
        invocation: InvocationContext,
    ) -> None:
        # return value is ignored; handlers write into ``response``
        await call_maybe_async(definition.handler, params, response, context=invocation)

    @staticmethod
    def _error_value(error: ParameterError) -> Any:
        if isinstance(error, ValidatorFailure):
            return error.value
        return error.message

    @staticmethod
    def _failed(
        stage: DispatchStage,
        error: Any,
        response: dict[Any, Any],
        info: RequesterInformation,
    ) -> ResponseEnvelope:
        logger.debug(f"Invocation of {info.action or '?'} failed after {stage.value}")
        response.pop("error", None)
        return ResponseEnvelope(response=response, error=error, requester_information=info)

    @property
    def uptime(self) -> float:
        return time.time() - self.started_at

    def __repr__(self) -> str:
        return f"ActionDispatcher(id={self.id!r}, actions={len(self.registry)})"


# Global dispatcher singleton
_dispatcher: ActionDispatcher | None = None


def get_dispatcher() -> ActionDispatcher:
    """Get the process-wide dispatcher (singleton)."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = ActionDispatcher()
    return _dispatcher


def action(
    name: str,
    *,
    version: int = 1,
    description: str = "",
    inputs: Mapping[str, Any] | None = None,
    output_example: Mapping[str, Any] | None = None,
    dispatcher: ActionDispatcher | None = None,
    override: bool = False,
) -> Callable[[ActionHandler], ActionHandler]:
    """Decorator registering a handler function as an action.

    Example:
        >>> @action("greet", inputs={"who": {"required": True}})
        ... async def greet(params, response):
        ...     response["greeting"] = f"hello {params['who']}"
    """

    def decorator(handler: ActionHandler) -> ActionHandler:
        target = dispatcher or get_dispatcher()
        try:
            definition = ActionDefinition(
                name=name,
                version=version,
                description=description or (handler.__doc__ or "").strip(),
                inputs=dict(inputs or {}),
                output_example=dict(output_example or {}),
                handler=handler,
            )
        except (ValidationError, TypeError, ValueError) as e:
            raise RegistrationError(
                f"invalid definition for action `{name}`: {e}",
                details={"action": name},
                cause=e,
            ) from e
        target.register(definition, override=override)
        return handler

    return decorator

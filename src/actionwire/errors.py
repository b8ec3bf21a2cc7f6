# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Error hierarchy for action registration and invocation.

Registration errors propagate to whoever registers the action. Invocation
errors never leave ``ActionDispatcher.invoke``; they are rendered into the
``error`` field of the response envelope instead.
"""

from __future__ import annotations

from typing import Any, ClassVar

__all__ = (
    "ActionwireError",
    "HandlerFault",
    "ImmutableMutationError",
    "MissingRequiredParameterError",
    "ParameterError",
    "RegistrationError",
    "ReservedParamError",
    "UnknownActionOrInvalidVersionError",
    "UnresolvedReferenceError",
    "ValidatorFailure",
    "describe_error",
)


class ActionwireError(Exception):
    """Base error with a message, structured details and a retry hint."""

    default_message: ClassVar[str] = "actionwire error"
    default_retryable: ClassVar[bool] = False

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        retryable: bool | None = None,
        cause: BaseException | None = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        self.retryable = self.default_retryable if retryable is None else retryable
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "error": type(self).__name__,
            "message": self.message,
            "retryable": self.retryable,
        }
        if self.details:
            data["details"] = self.details
        return data


class RegistrationError(ActionwireError):
    """Action definition rejected at registration time."""

    default_message = "invalid action definition"


class ReservedParamError(RegistrationError):
    """Action declares an input that the framework owns."""

    default_message = "input uses a reserved param name"


class UnknownActionOrInvalidVersionError(ActionwireError):
    """No definition for the requested action name and version.

    Unknown names and unknown versions are deliberately reported the same way.
    """

    default_message = "unknown action or invalid apiVersion"


class ParameterError(ActionwireError):
    """Base for failures raised while normalizing inputs."""

    default_message = "invalid parameter"

    def __init__(self, message: str | None = None, *, path: str = "", **kwargs: Any):
        self.path = path
        super().__init__(message, **kwargs)


class MissingRequiredParameterError(ParameterError):
    def __init__(self, path: str, **kwargs: Any):
        super().__init__(f"{path} is a required parameter for this action", path=path, **kwargs)


class ValidatorFailure(ParameterError):
    """A validator rejected a value.

    ``value`` is what the envelope reports: the validator's own return value
    when it returned one, otherwise the rendered exception it raised.
    """

    default_message = "parameter failed validation"

    def __init__(self, value: Any, *, path: str = "", **kwargs: Any):
        self.value = value
        message = value if isinstance(value, str) else None
        super().__init__(message, path=path, **kwargs)


class UnresolvedReferenceError(ParameterError):
    """A validator or formatter reference is not present in the lookup table."""

    default_message = "unresolved validator or formatter reference"


class ImmutableMutationError(ActionwireError, TypeError):
    """Handler code tried to write into its frozen params."""

    default_message = "params are read only"

    def __init__(self, key: Any, owner: str = "params", **kwargs: Any):
        self.key = key
        super().__init__(f"Cannot assign to read only property '{key}' of {owner}", **kwargs)


class HandlerFault(ActionwireError):
    """Uncaught failure raised by an action handler."""

    default_message = "action handler failed"


def describe_error(exc: BaseException) -> str:
    """Render an exception for the envelope's ``error`` field.

    Framework errors carry a caller-facing message already. Anything else is
    prefixed with its type so the caller can tell a ``KeyError`` from a
    ``ValueError``.
    """
    if isinstance(exc, ActionwireError):
        return exc.message
    return f"{type(exc).__name__}: {exc!s}"

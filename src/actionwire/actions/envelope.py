# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Request and response envelopes.

Field names are snake_case in Python and camelCase on the wire
(``requesterInformation.receivedParams``); ``to_dict()`` produces the wire
form. No serialization format is imposed, ``to_json()`` is a convenience.
"""

from __future__ import annotations

from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, Field

from ..params import thaw

__all__ = ("RequestEnvelope", "RequesterInformation", "ResponseEnvelope")


class RequestEnvelope(BaseModel):
    """One incoming call: action name, optional version, raw params."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    action: str
    api_version: int | str | None = Field(None, alias="apiVersion")
    params: dict[str, Any] = Field(default_factory=dict)


class RequesterInformation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(None, description="Dispatcher that handled the call")
    action: str = ""
    version: int | None = Field(None, description="Resolved action version")
    received_params: dict[str, Any] = Field(default_factory=dict, alias="receivedParams")


class ResponseEnvelope(BaseModel):
    """Result of one invocation. ``error`` is None on success."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    response: dict[Any, Any] = Field(default_factory=dict)
    error: Any = None
    requester_information: RequesterInformation = Field(
        default_factory=RequesterInformation, alias="requesterInformation"
    )

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def received_params(self) -> dict[str, Any]:
        return self.requester_information.received_params

    def to_dict(self) -> dict[str, Any]:
        """Wire form with camelCase keys and plain (unfrozen) containers."""
        data: dict[str, Any] = {"response": thaw(self.response)}
        if self.error is not None:
            data["error"] = thaw(self.error)
        data["requesterInformation"] = thaw(
            self.requester_information.model_dump(by_alias=True)
        )
        return data

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict(), default=str, option=orjson.OPT_NON_STR_KEYS)

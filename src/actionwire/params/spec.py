# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Self

from ..types import Undefined

__all__ = ("ChainEntry", "ParameterSpec", "coerce_inputs")

# A chain entry is a callable or a dotted reference into the lookup table
ChainEntry = Callable[..., Any] | str

_KNOWN_KEYS = frozenset({"required", "default", "validator", "formatter", "schema", "description"})


def _as_chain(value: Any, kind: str) -> tuple[ChainEntry, ...]:
    if value is None:
        return ()
    entries = tuple(value) if isinstance(value, (list, tuple)) else (value,)
    for i, entry in enumerate(entries):
        if not (callable(entry) or isinstance(entry, str)):
            raise TypeError(
                f"{kind} entries must be callables or lookup references, "
                f"got {type(entry).__name__} at index {i}"
            )
    return entries


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """Declarative rules for one input.

    Leaf-shaped specs carry ``validator``/``formatter`` chains. Schema-shaped
    specs carry ``schema``, a mapping of child names to specs, and may only
    add container-level ``required``/``default``.

    ``default`` is either a plain value or a zero-argument producer (any
    callable). Producers may declare a ``context`` parameter.
    """

    required: bool = False
    default: Any = Undefined
    validators: tuple[ChainEntry, ...] = ()
    formatters: tuple[ChainEntry, ...] = ()
    schema: Mapping[str, ParameterSpec] | None = None
    description: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.schema is not None and (self.validators or self.formatters):
            raise ValueError("A parameter spec is either leaf-shaped or schema-shaped, not both")

    @classmethod
    def from_value(cls, value: ParameterSpec | Mapping[str, Any] | None) -> Self:
        """Build a spec from the dict form used in action definitions.

        Accepts ``{"required": True, "validator": fn, "formatter": [f1, "ref"]}``
        or ``{"schema": {...}}``, nested to any depth.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls()
        if not isinstance(value, Mapping):
            raise TypeError(f"Parameter spec must be a mapping, got {type(value).__name__}")

        schema = value.get("schema")
        if schema is not None:
            if not isinstance(schema, Mapping):
                raise TypeError("'schema' must be a mapping of child names to specs")
            schema = coerce_inputs(schema)

        return cls(
            required=bool(value.get("required", False)),
            default=value.get("default", Undefined),
            validators=_as_chain(value.get("validator"), "validator"),
            formatters=_as_chain(value.get("formatter"), "formatter"),
            schema=schema,
            description=value.get("description"),
            extra={k: v for k, v in value.items() if k not in _KNOWN_KEYS},
        )

    @property
    def is_schema(self) -> bool:
        return self.schema is not None

    @property
    def has_default(self) -> bool:
        return self.default is not Undefined

    def children(self) -> dict[str, ParameterSpec]:
        return dict(self.schema) if self.schema is not None else {}

    def to_dict(self) -> dict[str, Any]:
        """Describe this parameter, e.g. for documentation endpoints."""
        data: dict[str, Any] = {"required": self.required}
        if self.description:
            data["description"] = self.description
        if self.has_default and not callable(self.default):
            data["default"] = self.default
        if self.schema is not None:
            data["schema"] = {k: v.to_dict() for k, v in self.schema.items()}
        return data


def coerce_inputs(inputs: Mapping[str, Any] | None) -> dict[str, ParameterSpec]:
    """Normalize an ``inputs`` mapping into ``{name: ParameterSpec}``."""
    if not inputs:
        return {}
    return {str(name): ParameterSpec.from_value(spec) for name, spec in inputs.items()}

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Parameter schema engine.

    raw inputs → ParameterValidator (missing/default/required → formatters →
    validators, recursing into nested schemas) → freeze() → handler

Usage:
    from actionwire.params import ParameterSpec, ParameterValidator, coerce_inputs

    inputs = coerce_inputs({
        "name": {"required": True, "formatter": str.strip},
        "page": {"default": 1, "validator": lambda v: v > 0 or "page must be positive"},
    })
    ctx = await ParameterValidator().validate({"name": " Ocean "}, inputs)
    # ctx.output → {"name": "Ocean", "page": 1}
"""

from .chain import resolve_chain, run_formatters, run_validators
from .engine import InvocationContext, ParameterValidator, ValidationContext
from .guard import FrozenList, FrozenParams, FrozenSet, freeze, thaw
from .lookup import LookupTable, get_lookup_table
from .safelist import Safelist
from .spec import ChainEntry, ParameterSpec, coerce_inputs

__all__ = (
    "ChainEntry",
    "FrozenList",
    "FrozenParams",
    "FrozenSet",
    "InvocationContext",
    "LookupTable",
    "ParameterSpec",
    "ParameterValidator",
    "Safelist",
    "ValidationContext",
    "coerce_inputs",
    "freeze",
    "get_lookup_table",
    "resolve_chain",
    "run_formatters",
    "run_validators",
    "thaw",
)

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import pytest

from actionwire import Undefined
from actionwire.params import ParameterSpec, coerce_inputs


class TestFromValue:
    """Dict-form declarations become ParameterSpec values."""

    def test_leaf_form(self):
        spec = ParameterSpec.from_value(
            {"required": True, "validator": str.isdigit, "formatter": [str.strip, "f.upper"]}
        )
        assert spec.required is True
        assert spec.validators == (str.isdigit,)
        assert spec.formatters == (str.strip, "f.upper")
        assert not spec.is_schema
        assert not spec.has_default

    def test_schema_form_nests(self):
        spec = ParameterSpec.from_value({"schema": {"inner": {"schema": {"leaf": {}}}}})
        assert spec.is_schema
        inner = spec.children()["inner"]
        assert isinstance(inner, ParameterSpec)
        assert "leaf" in inner.children()

    def test_none_and_instances(self):
        assert ParameterSpec.from_value(None) == ParameterSpec()
        spec = ParameterSpec(required=True)
        assert ParameterSpec.from_value(spec) is spec

    def test_unknown_keys_kept_as_extra(self):
        spec = ParameterSpec.from_value({"required": False, "example": 3})
        assert spec.extra == {"example": 3}

    def test_default_may_be_falsy(self):
        spec = ParameterSpec.from_value({"default": None})
        assert spec.has_default
        assert ParameterSpec().default is Undefined

    @pytest.mark.parametrize("bad", [3, "required"])
    def test_rejects_non_mappings(self, bad):
        with pytest.raises(TypeError):
            ParameterSpec.from_value(bad)

    def test_rejects_non_callable_chain_entries(self):
        with pytest.raises(TypeError, match="index 1"):
            ParameterSpec.from_value({"validator": [str.isdigit, 5]})

    def test_leaf_and_schema_are_exclusive(self):
        with pytest.raises(ValueError):
            ParameterSpec.from_value({"schema": {"a": {}}, "validator": str.isdigit})


class TestDescribe:
    def test_to_dict_omits_callables(self):
        spec = ParameterSpec.from_value(
            {"required": True, "default": lambda: 1, "description": "count"}
        )
        assert spec.to_dict() == {"required": True, "description": "count"}

    def test_to_dict_nested(self):
        inputs = coerce_inputs({"opts": {"default": {}, "schema": {"x": {"required": True}}}})
        assert inputs["opts"].to_dict() == {
            "required": False,
            "default": {},
            "schema": {"x": {"required": True}},
        }

    def test_coerce_inputs_empty(self):
        assert coerce_inputs(None) == {}

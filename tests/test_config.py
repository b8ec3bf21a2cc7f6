# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import pickle

import pytest
from pydantic import ValidationError

from actionwire import Undefined
from actionwire.config import DEFAULT_RESERVED_PARAMS, ActionConfig
from actionwire.types import is_sentinel, not_sentinel


class TestActionConfig:
    def test_defaults(self):
        config = ActionConfig()
        assert config.missing_param_checks == (None, "", Undefined)
        assert config.reserved_params == DEFAULT_RESERVED_PARAMS
        assert config.lookup_root == "api"
        assert config.echo_api_version is True

    def test_frozen(self):
        with pytest.raises(ValidationError):
            ActionConfig().lookup_root = "app"

    def test_model_copy_variant(self):
        base = ActionConfig()
        variant = base.model_copy(update={"echo_api_version": False})
        assert variant.echo_api_version is False
        assert base.echo_api_version is True

    def test_checks_coerced(self):
        assert ActionConfig(missing_param_checks=None).missing_param_checks == ()
        assert ActionConfig(missing_param_checks=[Undefined]).missing_param_checks == (Undefined,)
        assert ActionConfig(missing_param_checks="-").missing_param_checks == ("-",)
        assert ActionConfig(reserved_params="token").reserved_params == ("token",)


class TestIsMissing:
    @pytest.mark.parametrize("value", [None, "", Undefined])
    def test_default_missing_values(self, value):
        assert ActionConfig().is_missing(value)

    @pytest.mark.parametrize("value", [False, 0, [], {}, "0"])
    def test_falsy_values_are_present(self, value):
        assert not ActionConfig().is_missing(value)

    def test_type_strict_comparison(self):
        config = ActionConfig(missing_param_checks=(0,))
        assert config.is_missing(0)
        assert not config.is_missing(False)
        assert not config.is_missing(0.0)

    def test_undefined_always_missing(self):
        assert ActionConfig(missing_param_checks=()).is_missing(Undefined)


class TestUndefined:
    def test_singleton_and_falsy(self):
        assert not Undefined
        assert repr(Undefined) == "Undefined"
        assert pickle.loads(pickle.dumps(Undefined)) is Undefined

    def test_sentinel_helpers(self):
        assert is_sentinel(Undefined)
        assert not is_sentinel(None)
        assert not_sentinel(None)

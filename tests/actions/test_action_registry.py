# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for ActionRegistry: versions, validation, safelist upkeep."""

import pytest

from actionwire.actions import Action, ActionDefinition, ActionRegistry, action
from actionwire.errors import RegistrationError, ReservedParamError
from actionwire.testing import create_test_dispatcher


async def _noop(params, response):
    pass


def _definition(name="echo", version=1, inputs=None):
    return ActionDefinition(name=name, version=version, inputs=inputs or {}, handler=_noop)


class Echo(Action):
    name = "echo"
    description = "echo params"
    inputs = {"message": {"required": True}}

    async def run(self, params, response):
        response["message"] = params["message"]


class TestRegister:
    def test_register_definition(self):
        registry = ActionRegistry()
        definition = registry.register(_definition())

        assert registry.lookup("echo", 1) is definition
        assert "echo" in registry
        assert len(registry) == 1

    def test_register_class_declared_action(self):
        registry = ActionRegistry()
        definition = registry.register(Echo())

        assert definition.name == "echo"
        assert definition.description == "echo params"
        assert callable(definition.handler)
        assert "message" in registry.safelist

    def test_duplicate_version_rejected(self):
        registry = ActionRegistry()
        registry.register(_definition())
        with pytest.raises(RegistrationError, match="already registered"):
            registry.register(_definition())

    def test_override_replaces_and_updates_safelist(self):
        registry = ActionRegistry()
        registry.register(_definition(inputs={"old": {}}))
        registry.register(_definition(inputs={"new": {}}), override=True)

        assert "new" in registry.safelist
        assert "old" not in registry.safelist

    def test_rejects_unknown_objects(self):
        with pytest.raises(RegistrationError, match="expected ActionDefinition or Action"):
            ActionRegistry().register(object())

    def test_rejects_missing_handler(self):
        with pytest.raises(RegistrationError, match="no callable handler"):
            ActionRegistry().register(ActionDefinition(name="nothing"))

    @pytest.mark.parametrize("version", [0, -1])
    def test_rejects_non_positive_versions(self, version):
        with pytest.raises(RegistrationError, match="positive integer"):
            ActionRegistry().register(_definition(version=version))

    def test_rejects_reserved_inputs(self):
        registry = ActionRegistry()
        with pytest.raises(ReservedParamError):
            registry.register(_definition(inputs={"callback": {}}))
        assert "echo" not in registry

    def test_custom_reserved_params(self):
        registry = ActionRegistry(reserved_params=("token",))
        with pytest.raises(ReservedParamError):
            registry.register(_definition(inputs={"token": {}}))
        registry.register(_definition(inputs={"callback": {}}))
        assert "token" in registry.safelist


class TestBadDeclarations:
    """Malformed class-declared actions surface as RegistrationError."""

    def test_leaf_and_schema_spec(self):
        class Mixed(Action):
            name = "mixed"
            inputs = {"a": {"schema": {"b": {}}, "validator": str.isdigit}}

        with pytest.raises(RegistrationError) as exc_info:
            ActionRegistry().register(Mixed())
        assert "invalid definition for action `mixed`" in str(exc_info.value)
        assert exc_info.value.__cause__ is not None

    def test_non_callable_chain_entry(self):
        class BadChain(Action):
            name = "badChain"
            inputs = {"a": {"validator": [5]}}

        with pytest.raises(RegistrationError) as exc_info:
            ActionRegistry().register(BadChain())
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_non_integer_version(self):
        class BadVersion(Action):
            name = "badVersion"
            version = "x"

        registry = ActionRegistry()
        with pytest.raises(RegistrationError):
            registry.register(BadVersion())
        with pytest.raises(RegistrationError):
            BadVersion().validate()
        assert "badVersion" not in registry

    def test_decorator_reports_bad_inputs(self):
        dispatcher = create_test_dispatcher()
        with pytest.raises(RegistrationError):

            @action("bad", inputs={"a": {"formatter": 3}}, dispatcher=dispatcher)
            async def bad(params, response):
                pass

        assert "bad" not in dispatcher.registry


class TestVersions:
    @pytest.fixture
    def registry(self):
        registry = ActionRegistry()
        for version in (2, 1, 3):
            registry.register(_definition(version=version))
        return registry

    def test_versions_sorted_and_latest(self, registry):
        version_set = registry.versions_of("echo")
        assert version_set.versions == (1, 2, 3)
        assert version_set.latest == 3
        assert 2 in version_set
        assert list(version_set) == [1, 2, 3]
        assert registry.latest("echo").version == 3

    def test_unknown_name(self, registry):
        assert registry.versions_of("nope") is None
        assert registry.latest("nope") is None
        assert registry.lookup("nope", 1) is None

    def test_unregister_one_version(self, registry):
        assert registry.unregister("echo", 3) is True
        assert registry.versions_of("echo").latest == 2
        assert registry.unregister("echo", 3) is False

    def test_unregister_all_versions(self, registry):
        assert registry.unregister("echo") is True
        assert "echo" not in registry
        assert registry.unregister("echo") is False

    def test_definitions_grouped(self, registry):
        registry.register(_definition(name="other"))
        listed = [(d.name, d.version) for d in registry.definitions()]
        assert listed == [("echo", 1), ("echo", 2), ("echo", 3), ("other", 1)]
        assert registry.list_names() == ["echo", "other"]

    def test_clear(self, registry):
        registry.register(_definition(name="other", inputs={"x": {}}))
        registry.clear()
        assert len(registry) == 0
        assert "x" not in registry.safelist
        assert "apiVersion" in registry.safelist


class TestDescribe:
    def test_describe_excludes_handler(self):
        definition = ActionRegistry().register(Echo())
        described = definition.describe()

        assert described["name"] == "echo"
        assert described["inputs"] == {"message": {"required": True}}
        assert "handler" not in described

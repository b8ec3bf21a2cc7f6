# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import pytest

from actionwire.actions import ActionRegistry, register_builtin_actions
from actionwire.testing import create_test_dispatcher, run_action


class TestRandomNumber:
    @pytest.mark.asyncio
    async def test_generates_number(self, dispatcher):
        envelope = await run_action(dispatcher, "randomNumber")
        number = envelope.response["randomNumber"]

        assert 0 <= number < 1
        assert envelope.response["stringRandomNumber"] == f"Your random number is {number}"

    @pytest.mark.asyncio
    async def test_numbers_differ(self, dispatcher):
        first = await run_action(dispatcher, "randomNumber")
        second = await run_action(dispatcher, "randomNumber")
        assert first.response["randomNumber"] != second.response["randomNumber"]


class TestStatus:
    @pytest.mark.asyncio
    async def test_reports_dispatcher(self, dispatcher):
        envelope = await run_action(dispatcher, "status")

        assert envelope.error is None
        assert envelope.response["id"] == "test-server"
        assert envelope.response["uptime"] >= 0
        assert envelope.response["actions"] == ["randomNumber", "status"]

    def test_register_on_separate_registry(self):
        dispatcher = create_test_dispatcher()
        registry = ActionRegistry()
        register_builtin_actions(dispatcher, registry)

        assert "status" in registry
        assert "status" not in dispatcher.registry

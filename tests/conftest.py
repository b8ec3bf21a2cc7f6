# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures.

Every test gets its own registry and lookup table; nothing touches the
process-wide singletons.
"""

import pytest

from actionwire.actions import register_builtin_actions
from actionwire.params import LookupTable
from actionwire.testing import create_test_dispatcher


@pytest.fixture
def lookup():
    """Fresh, empty lookup table."""
    return LookupTable()


@pytest.fixture
def dispatcher(lookup):
    """Dispatcher with an isolated registry and the built-in actions."""
    dispatcher = create_test_dispatcher(lookup=lookup, id="test-server")
    register_builtin_actions(dispatcher)
    return dispatcher

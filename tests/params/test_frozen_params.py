# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for the read-only params view handed to handlers."""

import copy

import pytest

from actionwire.errors import ImmutableMutationError
from actionwire.params import FrozenList, FrozenParams, FrozenSet, freeze, thaw


@pytest.fixture
def params():
    return freeze({"a": 1, "nested": {"b": [1, {"c": 2}]}})


class TestReads:
    def test_behaves_like_mapping(self, params):
        assert isinstance(params, FrozenParams)
        assert params["a"] == 1
        assert params.a == 1
        assert params.get("missing") is None
        assert set(params) == {"a", "nested"}
        assert len(params) == 2

    def test_nested_containers_are_frozen(self, params):
        assert isinstance(params["nested"], FrozenParams)
        assert isinstance(params["nested"]["b"], FrozenList)
        assert isinstance(params["nested"]["b"][1], FrozenParams)

    def test_equality_with_plain_containers(self, params):
        assert params == {"a": 1, "nested": {"b": [1, {"c": 2}]}}
        assert params["nested"]["b"] == [1, {"c": 2}]

    def test_missing_attribute_raises_attribute_error(self, params):
        with pytest.raises(AttributeError):
            params.missing


class TestWrites:
    def test_item_assignment(self, params):
        with pytest.raises(ImmutableMutationError) as exc_info:
            params["a"] = 2
        assert str(exc_info.value) == "Cannot assign to read only property 'a' of params"
        assert params["a"] == 1

    def test_attribute_assignment(self, params):
        with pytest.raises(ImmutableMutationError):
            params.a = 2

    def test_is_a_type_error(self, params):
        with pytest.raises(TypeError):
            del params["a"]

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda p: p.pop("a"),
            lambda p: p.update({"a": 3}),
            lambda p: p.setdefault("z", 1),
            lambda p: p.clear(),
        ],
    )
    def test_mapping_mutators(self, params, mutate):
        with pytest.raises(ImmutableMutationError):
            mutate(params)

    def test_nested_write_names_full_path(self, params):
        with pytest.raises(ImmutableMutationError) as exc_info:
            params["nested"]["b"][1]["c"] = 3
        assert "of params.nested.b[1]" in str(exc_info.value)

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda seq: seq.append(1),
            lambda seq: seq.extend([1]),
            lambda seq: seq.insert(0, 1),
            lambda seq: seq.pop(),
            lambda seq: seq.remove(1),
            lambda seq: seq.sort(),
            lambda seq: seq.reverse(),
        ],
    )
    def test_list_mutators(self, params, mutate):
        with pytest.raises(ImmutableMutationError):
            mutate(params["nested"]["b"])


class TestThaw:
    def test_thaw_returns_plain_copy(self, params):
        plain = thaw(params)
        assert type(plain) is dict
        assert type(plain["nested"]["b"]) is list
        plain["a"] = 2
        assert params["a"] == 1

    def test_deepcopy_thaws(self, params):
        plain = copy.deepcopy(params)
        assert type(plain) is dict
        plain["nested"]["b"].append(3)

    def test_freeze_is_idempotent(self, params):
        assert freeze(params) is params
        assert freeze(5) == 5


class TestTuplesAndSets:
    """Tuples and sets are frozen too, including what sits inside them."""

    @pytest.fixture
    def raw(self):
        return {"a": ({"x": "orig"},), "s": {1}, "fs": frozenset({2})}

    def test_tuple_becomes_frozen_list(self, raw):
        params = freeze(raw)
        assert isinstance(params["a"], FrozenList)
        assert isinstance(params["a"][0], FrozenParams)
        assert params["a"] == ({"x": "orig"},)

        with pytest.raises(ImmutableMutationError) as exc_info:
            params["a"][0]["x"] = "changed"
        assert "of params.a[0]" in str(exc_info.value)
        assert raw["a"][0]["x"] == "orig"

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda s: s.add(9),
            lambda s: s.discard(1),
            lambda s: s.remove(1),
            lambda s: s.pop(),
            lambda s: s.clear(),
            lambda s: s.update({3}),
        ],
    )
    def test_set_mutators(self, raw, mutate):
        params = freeze(raw)
        with pytest.raises(ImmutableMutationError):
            mutate(params["s"])
        assert raw["s"] == {1}

    def test_sets_read_like_sets(self, raw):
        params = freeze(raw)
        assert isinstance(params["s"], FrozenSet)
        assert isinstance(params["fs"], FrozenSet)
        assert params["s"] == {1}
        assert 1 in params["s"]
        assert params["s"] | {5} == {1, 5}
        assert hash(params["fs"]) == hash(frozenset({2}))

    def test_thaw_sets_and_tuples(self, raw):
        plain = thaw(freeze(raw))
        assert plain == {"a": [{"x": "orig"}], "s": {1}, "fs": {2}}
        assert type(plain["s"]) is set

import pytest

from patmatch.indexing import (
    BindMap,
    Binding,
    BindingState,
    IndexedData,
    IndexingScheme,
    InvalidKeyError,
    VariableExistsError,
    bindings_hash,
)


class UsizeScheme(IndexingScheme):
    def required_bindings(self, key):
        return [] if key == 0 else [key - 1]


class UsizeData(IndexedData):
    def list_bind_options(self, key, known_bindings):
        if key == 0 or (key - 1) in known_bindings:
            return [key]
        return []


class MultiData(IndexedData):
    def list_bind_options(self, key, known_bindings):
        return [1, 2] if key == "x" else []


def test_bind_with_scheme():
    scheme = UsizeScheme()
    key = 4
    missing = scheme.missing_bindings(key, set())
    assert missing == list(range(key + 1))

    maps = UsizeData().bind_all(BindMap(), missing)
    assert len(maps) == 1
    index_map = maps[0]
    assert index_map.get_binding(key) == Binding.bound(key)
    assert len(index_map) == key + 1

    again = UsizeData().bind_all(index_map.copy(), missing)
    assert len(again) == 1
    assert again[0] == index_map

    index_map = BindMap({3: 3})
    missing = scheme.all_missing_bindings([1, 4], [3])
    assert missing == [0, 1, 4]
    maps = UsizeData().bind_all(index_map, missing)
    assert len(maps) == 1
    assert sorted(maps[0]) == [0, 1, 3, 4]


def test_missing_bindings_known_key():
    scheme = UsizeScheme()
    assert scheme.missing_bindings(2, {2}) == []
    missing = scheme.missing_bindings(2, {0})
    assert missing == [1, 2]
    (bound,) = UsizeData().bind_all(BindMap({0: 0}), missing)
    assert bound == BindMap({0: 0, 1: 1, 2: 2})


def test_bind_all_branches_and_failures():
    maps = MultiData().bind_all(BindMap(), ["x", "y"])
    assert [m.get_binding("x").value for m in maps] == [1, 2]
    assert all(m.get_binding("y").is_failed() for m in maps)


def test_binding_states():
    b = Binding.bound(5)
    assert b.is_bound() and not b.is_failed() and not b.is_unbound()
    assert b.state is BindingState.BOUND
    assert Binding.failed().is_failed()
    assert Binding.unbound().is_unbound()
    assert b.map(lambda v: v * 2) == Binding.bound(10)
    assert Binding.failed().map(lambda v: v * 2) == Binding.failed()


def test_bind_map_conflict():
    m = BindMap()
    m.bind("a", 1)
    m.bind("a", 1)
    with pytest.raises(VariableExistsError) as err:
        m.bind("a", 2)
    assert err.value.key == repr("a")
    assert m.get_binding("a") == Binding.bound(1)


def test_bind_failed_then_bind_raises():
    m = BindMap()
    m.bind_failed("a")
    assert m.get_binding("a").is_failed()
    with pytest.raises(VariableExistsError):
        m.bind("a", 1)


def test_invalid_key_message():
    assert str(InvalidKeyError("k")) == "Cannot bind to key: k"


def test_retain_keys_and_copy():
    m = BindMap({"a": 1, "b": None, "c": 3})
    c = m.copy()
    m.retain_keys({"a", "b"})
    assert m == {"a": 1, "b": None}
    assert c == {"a": 1, "b": None, "c": 3}
    assert isinstance(c, BindMap)


def test_bindings_hash():
    m1 = BindMap({"a": 1, "b": 2})
    m2 = BindMap({"a": 1, "b": 3})
    assert bindings_hash(m1, ["a"]) == bindings_hash(m2, ["a"])
    assert bindings_hash(m1, ["a", "b"]) == bindings_hash(BindMap(m1), ["a", "b"])
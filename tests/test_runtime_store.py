"""Tests for :mod:`selfmethods.runtime.store`."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from selfmethods.runtime.store import (
    STORE_ATTRIBUTE,
    InstanceStore,
    Literal,
    attach_store,
    is_callable_slot,
    literal_value,
    store_of,
)


def test_instance_store_basic_mapping_operations():
    store = InstanceStore([("name", "foo"), ("size", 3)])

    assert "name" in store
    assert len(store) == 2
    assert list(store) == ["name", "size"]
    assert store.get("missing", "default") == "default"

    assert store.put("name", "bar") == "bar"
    assert store.get("name") == "bar"

    assert store.pop("size") == 3
    assert store.pop("size") is None
    assert store.names() == ["name"]


def test_snapshot_is_a_copy():
    store = InstanceStore({"a": 1}.items())
    snap = store.snapshot()
    snap["b"] = 2

    assert "b" not in store


def test_is_callable_slot_classifies_values():
    assert is_callable_slot(lambda self: 1)
    assert is_callable_slot(len)
    assert not is_callable_slot("text")
    assert not is_callable_slot(None)
    assert not is_callable_slot(dict)
    assert not is_callable_slot(Literal(lambda self: 1))


def test_literal_value_unwraps_only_literals():
    fn = lambda self: 1  # noqa: E731 - inline callable for the test

    assert literal_value(Literal(fn)) is fn
    assert literal_value(5) == 5
    assert Literal(5) == Literal(5)
    assert Literal(5) != Literal(6)


def test_attach_and_fetch_store():
    holder = SimpleNamespace()
    store = attach_store(holder, InstanceStore())

    assert getattr(holder, STORE_ATTRIBUTE) is store
    assert store_of(holder) is store


def test_store_of_rejects_objects_without_store():
    with pytest.raises(TypeError, match="no slot store"):
        store_of(object())

"""Tests for :mod:`selfmethods.runtime.cache`."""

from __future__ import annotations

import gc
import threading

import pytest

from selfmethods import SelfMethods
from selfmethods.runtime import cache as cache_module
from selfmethods.runtime.cache import ResolutionCache, Strategy
from selfmethods.runtime.resolver import lookup, resolve
from selfmethods.runtime.mutator import set_slot


class Widget(SelfMethods):
    def _label(self):
        return "widget"


class Gadget(Widget):
    pass


@pytest.fixture
def cache():
    return ResolutionCache()


def test_fallback_for_probes_once_per_class_and_name(cache, monkeypatch):
    calls = []
    real_probe = cache_module.probe

    def counting_probe(cls, name):
        calls.append((cls, name))
        return real_probe(cls, name)

    monkeypatch.setattr(cache_module, "probe", counting_probe)

    first = cache.fallback_for(Widget, "_label")
    second = cache.fallback_for(Widget, "_label")

    assert first == second
    assert first.owner is Widget
    assert calls == [(Widget, "_label")]
    assert cache.misses == 1
    assert cache.hits == 1


def test_negative_probes_are_cached(cache):
    assert cache.fallback_for(Widget, "_absent") is None
    assert cache.fallback_for(Widget, "_absent") is None
    assert cache.last_strategy(Widget, "_absent") is Strategy.MISS
    assert len(cache) == 1


def test_lookup_records_last_strategy(cache):
    widget = Widget()

    lookup(widget, "label", cache=cache)
    assert cache.last_strategy(Widget, "_label") is Strategy.FALLBACK

    set_slot(widget, "label", "custom")
    lookup(widget, "label", cache=cache)
    assert cache.last_strategy(Widget, "_label") is Strategy.OWN_SLOT


def test_cache_never_hides_own_slots_of_other_instances(cache):
    plain = Widget()
    custom = Widget()

    assert lookup(plain, "label", cache=cache).value == "widget"
    set_slot(custom, "label", "mine")

    assert lookup(custom, "label", cache=cache).value == "mine"
    assert lookup(plain, "label", cache=cache).value == "widget"


def test_invalidate_drops_class_and_subclasses(cache):
    cache.fallback_for(Widget, "_label")
    cache.fallback_for(Gadget, "_label")
    assert len(cache) == 2

    cache.invalidate(Widget)
    assert len(cache) == 0

    cache.fallback_for(Gadget, "_label")
    cache.invalidate()
    assert len(cache) == 0


def test_invalidate_picks_up_class_changes(cache):
    class Mutable(SelfMethods):
        pass

    item = Mutable()
    assert lookup(item, "late", cache=cache).found is False

    Mutable._late = lambda self: "added"
    assert lookup(item, "late", cache=cache).found is False

    cache.invalidate(Mutable)
    assert lookup(item, "late", cache=cache).value == "added"


def test_classes_are_held_weakly(cache):
    def make():
        class Temporary(SelfMethods):
            def _x(self):
                return 1

        cache.fallback_for(Temporary, "_x")

    make()
    gc.collect()

    assert len(cache) == 0


def test_classes_using_super_are_held_weakly(cache):
    def make():
        class Temporary(Widget):
            def _label(self):
                return super()._label().upper()

        assert lookup(Temporary(), "label", cache=cache).value == "WIDGET"

    make()
    gc.collect()

    assert len(cache) == 0


def test_entries_read_the_current_class_namespace(cache):
    class Patched(SelfMethods):
        def _tone(self):
            return "old"

    item = Patched()
    assert lookup(item, "tone", cache=cache).value == "old"

    Patched._tone = lambda self: "new"
    assert lookup(item, "tone", cache=cache).value == "new"

    del Patched._tone
    assert lookup(item, "tone", cache=cache).found is False


def test_concurrent_population_probes_once(cache, monkeypatch):
    calls = []
    real_probe = cache_module.probe
    barrier = threading.Barrier(8)

    def slow_probe(cls, name):
        calls.append(name)
        return real_probe(cls, name)

    monkeypatch.setattr(cache_module, "probe", slow_probe)

    def worker():
        barrier.wait()
        cache.fallback_for(Widget, "_label")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert calls == ["_label"]


def test_resolve_uses_default_cache():
    widget = Widget()

    assert resolve(widget, "label") == "widget"
    assert cache_module.DEFAULT_CACHE.last_strategy(Widget, "_label") is Strategy.FALLBACK

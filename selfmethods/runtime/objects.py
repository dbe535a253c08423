"""The ``SelfMethods`` base class: dynamic call surface over the resolver."""

from __future__ import annotations

import copy
from typing import Any

from .builder import Config, config_entries, populate
from .cache import DEFAULT_CACHE, ResolutionCache
from .capabilities import fallback_names, is_reserved, register_root
from .errors import MissingFallbackError
from .mutator import clear_slot, set_slot
from .resolver import can, invoke_fallback, lookup
from .store import STORE_ATTRIBUTE, InstanceStore, attach_store, store_of


@register_root
class SelfMethods:
    """Base class whose instances may override any class-defined behavior.

    Subclasses define fallbacks with a leading underscore and callers use the
    name without it::

        class Greeter(SelfMethods):
            def _friendly(self):
                return self.name()

        greeter = Greeter(name="foo")
        greeter.friendly()                  # "foo", from the fallback
        greeter.friendly_SET("Bar")         # own slot shadows the fallback
        greeter.friendly_SET(lambda self: self._friendly().upper())
        greeter.friendly_CLEAR()            # back to the fallback

    Stored callables receive the instance first, exactly like fallbacks.
    Configuration keys with a leading underscore are deferred calls, e.g.
    ``Greeter(name="foo", _setup=["a", "b"])`` calls the ``_setup`` fallback
    with ``("a", "b")`` before the constructor returns, even if a ``setup``
    slot exists.

    ``can`` and ``fallback`` are regular methods here, so they cannot be used
    as slot names. Slot names may not themselves end in ``_SET`` or
    ``_CLEAR``.
    """

    __resolution_cache__: ResolutionCache | None = DEFAULT_CACHE

    def __init__(self, config: Config | None = None, /, **kwargs):
        entries = config_entries(config)
        entries.extend(kwargs.items())
        populate(self, entries, cache=self.__resolution_cache__)

    def __getattr__(self, name: str):
        if is_reserved(name):
            if name.startswith("__"):
                raise AttributeError(name)
            raise MissingFallbackError(type(self).__qualname__, name)
        cache = self.__resolution_cache__

        def dispatch(*args, **kwargs):
            return lookup(self, name, args, kwargs, cache=cache).value

        dispatch.__name__ = name
        dispatch.__qualname__ = f"{type(self).__qualname__}.{name}"
        return dispatch

    def __setattr__(self, name: str, value: Any) -> None:
        if is_reserved(name):
            object.__setattr__(self, name, value)
        else:
            set_slot(self, name, value)

    def __delattr__(self, name: str) -> None:
        if is_reserved(name):
            object.__delattr__(self, name)
        elif name in store_of(self):
            clear_slot(self, name)
        else:
            raise AttributeError(name)

    def __dir__(self):
        names = set(super().__dir__())
        names.update(store_of(self).names())
        names.update(fallback_names(type(self)))
        return sorted(names)

    def __copy__(self):
        clone = type(self).__new__(type(self))
        vars(clone).update(vars(self))
        attach_store(clone, InstanceStore(store_of(self).snapshot().items()))
        return clone

    def __deepcopy__(self, memo):
        clone = type(self).__new__(type(self))
        memo[id(self)] = clone
        for key, value in vars(self).items():
            if key != STORE_ATTRIBUTE:
                object.__setattr__(clone, key, copy.deepcopy(value, memo))
        slots = copy.deepcopy(store_of(self).snapshot(), memo)
        attach_store(clone, InstanceStore(slots.items()))
        return clone

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"<{type(self).__qualname__} slots={store_of(self).names()}>"

    def can(self, name: str):
        """Return a callable bound to this instance if ``name`` resolves, else ``None``."""
        return can(self, name, cache=self.__resolution_cache__)

    def fallback(self, name: str, /, *args, after: type | None = None, **kwargs):
        """Invoke the class-defined ``name`` directly, ignoring own slots."""
        return invoke_fallback(
            self, name, *args, after=after, cache=self.__resolution_cache__, **kwargs
        )


__all__ = [
    "SelfMethods",
]

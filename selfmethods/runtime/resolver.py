"""The dispatch core: own slot, then class fallback, then miss."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..constants import CLEAR_SUFFIX, SET_SUFFIX
from .cache import DEFAULT_CACHE, ResolutionCache, Strategy
from .capabilities import (
    Fallback,
    is_mutation,
    is_reserved,
    probe,
    probe_after,
    reserved_name,
)
from .errors import MissingFallbackError
from .mutator import clear_slot, set_slot
from .store import is_callable_slot, literal_value, store_of


@dataclass(frozen=True)
class Resolution:
    """Outcome of a public resolution."""

    strategy: Strategy
    value: Any = None

    @property
    def found(self) -> bool:
        return self.strategy is not Strategy.MISS


MISS = Resolution(Strategy.MISS)


def _require_public(name: str) -> None:
    if is_reserved(name):
        raise ValueError(
            f"'{name}' carries the reserved prefix; use invoke_fallback for internal calls"
        )


def _find_fallback(
    cls: type, name: str, cache: ResolutionCache | None
) -> Fallback | None:
    if cache is None:
        return probe(cls, reserved_name(name))
    return cache.fallback_for(cls, reserved_name(name))


def _mutate(instance: Any, name: str, args: tuple) -> Resolution:
    if name.endswith(SET_SUFFIX):
        target = name[: -len(SET_SUFFIX)]
        if len(args) != 1:
            raise TypeError(f"{name}() takes exactly one value ({len(args)} given)")
        return Resolution(Strategy.MUTATION, set_slot(instance, target, args[0]))
    target = name[: -len(CLEAR_SUFFIX)]
    if args:
        raise TypeError(f"{name}() takes no arguments ({len(args)} given)")
    return Resolution(Strategy.MUTATION, clear_slot(instance, target))


def lookup(
    instance: Any,
    name: str,
    args: tuple = (),
    kwargs: dict[str, Any] | None = None,
    *,
    cache: ResolutionCache | None = DEFAULT_CACHE,
) -> Resolution:
    """Resolve ``name`` on ``instance`` and report which strategy answered.

    A miss is returned as :data:`MISS`, never raised.
    """

    _require_public(name)
    kwargs = kwargs or {}
    if is_mutation(name):
        return _mutate(instance, name, tuple(args))

    cls = type(instance)
    store = store_of(instance)
    if name in store:
        if cache is not None:
            cache.record(cls, reserved_name(name), Strategy.OWN_SLOT)
        value = store.get(name)
        if is_callable_slot(value):
            return Resolution(Strategy.OWN_SLOT, value(instance, *args, **kwargs))
        return Resolution(Strategy.OWN_SLOT, literal_value(value))

    fallback = _find_fallback(cls, name, cache)
    if fallback is None:
        if cache is not None:
            cache.record(cls, reserved_name(name), Strategy.MISS)
        return MISS
    if cache is not None:
        cache.record(cls, reserved_name(name), Strategy.FALLBACK)
    return Resolution(Strategy.FALLBACK, fallback(instance, *args, **kwargs))


def resolve(instance: Any, name: str, /, *args, **kwargs) -> Any:
    """Get-or-invoke ``name`` on ``instance``; ``None`` when nothing answers."""

    return lookup(instance, name, args, kwargs).value


def invoke_fallback(
    instance: Any,
    name: str,
    /,
    *args,
    after: type | None = None,
    cache: ResolutionCache | None = DEFAULT_CACHE,
    **kwargs,
) -> Any:
    """Call the class-defined implementation of ``name``, skipping own slots.

    ``after`` starts the search at the ancestor following that class, the way
    a superclass dispatch does. Raises :class:`MissingFallbackError` when no
    ancestor defines the name.
    """

    _require_public(name)
    cls = type(instance)
    target = reserved_name(name)
    if after is not None:
        fallback = probe_after(cls, target, after)
    elif cache is not None:
        fallback = cache.fallback_for(cls, target)
    else:
        fallback = probe(cls, target)
    if fallback is None:
        raise MissingFallbackError(cls.__qualname__, target)
    return fallback(instance, *args, **kwargs)


def can(
    instance: Any, name: str, *, cache: ResolutionCache | None = DEFAULT_CACHE
):
    """Return a handle bound to ``instance`` if ``name`` would resolve, else ``None``."""

    _require_public(name)
    if name in store_of(instance) or _find_fallback(type(instance), name, cache):
        def handle(*args, **kwargs):
            return lookup(instance, name, args, kwargs, cache=cache).value

        handle.__name__ = name
        handle.__qualname__ = f"{type(instance).__qualname__}.{name}"
        return handle
    return None


__all__ = [
    "MISS",
    "Resolution",
    "can",
    "invoke_fallback",
    "lookup",
    "resolve",
]

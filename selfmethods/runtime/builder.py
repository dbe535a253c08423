"""Instance construction: base slots first, then deferred calls."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Union

from .cache import DEFAULT_CACHE, ResolutionCache
from .capabilities import is_mutation, is_reserved, public_name
from .resolver import invoke_fallback, lookup
from .store import InstanceStore, attach_store

logger = logging.getLogger(__name__)

Config = Union[Mapping[str, Any], Iterable[tuple[str, Any]]]


@dataclass(frozen=True)
class DeferredCall:
    """A method call queued at construction time, run once the instance exists."""

    name: str
    args: tuple = ()

    @classmethod
    def from_entry(cls, key: str, value: Any) -> "DeferredCall":
        if isinstance(value, (list, tuple)):
            args = tuple(value)
        else:
            args = (value,)
        return cls(public_name(key), args)


def config_entries(config: Config | None) -> list[tuple[str, Any]]:
    """Normalize a mapping or an iterable of pairs into an ordered list of pairs."""

    if config is None:
        return []
    if isinstance(config, Mapping):
        return list(config.items())
    return [tuple(pair) for pair in config]


def partition_config(
    config: Config | None,
) -> tuple[list[tuple[str, Any]], list[DeferredCall]]:
    """Split configuration into ordinary slots and deferred calls, keeping order."""

    base: list[tuple[str, Any]] = []
    deferred: list[DeferredCall] = []
    for key, value in config_entries(config):
        if not isinstance(key, str):
            raise TypeError(f"Configuration keys must be strings, got {key!r}")
        if is_reserved(key):
            deferred.append(DeferredCall.from_entry(key, value))
        else:
            base.append((key, value))
    return base, deferred


def apply_deferred(
    instance: Any,
    calls: Iterable[DeferredCall],
    *,
    cache: ResolutionCache | None = DEFAULT_CACHE,
) -> list[Any]:
    """Run each deferred call as an internal call, in order.

    The class fallback answers even when an own slot of the same name exists.
    A call with no fallback raises :class:`MissingFallbackError`. Names ending
    in ``_SET``/``_CLEAR`` go through the set/clear protocol instead.
    """

    results = []
    for call in calls:
        logger.debug(
            "deferred call %s.%s%r", type(instance).__qualname__, call.name, call.args
        )
        if is_mutation(call.name):
            results.append(lookup(instance, call.name, call.args, cache=cache).value)
        else:
            results.append(
                invoke_fallback(instance, call.name, *call.args, cache=cache)
            )
    return results


def populate(
    instance: Any,
    config: Config | None = None,
    *,
    cache: ResolutionCache | None = DEFAULT_CACHE,
) -> Any:
    """Attach a fresh store to ``instance`` and apply ``config`` to it."""

    base, deferred = partition_config(config)
    attach_store(instance, InstanceStore(base))
    apply_deferred(instance, deferred, cache=cache)
    return instance


def build(cls: type, config: Config | None = None, /, **kwargs) -> Any:
    """Construct ``cls`` from ``config`` plus keyword entries; keywords win on clashes."""

    entries = config_entries(config)
    entries.extend(kwargs.items())
    return cls(entries)


__all__ = [
    "Config",
    "DeferredCall",
    "apply_deferred",
    "build",
    "config_entries",
    "partition_config",
    "populate",
]

"""Capability lookup: fallback discovery along a class's ancestor chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..constants import MUTATION_SUFFIXES, RESERVED_PREFIX

# Classes whose namespaces never contribute fallbacks.
_ROOT_CLASSES: set[type] = {object}


def register_root(cls: type) -> type:
    """Exclude ``cls`` from every ancestor chain; usable as a class decorator."""

    _ROOT_CLASSES.add(cls)
    return cls


@dataclass(frozen=True)
class Fallback:
    """A class-defined implementation found by :func:`probe`."""

    owner: type
    name: str
    function: Any

    def bind(self, instance: Any):
        """Return ``function`` bound to ``instance`` as a plain callable."""

        binder = getattr(self.function, "__get__", None)
        if binder is None:
            function = self.function
            return lambda *args, **kwargs: function(instance, *args, **kwargs)
        return binder(instance, type(instance))

    def __call__(self, instance: Any, *args, **kwargs):
        return self.bind(instance)(*args, **kwargs)


def _is_fallback(value: Any) -> bool:
    return callable(value) or isinstance(value, (staticmethod, classmethod))


def reserved_name(name: str) -> str:
    return f"{RESERVED_PREFIX}{name}"


def public_name(name: str) -> str:
    """Strip one leading reserved prefix from ``name``."""

    if name.startswith(RESERVED_PREFIX):
        return name[len(RESERVED_PREFIX):]
    return name


def is_reserved(name: str) -> bool:
    return name.startswith(RESERVED_PREFIX)


def is_mutation(name: str) -> bool:
    return name.endswith(MUTATION_SUFFIXES)


def ancestors(cls: type) -> list[type]:
    """Return the linear fallback chain for ``cls``, nearest class first."""

    return [klass for klass in cls.__mro__ if klass not in _ROOT_CLASSES]


def probe(cls: type, name: str) -> Fallback | None:
    """Find the nearest class in ``cls``'s chain whose namespace defines ``name``.

    ``name`` is the reserved form (``_friendly``). Only a class's own
    namespace is inspected at each level so the owning class is exact.
    """

    for klass in ancestors(cls):
        namespace = vars(klass)
        if name in namespace and _is_fallback(namespace[name]):
            return Fallback(klass, name, namespace[name])
    return None


def probe_after(cls: type, name: str, after: type) -> Fallback | None:
    """Like :func:`probe`, but start at the ancestor following ``after``."""

    chain = ancestors(cls)
    if after not in chain:
        raise ValueError(f"{after.__name__} is not in the fallback chain of {cls.__name__}")
    for klass in chain[chain.index(after) + 1:]:
        namespace = vars(klass)
        if name in namespace and _is_fallback(namespace[name]):
            return Fallback(klass, name, namespace[name])
    return None


def fallback_names(cls: type) -> dict[str, type]:
    """Map each public name answered by a fallback to the class defining it."""

    found: dict[str, type] = {}
    for klass in ancestors(cls):
        for attr in vars(klass):
            if not is_reserved(attr) or attr.startswith("__"):
                continue
            if not _is_fallback(vars(klass)[attr]):
                continue
            found.setdefault(public_name(attr), klass)
    return found


__all__ = [
    "Fallback",
    "ancestors",
    "fallback_names",
    "is_mutation",
    "is_reserved",
    "probe",
    "probe_after",
    "public_name",
    "register_root",
    "reserved_name",
]

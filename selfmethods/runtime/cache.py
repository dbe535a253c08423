"""Per-class memoization of fallback probes."""

from __future__ import annotations

import enum
import logging
import threading
import weakref
from dataclasses import dataclass

from .capabilities import Fallback, probe

logger = logging.getLogger(__name__)


class Strategy(enum.Enum):
    """How a name was (or would be) answered."""

    OWN_SLOT = "own_slot"
    FALLBACK = "fallback"
    MISS = "miss"
    MUTATION = "mutation"


@dataclass
class CacheEntry:
    """A memoized probe.

    Only a weak reference to the owning class is kept; the function is read
    back from the owner's namespace on every hit.
    """

    owner: weakref.ref | None
    name: str
    last_strategy: Strategy

    @classmethod
    def from_probe(cls, name: str, found: Fallback | None) -> "CacheEntry":
        if found is None:
            return cls(None, name, Strategy.MISS)
        return cls(weakref.ref(found.owner), name, Strategy.FALLBACK)

    @property
    def fallback(self) -> Fallback | None:
        owner = None if self.owner is None else self.owner()
        if owner is None or self.name not in vars(owner):
            return None
        return Fallback(owner, self.name, vars(owner)[self.name])


class ResolutionCache:
    """Memoizes, per ``(class, name)``, the fallback probe and the last strategy used.

    The cache only answers "what does the class chain offer for this name".
    Own slots differ between instances of one class, so callers must check
    the instance store before consulting it.
    """

    def __init__(self):
        self._entries: weakref.WeakKeyDictionary[type, dict[str, CacheEntry]] = (
            weakref.WeakKeyDictionary()
        )
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def fallback_for(self, cls: type, name: str) -> Fallback | None:
        """Return the probe result for reserved ``name`` on ``cls``, probing once."""

        per_class = self._entries.get(cls)
        if per_class is not None:
            entry = per_class.get(name)
            if entry is not None:
                self.hits += 1
                return entry.fallback

        with self._lock:
            per_class = self._entries.get(cls)
            if per_class is None:
                per_class = self._entries[cls] = {}
            entry = per_class.get(name)
            if entry is None:
                entry = per_class[name] = CacheEntry.from_probe(name, probe(cls, name))
                self.misses += 1
                logger.debug(
                    "cached %s for %s.%s",
                    entry.last_strategy.value,
                    cls.__qualname__,
                    name,
                )
            else:
                self.hits += 1
        return entry.fallback

    def record(self, cls: type, name: str, strategy: Strategy) -> None:
        per_class = self._entries.get(cls)
        if per_class is None:
            return
        entry = per_class.get(name)
        if entry is not None:
            entry.last_strategy = strategy

    def last_strategy(self, cls: type, name: str) -> Strategy | None:
        entry = self._entries.get(cls, {}).get(name)
        return None if entry is None else entry.last_strategy

    def invalidate(self, cls: type | None = None) -> None:
        """Forget cached probes for ``cls`` and its subclasses, or for every class."""

        with self._lock:
            if cls is None:
                self._entries.clear()
                logger.debug("resolution cache cleared")
                return
            for klass in list(self._entries.keys()):
                if issubclass(klass, cls):
                    del self._entries[klass]
            logger.debug("resolution cache invalidated for %s", cls.__qualname__)

    def __len__(self) -> int:
        return sum(len(names) for names in self._entries.values())

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"<ResolutionCache entries={len(self)} hits={self.hits} misses={self.misses}>"


DEFAULT_CACHE = ResolutionCache()


__all__ = [
    "CacheEntry",
    "DEFAULT_CACHE",
    "ResolutionCache",
    "Strategy",
]

"""Per-instance slot storage for the selfmethods runtime."""

from __future__ import annotations

from typing import Any, Iterable, Iterator


class Literal:
    """Wrapper that forces a callable to be stored as a plain value."""

    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value

    def __eq__(self, other):
        if isinstance(other, Literal):
            return self.value == other.value
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"Literal({self.value!r})"


def is_callable_slot(value: Any) -> bool:
    """Return ``True`` when a stored value should be invoked rather than returned.

    Classes are callable but are treated as literal values, as is anything
    wrapped in :class:`Literal`.
    """

    if isinstance(value, (Literal, type)):
        return False
    return callable(value)


def literal_value(value: Any) -> Any:
    if isinstance(value, Literal):
        return value.value
    return value


class InstanceStore:
    """Name to slot-value mapping owned by exactly one instance."""

    def __init__(self, entries: Iterable[tuple[str, Any]] | None = None):
        self._slots: dict[str, Any] = dict(entries or ())

    def __contains__(self, name: object) -> bool:
        return name in self._slots

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"<InstanceStore {sorted(self._slots)}>"

    def get(self, name: str, default: Any = None) -> Any:
        return self._slots.get(name, default)

    def put(self, name: str, value: Any) -> Any:
        self._slots[name] = value
        return value

    def pop(self, name: str) -> Any:
        return self._slots.pop(name, None)

    def names(self) -> list[str]:
        return list(self._slots)

    def snapshot(self) -> dict[str, Any]:
        """Return a shallow copy of the stored slots."""
        return dict(self._slots)


STORE_ATTRIBUTE = "_slot_store"


def attach_store(instance: Any, store: InstanceStore) -> InstanceStore:
    object.__setattr__(instance, STORE_ATTRIBUTE, store)
    return store


def store_of(instance: Any) -> InstanceStore:
    """Fetch the slot store of ``instance`` without triggering dynamic dispatch."""

    try:
        store = object.__getattribute__(instance, STORE_ATTRIBUTE)
    except AttributeError:
        raise TypeError(
            f"{type(instance).__name__} instance has no slot store attached"
        ) from None
    return store


__all__ = [
    "InstanceStore",
    "Literal",
    "STORE_ATTRIBUTE",
    "attach_store",
    "is_callable_slot",
    "literal_value",
    "store_of",
]

"""Set/clear protocol acting directly on an instance's own store."""

from __future__ import annotations

import logging
from typing import Any

from .capabilities import is_reserved
from .store import literal_value, store_of

logger = logging.getLogger(__name__)


def _check_slot_name(name: str) -> None:
    if not name:
        raise ValueError("Slot names must be non-empty")
    if is_reserved(name):
        raise ValueError(f"Slot name '{name}' must not carry the reserved prefix")


def set_slot(instance: Any, name: str, value: Any) -> Any:
    """Store ``value`` (literal or callable) as ``instance``'s own slot ``name``.

    Returns the value as resolution would report it, unwrapping a
    :class:`~selfmethods.runtime.store.Literal`.
    """

    _check_slot_name(name)
    store_of(instance).put(name, value)
    logger.debug("set %s.%s", type(instance).__qualname__, name)
    return literal_value(value)


def clear_slot(instance: Any, name: str) -> Any:
    """Drop the own slot ``name``; returns the removed (unwrapped) value or ``None``."""

    _check_slot_name(name)
    store = store_of(instance)
    if name not in store:
        return None
    logger.debug("cleared %s.%s", type(instance).__qualname__, name)
    return literal_value(store.pop(name))


__all__ = [
    "clear_slot",
    "set_slot",
]

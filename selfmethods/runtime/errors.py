"""Exception types raised by the selfmethods runtime."""

from __future__ import annotations


class SelfMethodsError(Exception):
    """Base class for runtime dispatch failures."""


class MissingFallbackError(SelfMethodsError, AttributeError):
    """An explicit internal call found no class-defined implementation."""

    def __init__(self, owner: str, name: str):
        super().__init__(f"{owner} has no fallback for '{name}' in its ancestor chain")
        # AttributeError.__init__ resets ``name``; assign afterwards.
        self.owner = owner
        self.name = name


__all__ = [
    "MissingFallbackError",
    "SelfMethodsError",
]

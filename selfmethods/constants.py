"""Shared naming conventions and defaults for the selfmethods runtime."""

RESERVED_PREFIX = "_"
SET_SUFFIX = "_SET"
CLEAR_SUFFIX = "_CLEAR"

MUTATION_SUFFIXES = (SET_SUFFIX, CLEAR_SUFFIX)

LOG_LEVEL_DEFAULT = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

__all__ = [
    "CLEAR_SUFFIX",
    "LOG_FORMAT",
    "LOG_LEVEL_DEFAULT",
    "MUTATION_SUFFIXES",
    "RESERVED_PREFIX",
    "SET_SUFFIX",
]

"""Command-line interface for inspecting selfmethods classes."""
from __future__ import annotations

import argparse
import importlib
import logging
import sys

from ..constants import LOG_FORMAT, LOG_LEVEL_DEFAULT
from .capabilities import ancestors, fallback_names
from .objects import SelfMethods

logger = logging.getLogger(__name__)


class DemoGreeter(SelfMethods):
    """Class used by ``--demo``."""

    def _friendly(self):
        return self.name()


def load_class(target: str) -> type:
    """Import ``module:Qualified.Name`` and return the class it names."""

    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"Expected 'module:Class', got {target!r}")
    obj = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    if not isinstance(obj, type):
        raise TypeError(f"{target} is not a class")
    return obj


def describe(cls: type) -> list[str]:
    lines = [f"{cls.__module__}:{cls.__qualname__}", "  ancestor chain:"]
    for klass in ancestors(cls):
        lines.append(f"    {klass.__module__}.{klass.__qualname__}")
    names = fallback_names(cls)
    lines.append("  fallbacks:")
    if not names:
        lines.append("    (none)")
    for name, owner in sorted(names.items()):
        lines.append(f"    {name:<20} defined by {owner.__qualname__}")
    return lines


def run_demo() -> list[str]:
    greeter = DemoGreeter(name="foo")
    lines = [f"friendly() from fallback         -> {greeter.friendly()!r}"]
    greeter.friendly_SET("Bar")
    lines.append(f"friendly_SET('Bar')               -> {greeter.friendly('ignored')!r}")
    greeter.friendly_SET(lambda self: self._friendly().upper())
    lines.append(f"friendly_SET(<callable>)          -> {greeter.friendly()!r}")
    greeter.friendly_CLEAR()
    lines.append(f"friendly_CLEAR()                  -> {greeter.friendly()!r}")
    return lines


def build_parser() -> argparse.ArgumentParser:
    argp = argparse.ArgumentParser(
        description="Inspect classes built on selfmethods"
    )
    argp.add_argument(
        "--describe",
        metavar="MODULE:CLASS",
        help="Print the ancestor chain and fallback names of a class",
    )
    argp.add_argument(
        "--demo", action="store_true", help="Walk through the set/clear protocol"
    )
    argp.add_argument(
        "--log-level",
        default=LOG_LEVEL_DEFAULT,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: %(default)s)",
    )
    return argp


def parse_args(args):
    return build_parser().parse_args(args)


def main(args) -> int:
    params = parse_args(args)
    logging.basicConfig(level=getattr(logging, params.log_level), format=LOG_FORMAT)

    if params.describe:
        try:
            cls = load_class(params.describe)
        except (ImportError, AttributeError, TypeError, ValueError) as exc:
            logger.debug("could not load %s", params.describe, exc_info=True)
            print(f"✗ {exc}")
            return 1
        print("\n".join(describe(cls)))
        return 0

    if params.demo:
        print("\n".join(run_demo()))
        return 0

    build_parser().print_help()
    return 0


__all__ = [
    "main",
    "parse_args",
]


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))

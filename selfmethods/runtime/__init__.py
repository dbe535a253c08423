"""
selfmethods runtime: per-instance overrides on top of class-defined behavior.

  own slot  →  class fallback chain (nearest first)  →  miss

| Layer                   | Purpose                                          |
<------------------------ + ------------------------------------------------ >
| **store**               | Per-instance name → slot mapping                 |
| **capabilities**        | Fallback probe along the ancestor chain          |
| **cache**               | Per-class memoized probes, lock-guarded          |
| **resolver**            | Get-or-invoke, explicit fallback calls, `can`    |
| **mutator**             | `_SET` / `_CLEAR` against the own store          |
| **builder**             | Base slots, then deferred construction calls     |
| **objects**             | `SelfMethods` base class (dynamic call surface)  |
"""

from . import builder as _builder
from . import cache as _cache
from . import capabilities as _capabilities
from . import errors as _errors
from . import mutator as _mutator
from . import objects as _objects
from . import resolver as _resolver
from . import store as _store
from .cli import main, parse_args

from .builder import *
from .cache import *
from .capabilities import *
from .errors import *
from .mutator import *
from .objects import *
from .resolver import *
from .store import *

__all__ = []
for module in (_store, _capabilities, _cache, _errors, _mutator, _resolver, _builder, _objects):
    __all__.extend(getattr(module, '__all__', []))
__all__ += ['main', 'parse_args']
__all__ = list(dict.fromkeys(__all__))

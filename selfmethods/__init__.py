"""Class-based objects whose instances can override methods with values or callables."""

from . import constants as _constants
from . import runtime as _runtime
from .constants import *  # noqa: F401,F403
from .runtime import *  # noqa: F401,F403

__version__ = "1.1.0"

__all__ = ["__version__"]
__all__ += getattr(_constants, "__all__", [])
__all__ += getattr(_runtime, "__all__", [])

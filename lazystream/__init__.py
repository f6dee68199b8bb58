# -*- coding: utf-8 -*
"""Lazy, persistent, memoized streams for Python.

See ``dir(lazystream)`` and submodule docstrings for more.
"""

__version__ = '0.1.0'

from .lazyutil import *  # noqa: F401, F403
from .singleton import *  # noqa: F401, F403
from .stream import *  # noqa: F401, F403
from .tco import *  # noqa: F401, F403

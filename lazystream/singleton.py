# -*- coding: utf-8; -*-
"""A pickle-aware singleton abstraction.

To use it, inherit your class from `Singleton`. Can be used as a mixin.

This is how ``lazystream`` gets its one-of-a-kind values: the stream
terminator ``empty``, and the ``absent`` marker accepted by ``append``.

**Behavior**

- Calling the constructor of a singleton type while its instance exists is a
  `TypeError`. Obtain the instance by name (e.g. ``empty``), not by calling
  the class again.

- Unpickling an instance of a singleton type gives back the existing instance,
  so identity checks such as ``s is empty`` keep working across pickle dumps.

- The instances live for the lifetime of the process.
"""

# Instance creation is customized in two layers:
#
#  - The metaclass intercepts constructor calls, and refuses to create a
#    second instance.
#
#  - The base class `__new__` manages the single instance. Pickle does not
#    call the class at unpickling time, only `__new__`, so that is where the
#    redirect to the existing instance must live.

__all__ = ["Singleton"]

import threading

_instances = {}
_instances_lock = threading.RLock()

class ThereCanBeOnlyOne(type):
    """Metaclass for singletons. Construct at most one instance per class.

    To combine with another metaclass (e.g. ``abc.ABCMeta``), define a metaclass
    inheriting from both; no body needed.
    """
    def __call__(cls, *args, **kwargs):
        with _instances_lock:
            if cls in _instances:
                raise TypeError("Singleton instance of {} already exists".format(cls))
            instance = cls.__new__(cls, *args, **kwargs)
            cls.__init__(instance, *args, **kwargs)
            return instance

class Singleton(metaclass=ThereCanBeOnlyOne):
    """Base class for singletons. Can be used as a mixin."""
    # Extra args are for `__init__`; `object.__new__` takes none.
    def __new__(cls, *args, **kwargs):
        try:
            return _instances[cls]
        except KeyError:
            with _instances_lock:
                if cls not in _instances:
                    _instances[cls] = super().__new__(cls)
                return _instances[cls]

    def __reduce__(self):
        # Unpickle by calling `__new__` only, which finds the existing instance.
        return (_reconstruct, (type(self),))

def _reconstruct(cls):
    return cls.__new__(cls)

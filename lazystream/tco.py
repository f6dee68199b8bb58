# -*- coding: utf-8 -*-
"""Tail call optimization for the stream algorithms.

Every traversal in ``lazystream.stream`` is written as accumulator-passing
tail recursion. Plain Python recursion would overflow the call stack after
about a thousand elements, so those functions run on a trampoline instead.

**API reference**:

 - Functions that use TCO must be ``@trampolined``. They are called just like
   any normal function.

 - When inside a ``@trampolined`` function:

   - ``f(a, ..., kw=v, ...)`` is just a normal call, no TCO.

   - ``return jump(f, a, ..., kw=v, ...)`` is a tail call to *target* ``f``.

   - When done (no more tail calls to make), just return the final result normally.

 - **"jump" is a noun, not a verb**. ``jump(f, ...)`` by itself just evaluates
   to a jump instance, doing nothing. Returning it makes the trampoline
   perform the tail call.

   If you're getting a jump instance instead of the result of your computation,
   check that the function is ``@trampolined``. If you're getting ``None``,
   check for ``jump`` where it should be ``return jump``. Either way, an
   "unclaimed jump" warning is printed to stderr when the stray jump instance
   is garbage-collected.

 - Stack traces lose the intermediate frames; only the entry point and the
   frame where an exception actually occurred remain.

**Example**::

    @trampolined
    def count(s, acc=0):
        if s is empty:
            return acc
        return jump(count, s.tail, acc + 1)

    count(from_iterable(range(100000)))  # no crash
"""

__all__ = ["jump", "trampolined"]

from functools import wraps
from sys import stderr

def jump(target, *args, **kwargs):
    """A jump (noun, not verb).

    Used in the syntax `return jump(f, ...)` to request the trampoline to
    perform a tail call.

    Parameters:
        target:
            The function to be called.
        *args:
            Positional arguments to be passed to `target`.
        **kwargs:
            Named arguments to be passed to  `target`.
    """
    return _jump(target, args, kwargs)

class _jump:
    """The actual class representing a jump."""
    def __init__(self, target, args, kwargs):
        # don't let target bring along its trampoline if it has one
        self.target = target._entrypoint if hasattr(target, "_entrypoint") else target
        self.args = args
        self.kwargs = kwargs
        self._claimed = False  # set when the instance is caught by a trampoline

    def __repr__(self):
        return "<_jump at 0x{:x}: target={}, args={}, kwargs={}>".format(id(self),
                                                                         self.target,
                                                                         self.args,
                                                                         self.kwargs)

    def __del__(self):
        """Warn about bugs in client code.

        We can't raise exceptions in ``__del__``, so we print a warning.
        Typical causes are a missing ``return`` before ``jump``, or returning
        a jump from a function that is not running in a trampoline.
        """
        if not self._claimed:
            print("WARNING: unclaimed {}".format(repr(self)), file=stderr)

def trampolined(function):
    """Decorator to make a function trampolined.

    Trampolined functions can use ``return jump(f, a, ..., kw=v, ...)``
    to perform optimized tail calls. (*Optimized* in the sense of not
    increasing the call stack depth, not for speed.)

    The ``jump`` constructor strips the target's trampoline, so a tail call
    into another ``@trampolined`` function stays in the same trampoline.
    """
    @wraps(function)
    def trampoline(*args, **kwargs):
        f = function
        while True:
            v = f(*args, **kwargs)
            if isinstance(v, _jump):
                v._claimed = True
                f = v.target
                if not callable(f):
                    raise TypeError("Cannot jump into a non-callable value {}".format(repr(f)))
                args = v.args
                kwargs = v.kwargs
            else:  # final result, exit trampoline
                return v
    # stash for jump constructor
    trampoline._entrypoint = function
    return trampoline

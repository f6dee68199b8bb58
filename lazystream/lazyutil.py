# -*- coding: utf-8 -*-
"""Delayed evaluation with memoization.

This is the memoized cell that holds the tail of each stream node.
"""

__all__ = ["Lazy"]

_uninitialized = object()  # no label or pickle support needed; never escapes this module

class Lazy:
    """Delayed evaluation, with memoization. (A.k.a. *promise* in Racket.)

    Usage::

        p = Lazy(lambda: expensive_computation())
        p.forced   # --> False
        p.force()  # runs the thunk
        p.force()  # returns the cached value; the thunk is not run again

    The cell is not thread-safe. If two threads force the same unforced cell
    at the same time, the thunk may run twice.
    """

    def __init__(self, thunk):
        """`thunk`: 0-argument callable to be stored for delayed evaluation."""
        if not callable(thunk):
            raise TypeError(f"`thunk` must be a callable, got {type(thunk)} with value {repr(thunk)}")
        self.thunk = thunk
        self.value = _uninitialized
        self.thunk_returned_normally = _uninitialized

    @property
    def forced(self):
        """Whether the thunk has already been evaluated (successfully or not)."""
        return self.value is not _uninitialized

    def force(self):
        """Compute and return the value of the promise.

        If `self.thunk` is not already evaluated, evaluate it now, and cache
        its return value. If it raises, cache the exception instance instead.
        After the evaluation, the thunk is dropped, so that anything it closes
        over can be garbage-collected.

        Then in any case, return the cached value, or raise the cached exception.

        Forcing a promise from inside its own thunk raises `RuntimeError`.
        """
        if self.value is _uninitialized:
            thunk = self.thunk
            if thunk is None:
                raise RuntimeError("Lazy value forced recursively from inside its own thunk")
            self.thunk = None
            try:
                value = thunk()
            except Exception as err:
                self.value = err
                self.thunk_returned_normally = False
            except BaseException:  # e.g. KeyboardInterrupt; not a property of the computation
                self.thunk = thunk
                raise
            else:
                self.value = value
                self.thunk_returned_normally = True
        if self.thunk_returned_normally:
            return self.value
        raise self.value

    def __repr__(self):
        if not self.forced:
            return "<Lazy at 0x{:x}: unforced>".format(id(self))
        if self.thunk_returned_normally:
            return "<Lazy at 0x{:x}: value={}>".format(id(self), repr(self.value))
        return "<Lazy at 0x{:x}: raised {}>".format(id(self), repr(self.value))

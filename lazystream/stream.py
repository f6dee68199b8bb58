# -*- coding: utf-8 -*-
"""Lazy streams: persistent singly linked lists with memoized tails.

A stream is a chain of ``NonEmpty`` nodes terminated by the singleton
``empty``. Each ``NonEmpty`` holds a head value, and a ``Lazy`` cell that
computes the rest of the stream when first asked for, and remembers it.

Nodes are immutable, so streams can share suffixes freely. A stream can be
infinite, as long as nothing tries to walk all the way to its end::

    def naturals(n=0):
        return NonEmpty(n, lambda: naturals(n + 1))
    naturals().drop(10).head  # --> 10

The transformations (``filter``, ``map``, ``flat_map``, ``append``, ...) walk
the input once, building the output on an accumulator, then reverse the
accumulator to restore the original order. All of them run on a trampoline,
so they don't blow the call stack on long streams. Being accumulator-based,
they walk the whole input; use them on finite streams only.

Where an operation takes ``acc``, it is a stream of results already produced,
most recent first. The result is ``acc`` reversed, followed by the new results.
Usually you'll want the default, ``empty``.
"""

__all__ = ["Stream", "NonEmpty", "Empty", "empty", "Absent", "absent",
           "EmptyAccessError", "UnsupportedOperationError",
           "NodeIterator", "StreamIterator", "TailIterator",
           "scons", "of", "from_iterable"]

from abc import ABCMeta, abstractmethod
from itertools import zip_longest

from .lazyutil import Lazy
from .singleton import Singleton, ThereCanBeOnlyOne
from .tco import trampolined, jump

class EmptyAccessError(LookupError):
    """Raised when the head of the empty stream is requested."""

class UnsupportedOperationError(TypeError):
    """Raised when the tail of the empty stream is requested."""

# --------------------------------------------------------------------------------
# Iterators

class NodeIterator(metaclass=ABCMeta):
    """Abstract base class for iterators walking a stream.

    ``startnode`` is the stream node to start in (will be checked it is a
    stream), and ``walker`` is a generator function (i.e. not started yet)
    that yields the data in the desired order.
    """
    @abstractmethod
    def __init__(self, startnode, walker):
        if not isinstance(startnode, Stream):
            raise TypeError("Expected a stream, got {} with value {}".format(type(startnode), startnode))
        self.walker = walker(startnode)
    def __iter__(self):
        return self
    def __next__(self):
        return next(self.walker)

class StreamIterator(NodeIterator):
    """Iterate over the elements of a stream, forcing tails one at a time.

    Forward-only. To walk a stream again, iterate over it again; the tails
    forced the first time are not recomputed.
    """
    def __init__(self, head):
        def walker(node):
            while node is not empty:
                yield node.head
                node = node.tail
        super().__init__(head, walker)

class TailIterator(NodeIterator):
    """Like StreamIterator, but yield successive nodes (the stream, its tail, ...).

    Example::

        TailIterator(of(1, 2, 3)) --> of(1, 2, 3), of(2, 3), of(3)
    """
    def __init__(self, head):
        def walker(node):
            while node is not empty:
                yield node
                node = node.tail
        super().__init__(head, walker)

# --------------------------------------------------------------------------------
# Nodes

class Stream(metaclass=ABCMeta):
    """Base class for stream nodes.

    There are exactly two kinds: ``NonEmpty``, and the terminator ``empty``.
    Test for the end of a stream with ``s is empty`` (or just ``not s``).
    """

    @property
    @abstractmethod
    def head(self):
        """The first element."""

    @property
    @abstractmethod
    def tail(self):
        """The rest of the stream, as a stream. Computed on first access."""

    def __iter__(self):
        return StreamIterator(self)

    def __reversed__(self):
        """Caution: O(n), works by building a reversed stream."""
        return StreamIterator(self.reverse())

    def __eq__(self, other):
        """Compare elementwise. Both streams are walked, so they must be finite."""
        if other is self:
            return True
        if not isinstance(other, Stream):
            return False
        fill = object()
        for a, b in zip_longest(self, other, fillvalue=fill):
            if a != b:
                return False
        return True

    def __hash__(self):
        return hash(tuple(self))

    def prepend(self, element):
        """Return a new stream with ``element`` in front of this one.

        This stream becomes the tail of the new one, and is shared, not copied.
        """
        return scons(element, self)

    def length(self, acc=0):
        """Return the number of elements, plus ``acc``."""
        return _length(self, acc)

    def drop(self, n):
        """Return the stream without its first ``n`` elements.

        ``n <= 0`` returns this stream itself. Forces only the tails it walks
        past; if the stream is shorter than ``n``, the result is ``empty``.
        """
        return _drop(self, n)

    def reverse(self, acc=None):
        """Return the elements in reverse order, followed by ``acc`` (default ``empty``).

        ``acc`` is shared as the suffix of the result.
        """
        return _reverse(self, empty if acc is None else acc)

    def filter(self, predicate, acc=None):
        """Return the elements for which ``predicate(x)`` is truthy, in the original order.

        ``predicate`` is called exactly once per element, left to right.
        """
        return _filter(self, empty if acc is None else acc, predicate)

    def map(self, mapper, acc=None):
        """Return ``mapper(x)`` for each element, in the original order.

        ``mapper`` is called exactly once per element, left to right, and
        always before the tail after that element is forced.
        """
        return _map(self, empty if acc is None else acc, mapper)

    def flat_map(self, mapper, acc=None):
        """Map each element to a finite iterable, and concatenate the results in order.

        Example::

            of(1, 2, 3).flat_map(lambda x: (x, 10 * x)) --> of(1, 10, 2, 20, 3, 30)
        """
        return _flat_map(self, empty if acc is None else acc, mapper)

    def append(self, element, acc=None):
        """Return a new stream with ``element`` added after the last element.

        If ``element`` is ``absent``, nothing is added, and the result is
        equal to this stream.
        """
        return _append(self, empty if acc is None else acc, element)

    def concat(self, other):
        """Return this stream followed by ``other``.

        This stream is copied; ``other`` is shared as the suffix of the result.
        """
        if not isinstance(other, Stream):
            raise TypeError("Expected a stream, got {} with value {}".format(type(other), other))
        return _reverse(_reverse(self, empty), other)

    def fold_left(self, combiner, acc):
        """Fold from the left.

        Returns ``combiner(...combiner(combiner(acc, x0), x1)..., xn)``.
        """
        return _fold_left(self, acc, combiner)

    def fold_right(self, combiner, acc):
        """Fold from the right.

        Returns ``combiner(...combiner(combiner(acc, xn), xn-1)..., x0)``.

        Note ``combiner`` takes the accumulator first here, too. This costs
        a reversal pass, then a left fold.
        """
        return _fold_right(self, acc, combiner)

class NonEmpty(Stream):
    """A stream node with a head value and a lazily computed tail.

    ``thunk`` is a 0-argument callable returning the tail stream. It is run
    at most once, on first access of ``tail``; the result is remembered.

    Immutable.
    """
    def __init__(self, head, thunk):
        self._head = head
        self._tail = Lazy(thunk)
        self._immutable = True

    def __setattr__(self, k, v):
        if hasattr(self, "_immutable"):
            raise TypeError("'NonEmpty' object does not support attribute assignment")
        super().__setattr__(k, v)

    @property
    def head(self):
        return self._head

    @property
    def tail(self):
        s = self._tail.force()
        if not isinstance(s, Stream):
            raise TypeError("The tail of a stream must be a stream, got {} with value {}".format(type(s), s))
        return s

    def __repr__(self):
        """Show the elements whose tails are already forced, then ``...`` if there is more.

        Suitable for ``eval`` when the stream is fully forced and all elements are.
        Never forces anything.
        """
        result = []
        seen = set()
        node = self
        while True:
            result.append(repr(node._head))
            seen.add(id(node))
            cell = node._tail
            if not (cell.forced and cell.thunk_returned_normally):
                result.append("...")
                break
            node = cell.value
            if node is empty:
                break
            if not isinstance(node, NonEmpty) or id(node) in seen:
                result.append("...")
                break
        return "of({})".format(", ".join(result))

# Stream uses ABCMeta; a singleton also needs ThereCanBeOnlyOne.
class _EmptyMeta(ABCMeta, ThereCanBeOnlyOne):
    pass

class Empty(Stream, Singleton, metaclass=_EmptyMeta):
    """The empty stream. Singleton; its instance is ``empty``.

    One instance serves streams of every element type.
    """
    @property
    def head(self):
        raise EmptyAccessError("head of empty stream")

    @property
    def tail(self):
        raise UnsupportedOperationError("tail of empty stream")

    def __bool__(self):
        return False

    def __repr__(self):
        return "empty"
empty = Empty()

class Absent(Singleton):
    """Marker for "no element". Singleton; its instance is ``absent``."""
    def __repr__(self):
        return "absent"
absent = Absent()

# --------------------------------------------------------------------------------
# Construction

def scons(head, tail):
    """Prepend ``head`` to the already built stream ``tail``.

    The name comes from *stream cons*. ``tail`` is shared, not copied.
    """
    if not isinstance(tail, Stream):
        raise TypeError("Expected a stream, got {} with value {}".format(type(tail), tail))
    return NonEmpty(head, lambda: tail)

def of(*elts):
    """Make a stream with the given elements, in the given order.

    ``of()`` is ``empty``; ``of(x)`` is a one-element stream. See also
    ``from_iterable``.
    """
    return from_iterable(elts)

def from_iterable(iterable):
    """Make a stream from a finite iterable, preserving the order.

    The elements are prepended onto an accumulator as they come in, and the
    accumulator is reversed once at the end.
    """
    acc = empty
    for x in iterable:
        acc = scons(x, acc)
    return _reverse(acc, empty)

# --------------------------------------------------------------------------------
# Algorithms
#
# Accumulator-passing tail recursion, made stack-safe by the trampoline.

@trampolined
def _length(s, acc):
    if s is empty:
        return acc
    return jump(_length, s.tail, acc + 1)

@trampolined
def _drop(s, n):
    if n <= 0 or s is empty:
        return s
    return jump(_drop, s.tail, n - 1)

@trampolined
def _reverse(s, acc):
    if s is empty:
        return acc
    return jump(_reverse, s.tail, scons(s.head, acc))

@trampolined
def _filter(s, acc, predicate):
    if s is empty:
        return jump(_reverse, acc, empty)
    x = s.head
    if predicate(x):
        acc = scons(x, acc)
    return jump(_filter, s.tail, acc, predicate)

@trampolined
def _map(s, acc, mapper):
    if s is empty:
        return jump(_reverse, acc, empty)
    y = mapper(s.head)
    return jump(_map, s.tail, scons(y, acc), mapper)

@trampolined
def _flat_map(s, acc, mapper):
    if s is empty:
        return jump(_reverse, acc, empty)
    for y in mapper(s.head):
        acc = scons(y, acc)
    return jump(_flat_map, s.tail, acc, mapper)

@trampolined
def _append(s, acc, element):
    if s is empty:
        if element is not absent:
            acc = scons(element, acc)
        return jump(_reverse, acc, empty)
    return jump(_append, s.tail, scons(s.head, acc), element)

@trampolined
def _fold_left(s, acc, combiner):
    if s is empty:
        return acc
    acc = combiner(acc, s.head)
    return jump(_fold_left, s.tail, acc, combiner)

@trampolined
def _fold_right(s, acc, combiner):
    return jump(_fold_left, _reverse(s, empty), acc, combiner)

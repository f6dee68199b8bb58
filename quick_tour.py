#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Short quick tour of lazystream."""

from operator import add

from lazystream import (of, from_iterable, NonEmpty, empty, absent,
                        EmptyAccessError, Lazy, trampolined, jump)

# build, walk, compare
s = of(1, 2, 3)
assert list(s) == [1, 2, 3]
assert of() is empty
assert s == from_iterable(range(1, 4))

# persistent: operations build new streams, old ones stay as they were
t = s.append(4)
assert list(t) == [1, 2, 3, 4]
assert list(s) == [1, 2, 3]
u = s.prepend(0)
assert u.tail is s  # shared suffix
assert s.append(absent) == s

# transformations keep the original order
assert list(s.filter(lambda x: x % 2 == 1)) == [1, 3]
assert list(s.map(lambda x: 2 * x)) == [2, 4, 6]
assert list(s.flat_map(lambda x: (x, -x))) == [1, -1, 2, -2, 3, -3]
assert list(s.reverse()) == [3, 2, 1]
assert list(s.concat(of(4, 5))) == [1, 2, 3, 4, 5]
assert s.fold_left(add, 0) == 6
assert of("a", "b", "c").fold_right(add, "") == "cba"

# the end of the stream
try:
    empty.head
except EmptyAccessError:
    pass

# tails are computed lazily, at most once
def naturals(n=0):
    return NonEmpty(n, lambda: naturals(n + 1))
nats = naturals()
assert nats.drop(5).head == 5
print(repr(nats))  # of(0, 1, 2, 3, 4, 5, ...)

# long streams are fine; the algorithms run on a trampoline
big = from_iterable(range(100000))
assert big.length() == 100000

# the building blocks are available, too
p = Lazy(lambda: print("computing...") or 42)
assert p.force() == 42  # prints once
assert p.force() == 42  # cached

@trampolined
def count(s, acc=0):
    if s is empty:
        return acc
    return jump(count, s.tail, acc + 1)
assert count(big) == 100000

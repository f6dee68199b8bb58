# -*- coding: utf-8 -*-

import gc
from io import StringIO

from .. import tco
from ..tco import trampolined, jump

def test():
    # tail recursion
    @trampolined
    def fact(n, acc=1):
        if n == 0:
            return acc
        return jump(fact, n - 1, n * acc)
    assert fact(4) == 24
    fact(5000)  # no crash

    # mutual tail recursion
    @trampolined
    def even(n):
        if n == 0:
            return True
        return jump(odd, n - 1)
    @trampolined
    def odd(n):
        if n == 0:
            return False
        return jump(even, n - 1)
    assert even(42) is True
    assert odd(4) is False
    assert even(10000) is True  # no crash

    # the decorator keeps the name and docstring
    @trampolined
    def documented():
        """Docstring."""
        return 42
    assert documented.__name__ == "documented"
    assert documented.__doc__ == "Docstring."
    assert documented() == 42

    # exceptions propagate out of the trampoline unchanged
    class SpaghettiError(Exception):
        pass
    @trampolined
    def foo():
        return jump(bar)
    @trampolined
    def bar():
        raise SpaghettiError("look at the call stack, foo() was zapped by TCO")
    try:
        foo()
    except SpaghettiError:
        pass
    else:
        assert False

    # jumping into a non-callable
    @trampolined
    def broken():
        return jump(42)
    try:
        broken()
    except TypeError:
        pass
    else:
        assert False

    # an unclaimed jump warns on stderr
    def no_trampoline():
        return jump(fact, 3)
    # the tco module binds stderr at import time, so redirect it there
    buf = StringIO()
    oldstderr, tco.stderr = tco.stderr, buf
    try:
        j = no_trampoline()
        del j
        gc.collect()
    finally:
        tco.stderr = oldstderr
    assert "WARNING: unclaimed" in buf.getvalue()

    print("All tests PASSED")

if __name__ == '__main__':
    test()

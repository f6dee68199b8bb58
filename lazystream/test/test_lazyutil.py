# -*- coding: utf-8 -*-

import gc
import weakref

from ..lazyutil import Lazy

def test():
    # the thunk runs at most once
    evaluations = []
    def thunk():
        evaluations.append(1)
        return ["the", "value"]
    p = Lazy(thunk)
    assert not p.forced
    assert not evaluations  # nothing runs at construction time
    v1 = p.force()
    v2 = p.force()
    v3 = p.force()
    assert p.forced
    assert len(evaluations) == 1
    assert v1 == ["the", "value"]
    assert v1 is v2 is v3  # same object every time
    assert p.thunk is None  # dropped after use

    # None is a perfectly good value
    p = Lazy(lambda: None)
    assert p.force() is None
    assert p.forced

    # a failing thunk: the exception is cached and re-raised, the thunk is not retried
    attempts = []
    class Oops(Exception):
        pass
    def failing():
        attempts.append(1)
        raise Oops("nope")
    p = Lazy(failing)
    caught = []
    for _ in range(3):
        try:
            p.force()
        except Oops as err:
            caught.append(err)
        else:
            assert False
    assert len(attempts) == 1
    assert caught[0] is caught[1] is caught[2]  # the same instance
    assert p.forced

    # forcing from inside its own thunk
    p = Lazy(lambda: p.force())
    try:
        p.force()
    except RuntimeError:
        pass
    else:
        assert False

    # the thunk must be callable
    try:
        Lazy(42)
    except TypeError:
        pass
    else:
        assert False

    # the thunk's closure is released once the value is computed
    class Big:
        pass
    def make_thunk(obj):
        return lambda: id(obj)
    big = Big()
    ref = weakref.ref(big)
    p = Lazy(make_thunk(big))
    del big
    gc.collect()
    assert ref() is not None  # still held by the unforced thunk
    p.force()
    gc.collect()
    assert ref() is None

    # repr never forces
    p = Lazy(lambda: 42)
    assert "unforced" in repr(p)
    assert not p.forced
    p.force()
    assert "value=42" in repr(p)

    print("All tests PASSED")

if __name__ == '__main__':
    test()

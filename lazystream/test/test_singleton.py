# -*- coding: utf-8; -*-

import pickle

from ..singleton import Singleton
from ..stream import Empty, empty, Absent, absent

# For testing. Defined at the top level to allow pickling.
class Foo(Singleton):
    pass
class Bar(Foo):
    pass
class Baz(Singleton):
    def __init__(self, x=42):
        self.x = x

def test():
    # basic usage: keep the reference the constructor gives you,
    # a second construction is refused.
    foo = Foo()
    try:
        Foo()
    except TypeError:
        pass
    else:
        assert False, "should have errored out, a Foo already exists"

    # a class that inherits from a singleton class is a singleton of its own
    bar = Bar()
    assert bar is not foo
    try:
        Bar()
    except TypeError:
        pass
    else:
        assert False, "should have errored out, a Bar already exists"

    # __init__ arguments
    baz = Baz(17)
    assert baz.x == 17

    # pickling gives back the existing instance
    assert pickle.loads(pickle.dumps(foo)) is foo
    assert pickle.loads(pickle.dumps(baz)) is baz
    assert baz.x == 17

    # the singletons lazystream itself uses
    for cls, instance in ((Empty, empty), (Absent, absent)):
        try:
            cls()
        except TypeError:
            pass
        else:
            assert False, "should have errored out, {} already exists".format(instance)
        assert pickle.loads(pickle.dumps(instance)) is instance

    print("All tests PASSED")

if __name__ == '__main__':
    test()

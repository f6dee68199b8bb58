# -*- coding: utf-8 -*-
"""Run all tests for `lazystream`.

Each test module in ``lazystream/test`` provides a ``test()`` function,
which raises ``AssertionError`` on failure. The same modules can also be
run one at a time (``python3 -m lazystream.test.test_stream``), or
collected by pytest.
"""

import os
import re
import sys
import traceback
from importlib import import_module

def listtestmodules(path):
    testfiles = listtestfiles(path)
    testmodules = [modname(path, fn) for fn in testfiles]
    return list(sorted(testmodules))

def listtestfiles(path, prefix="test_", suffix=".py"):
    return [fn for fn in os.listdir(path) if fn.startswith(prefix) and fn.endswith(suffix)]

def modname(path, filename):  # some/dir/mod.py --> some.dir.mod
    modpath = re.sub(re.escape(os.path.sep), r".", path)
    themod = re.sub(r"\.py$", r"", filename)
    return ".".join([modpath, themod])

def main():
    failed = []
    for m in listtestmodules(os.path.join("lazystream", "test")):
        print(f"*** Testing {m} ***")
        # We're not inside a package, so we can't use a relative import;
        # we hope this resolves to the local `lazystream` source code.
        try:
            mod = import_module(m)
            mod.test()
        except Exception:
            traceback.print_exc()
            failed.append(m)
    if failed:
        print("*** FAILED: {} ***".format(", ".join(failed)))
    else:
        print("*** ALL PASSED ***")
    return not failed

if __name__ == '__main__':
    if not main():
        sys.exit(1)  # pragma: no cover, this only runs when the tests fail.

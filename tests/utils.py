import sys
from contextlib import contextmanager


@contextmanager
def recursion_limit(n):
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(n)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)

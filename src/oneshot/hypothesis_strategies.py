"""
Hypothesis strategies for testing code built on oneshot, and for checking
the algebraic laws of `Effectful` itself.
"""
from typing import Any, Callable, List

from hypothesis.strategies import (SearchStrategy, booleans, builds,
                                   composite, floats, integers, lists,
                                   one_of, recursive, text)

from .effectful import Effectful, perform_op, pure, sequence
from .errors import Unhandled
from .operations import Operation


class Probe(Operation):
    """
    Family of operations used for testing
    """


class Echo(Probe):
    """
    Operation answered with its own payload by `Recorder`
    """
    value: Any


class Recorder:
    """
    Handler that echoes `Echo` operations and records every operation it
    answers, so that runs can be compared by result and by trace
    """
    def __init__(self):
        self.ops: List[Any] = []

    def handle(self, op: Any) -> Any:
        if not isinstance(op, Echo):
            raise Unhandled(op)
        self.ops.append(op)
        return op.value

    def __repr__(self) -> str:
        return f'Recorder({self.ops!r})'


def _everything(allow_nan=False):
    return integers(), booleans(), text(), floats(allow_nan=allow_nan)


def anything(allow_nan=False) -> SearchStrategy[Any]:
    return one_of(*_everything(allow_nan))


@composite
def unaries(draw, return_strategy=anything()) -> Callable[[Any], Any]:
    a = draw(return_strategy)
    return lambda _: a


def echoes(value_strategy=anything()) -> SearchStrategy[Echo]:
    return builds(Echo, value_strategy)


def effectfuls(value_strategy=anything(),
               max_leaves: int = 10) -> SearchStrategy[Effectful]:
    """
    Strategy for computations made of `pure` values, performed `Echo`
    operations, sequencing with ``and_then`` and `sequence`. Run them
    with a `Recorder`.

    Args:
        value_strategy: strategy for results and operation payloads
        max_leaves: bound on the size of generated computations
    Return:
        strategy producing unstarted `Effectful` values
    """
    leaves = one_of(
        builds(pure, value_strategy),
        builds(perform_op, echoes(value_strategy))
    )

    def extend(children):
        def and_then(e: Effectful, k: Effectful) -> Effectful:
            return e.and_then(lambda _: k)

        def last(es: List[Effectful]) -> Effectful:
            return sequence(es).map(lambda xs: xs[-1])

        return one_of(
            builds(and_then, children, children),
            builds(last, lists(children, min_size=1, max_size=3))
        )

    return recursive(leaves, extend, max_leaves=max_leaves)


__all__ = [
    'Probe',
    'Echo',
    'Recorder',
    'anything',
    'unaries',
    'echoes',
    'effectfuls'
]

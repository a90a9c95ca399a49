from __future__ import annotations

from typing import Any, Callable, List

from .effectful import Effectful, perform_op
from .errors import Unhandled
from .operations import Operation


class StateOp(Operation):
    """
    Family of operations that read and write a single mutable value
    """


class Get(StateOp):
    pass


class Put(StateOp, returns=None):
    value: Any


class Modify(StateOp):
    """
    Replace the state with ``f(state)`` and reply with the new state
    """
    f: Callable[[Any], Any]


class StateHandler:
    """
    Handler holding the current state

    Example:
        >>> handler = StateHandler(1)
        >>> modify(lambda s: s + 1).discard_and_then(get()).run(handler)
        2
        >>> handler.state
        2
    """
    def __init__(self, initial: Any = None):
        self.state = initial
        self.history: List[Any] = [initial]

    def handle(self, op: Any) -> Any:
        if isinstance(op, Get):
            return self.state
        if isinstance(op, Put):
            self._set(op.value)
            return None
        if isinstance(op, Modify):
            self._set(op.f(self.state))
            return self.state
        raise Unhandled(op)

    def _set(self, value: Any) -> None:
        self.state = value
        self.history.append(value)

    def __repr__(self) -> str:
        return f'StateHandler({self.state!r})'


def get() -> Effectful[Any]:
    """
    Get a computation that produces the current state

    Example:
        >>> get().run(StateHandler('state'))
        'state'
    """
    return perform_op(Get())


def put(value: Any) -> Effectful[None]:
    """
    Get a computation that replaces the current state

    Example:
        >>> handler = StateHandler()
        >>> put('state').run(handler)
        >>> handler.state
        'state'

    Args:
        value: The new state
    Return:
        computation performing `Put`
    """
    return perform_op(Put(value))


def modify(f: Callable[[Any], Any]) -> Effectful[Any]:
    return perform_op(Modify(f))


__all__ = [
    'StateOp',
    'Get',
    'Put',
    'Modify',
    'StateHandler',
    'get',
    'put',
    'modify'
]

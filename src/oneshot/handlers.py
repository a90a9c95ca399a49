from __future__ import annotations

from typing import Any, Callable, Type, Union

from typing_extensions import Protocol, runtime_checkable

from .immutable import Immutable
from .maybe import Just, Maybe, Nothing


@runtime_checkable
class Handler(Protocol):
    """
    Fulfillment strategy that answers every operation it is given.
    A handler that meets an operation it does not know raises
    `Unhandled` with that operation.

    Example:
        >>> class Calculator:
        ...     def handle(self, op):
        ...         if isinstance(op, Add):
        ...             return op.a + op.b
        ...         raise Unhandled(op)
    """
    def handle(self, op: Any) -> Any:
        pass


@runtime_checkable
class PartialHandler(Protocol):
    """
    Fulfillment strategy that may decline an operation, deferring it to the
    next handler in a chain. Declining returns `Nothing` and must leave the
    handler's state untouched.

    Example:
        >>> class Stdout:
        ...     def maybe_handle(self, op):
        ...         if isinstance(op, Print):
        ...             print(op.message)
        ...             return Just(None)
        ...         return Nothing()
    """
    def maybe_handle(self, op: Any) -> Maybe[Any]:
        pass


class Total(Immutable):
    """
    Partial handler that never declines, answering with the wrapped
    `Handler`
    """
    handler: Handler

    def maybe_handle(self, op: Any) -> Maybe[Any]:
        return Just(self.handler.handle(op))


class Only(Immutable):
    """
    Partial handler that declines operations outside ``family`` and forwards
    everything else to ``handler``
    """
    family: Union[Type[Any], tuple]
    handler: Union[Handler, PartialHandler]

    def maybe_handle(self, op: Any) -> Maybe[Any]:
        if not isinstance(op, self.family):
            return Nothing()
        return as_partial(self.handler).maybe_handle(op)


class FromFunction(Immutable):
    f: Callable[[Any], Maybe[Any]]

    def maybe_handle(self, op: Any) -> Maybe[Any]:
        return self.f(op)


class FromTotalFunction(Immutable):
    f: Callable[[Any], Any]

    def handle(self, op: Any) -> Any:
        return self.f(op)


def as_partial(handler: Union[Handler, PartialHandler]) -> PartialHandler:
    """
    Normalise ``handler`` to a `PartialHandler`. Partial handlers are
    returned as is, total handlers are wrapped in `Total`

    Args:
        handler: handler of either shape
    Return:
        ``handler`` as a `PartialHandler`
    """
    if isinstance(handler, PartialHandler):
        return handler
    if isinstance(handler, Handler):
        return Total(handler)
    raise TypeError(
        f'{handler!r} has neither a maybe_handle nor a handle method'
    )


def only(family: Union[Type[Any], tuple],
         handler: Union[Handler, PartialHandler]) -> Only:
    """
    Restrict ``handler`` to operations of ``family``

    Example:
        >>> chain = HandlerChain().handle(only(ConsoleOp, MockConsole()))

    Args:
        family: class (or tuple of classes) of operations to accept
        handler: handler for operations of ``family``
    Return:
        partial handler declining everything outside ``family``
    """
    return Only(family, handler)


def partial(f: Callable[[Any], Maybe[Any]]) -> PartialHandler:
    """
    Make a partial handler from a function returning `Just` or `Nothing`

    Example:
        >>> @partial
        ... def evens(op):
        ...     return Just(op.n * op.n) if op.n % 2 == 0 else Nothing()

    Args:
        f: function from operation to `Maybe` response
    Return:
        ``f`` as a `PartialHandler`
    """
    return FromFunction(f)


def total(f: Callable[[Any], Any]) -> Handler:
    """
    Make a handler from a function answering every operation

    Args:
        f: function from operation to response
    Return:
        ``f`` as a `Handler`
    """
    return FromTotalFunction(f)


__all__ = [
    'Handler',
    'PartialHandler',
    'Total',
    'Only',
    'as_partial',
    'only',
    'partial',
    'total'
]

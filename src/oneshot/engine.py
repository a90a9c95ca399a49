"""
The execution engine: drives a computation to completion, routing each
operation it performs through a handler and resuming it with the response.
"""
from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from typing import TYPE_CHECKING, Any, TypeVar, Union

from .either import Either, Left, Right
from .errors import AlreadyStarted, Unhandled
from .handlers import Handler, PartialHandler, as_partial
from .maybe import Just, Nothing

if TYPE_CHECKING:
    from .effectful import Effectful

A = TypeVar('A')

AnyHandler = Union[Handler, PartialHandler]

log = logging.getLogger(__name__)


def dispatch(handler: AnyHandler, op: Any) -> Any:
    """
    Get the response of ``handler`` to ``op``

    Example:
        >>> dispatch(Calculator(), Add(2, 3))
        5

    Args:
        handler: a `Handler`, `PartialHandler` or `HandlerChain`
        op: the operation
    Return:
        the response to ``op``
    Raises:
        Unhandled: if ``handler`` declines ``op``
    """
    partial = as_partial(handler)
    response = partial.maybe_handle(op)
    if not isinstance(response, (Just, Nothing)):
        raise TypeError(
            f'{partial!r}.maybe_handle must return Just or Nothing, '
            f'got {response!r}'
        )
    if not response:
        raise Unhandled(op)
    return response.get


def _loop(computation: Effectful[A], handler: AnyHandler, checked: bool):
    from .effectful import Completed

    handler = as_partial(handler)
    reply = None
    count = 0
    while True:
        step = computation.drive(reply)
        if isinstance(step, Completed):
            log.debug(
                '%r completed after %d operation(s)', computation, count
            )
            return Right(step.value) if checked else step.value
        effect = step.effect
        count += 1
        log.debug('dispatching operation %d: %r', count, effect.op)
        try:
            response = dispatch(handler, effect.op)
        except Unhandled as e:
            # only the operation performed here may become a Left
            if e.op is not effect.op and e.op != effect.op:
                raise
            log.debug('operation %r was not handled', effect.op)
            if checked:
                return Left(e)
            raise
        effect.fill(response)
        reply = effect.reply


def run(computation: Effectful[A], handler: AnyHandler) -> A:
    """
    Drive ``computation`` to completion, answering every operation it
    performs with ``handler``. The caller asserts that ``handler`` covers
    every operation; an operation nobody answers raises `Unhandled`, and
    violations of the reply protocol raise `ProtocolError`.

    Example:
        >>> run(add(2, 3).and_then(lambda s: multiply(s, 4)), Calculator())
        20

    Args:
        computation: the computation to run
        handler: a `Handler`, `PartialHandler` or `HandlerChain`
    Return:
        the result of ``computation``
    """
    return _loop(computation, handler, checked=False)


def run_checked(computation: Effectful[A],
                handler: AnyHandler) -> Either[Unhandled, A]:
    """
    Drive ``computation`` to completion like `run`, but return an operation
    that no handler accepted as a ``Left`` value instead of raising.
    Violations of the reply protocol still raise `ProtocolError`, and
    exceptions raised by the computation itself propagate, as does an
    `Unhandled` that a handler raises for some other operation.

    Example:
        >>> run_checked(add(2, 3), HandlerChain([MockConsole()]))
        Left(Unhandled(Add(a=2, b=3)))

    Args:
        computation: the computation to run
        handler: a `Handler`, `PartialHandler` or `HandlerChain`
    Return:
        `Right` with the result, or `Left` with `Unhandled`
    """
    return _loop(computation, handler, checked=True)


def submit(executor: Executor, computation: Effectful[A],
           handler: AnyHandler) -> Future:
    """
    Run an unstarted ``computation`` on ``executor``, e.g a worker thread.
    The computation is driven entirely by the worker that picks it up.

    Example:
        >>> with ThreadPoolExecutor() as executor:
        ...     future = submit(executor, add(2, 3), Calculator())
        >>> future.result()
        5

    Args:
        executor: the executor to run on
        computation: the computation to run
        handler: handler owned by the submitted run
    Return:
        future of the result of ``computation``
    """
    from .effectful import State

    if computation.state is not State.NOT_STARTED:
        raise AlreadyStarted(
            'only computations that have not been driven can be submitted'
        )
    return executor.submit(run, computation, handler)


__all__ = ['dispatch', 'run', 'run_checked', 'submit']

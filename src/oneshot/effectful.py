from __future__ import annotations

import inspect
from collections import deque
from enum import Enum
from functools import wraps
from typing import (TYPE_CHECKING, Any, Callable, Deque, Generator, Generic,
                    Iterable, Optional, Tuple, TypeVar, Union)

from .effect import Effect, perform
from .either import Either
from .errors import AlreadyCompleted, AlreadyStarted, ProtocolError
from .immutable import Immutable
from .operations import _UNSET
from .reply import Reply

if TYPE_CHECKING:
    from .chain import Chained, Handled

A = TypeVar('A')
B = TypeVar('B')

Procedure = Callable[[], Generator[Effect, Reply, A]]


class State(Enum):
    NOT_STARTED = 'not started'
    SUSPENDED = 'suspended'
    COMPLETED = 'completed'


class Suspended(Immutable):
    """
    Result of driving a computation that stopped at an operation
    """
    effect: Effect


class Completed(Immutable, Generic[A]):
    """
    Result of driving a computation that produced its final value
    """
    value: A


Step = Union[Suspended, Completed[A]]


def _return(value: A) -> Generator[Effect, Reply, A]:
    return value
    yield  # pragma: no cover


def _continue(continuation: Callable[[Any], Any],
              value: Any) -> Effectful[Any]:
    next_ = continuation(value)
    if not isinstance(next_, Effectful):
        raise TypeError(
            f'continuation {continuation!r} must return an '
            f'Effectful, got {next_!r}'
        )
    next_._require_not_started()
    return next_


class Effectful(Generic[A]):
    """
    A suspendable computation that performs operations and eventually
    produces a result of type ``A``.

    The computation is described by a procedure: a function of no arguments
    that returns a generator yielding `Effect` envelopes and returning the
    result. Nothing runs until the first call to `drive`, so an unstarted
    computation may be handed to another thread. Each instance is driven at
    most once from start to completion.

    Example:
        >>> def body():
        ...     total = yield from perform(Add(2, 3))
        ...     return (yield from perform(Multiply(total, 4)))
        >>> Effectful(body).handle(Calculator()).run()
        20
    """
    def __init__(
        self,
        procedure: Procedure[Any],
        continuations: Tuple[Callable[[Any], Effectful[Any]], ...] = ()
    ):
        self._procedure = procedure
        self._continuations = continuations
        self._state = State.NOT_STARTED
        self._generator: Optional[Generator[Effect, Reply, Any]] = None
        self._pending: Deque[Callable[[Any], Effectful[Any]]] = deque()
        self._driving = False

    @staticmethod
    def pure(value: B) -> Effectful[B]:
        """
        Create a computation that performs no operations and
        produces ``value``

        Example:
            >>> Effectful.pure(1).run(Calculator())
            1

        Args:
            value: the result
        Return:
            computation that completes immediately with ``value``
        """
        return Effectful(lambda: _return(value))

    @property
    def state(self) -> State:
        return self._state

    def _require_not_started(self) -> None:
        if self._state is not State.NOT_STARTED:
            raise AlreadyStarted(
                'cannot compose a computation that has already been driven'
            )

    def drive(self, reply: Optional[Reply] = None) -> Step[A]:
        """
        Run this computation until it suspends at its next operation or
        completes.

        The first call starts the procedure and must not carry a reply.
        Every later call resumes the computation with the filled `Reply`
        of the effect it was last suspended at.

        Args:
            reply: reply to the previously yielded effect
        Return:
            `Suspended` with the next effect, or `Completed` with the result
        """
        if self._state is State.COMPLETED:
            raise AlreadyCompleted()
        if self._driving:
            raise ProtocolError('computation is already being driven')
        if self._state is State.NOT_STARTED:
            if reply is not None:
                raise ProtocolError(
                    'the first drive of a computation cannot carry a reply'
                )
            self._generator = self._procedure()
            self._pending = deque(self._continuations)
        elif reply is None:
            raise ProtocolError('a suspended computation needs a reply')
        self._driving = True
        try:
            return self._step(reply)
        except BaseException:
            self._state = State.COMPLETED
            raise
        finally:
            self._driving = False

    def _step(self, reply: Optional[Reply]) -> Step[A]:
        while True:
            try:
                yielded = self._generator.send(reply)  # type: ignore
            except StopIteration as stop:
                if not self._pending:
                    self._state = State.COMPLETED
                    self._generator = None
                    return Completed(stop.value)
                next_ = _continue(self._pending.popleft(), stop.value)
                self._generator = next_._procedure()
                self._pending.extendleft(reversed(next_._continuations))
                reply = None
                continue
            if not isinstance(yielded, Effect):
                raise TypeError(
                    f'computations must yield Effect values, got {yielded!r}'
                )
            self._state = State.SUSPENDED
            return Suspended(yielded)

    def __iter__(self) -> Generator[Effect, Reply, A]:
        """
        Embed this computation in a generator body with ``yield from``,
        forwarding its effects and producing its result

        Example:
            >>> def body():
            ...     a = yield from add(1, 2)
            ...     b = yield from add(a, 3)
            ...     return b
            >>> Effectful(body).run(Calculator())
            6
        """
        self._require_not_started()
        value = yield from self._procedure()
        pending = deque(self._continuations)
        while pending:
            next_ = _continue(pending.popleft(), value)
            pending.extendleft(reversed(next_._continuations))
            value = yield from next_._procedure()
        return value

    def and_then(self, f: Callable[[A], Effectful[B]]) -> Effectful[B]:
        """
        Sequence this computation with the computation produced by ``f``
        from its result. Operations are performed in the same order and
        number as running both computations one after the other.

        Example:
            >>> add(2, 3).and_then(lambda s: multiply(s, 4)).run(Calculator())
            20

        Args:
            f: function producing the next computation
        Return:
            computation that runs this computation and then the result \
            of ``f``
        """
        self._require_not_started()
        return Effectful(self._procedure, self._continuations + (f, ))

    def map(self, f: Callable[[A], B]) -> Effectful[B]:
        """
        Map the result of this computation

        Example:
            >>> add(2, 3).map(str).run(Calculator())
            '5'

        Args:
            f: function to apply to the result
        Return:
            computation producing the result of ``f``
        """
        return self.and_then(lambda a: Effectful.pure(f(a)))

    def discard_and_then(self, other: Effectful[B]) -> Effectful[B]:
        """
        Run this computation, throw away its result and continue with
        ``other``

        Args:
            other: the next computation
        Return:
            computation producing the result of ``other``
        """
        return self.and_then(lambda _: other)

    def handle(self, handler: Any) -> Handled[A]:
        """
        Attach a handler that is expected to answer every operation this
        computation performs

        Example:
            >>> add(2, 3).handle(Calculator()).run()
            5

        Args:
            handler: a `Handler`, `PartialHandler` or `HandlerChain`
        Return:
            computation bound to ``handler``, ready to run
        """
        from .chain import Handled
        return Handled(self, handler)

    def begin_chain(self) -> Chained[A]:
        """
        Start composing a chain of partial handlers for this computation

        Example:
            >>> (program()
            ...     .begin_chain()
            ...     .handle(MockConsole(['Alice']))
            ...     .handle(Calculator())
            ...     .run_checked())
            Right(20)

        Return:
            an empty handler chain bound to this computation
        """
        from .chain import Chained, HandlerChain
        return Chained(self, HandlerChain())

    def handle_all(self, handlers: Iterable[Any]) -> Chained[A]:
        """
        Start a chain of partial handlers for this computation from
        ``handlers``, in iteration order. Shorthand for
        ``begin_chain().handle_all(handlers)``

        Example:
            >>> add(2, 3).handle_all([MockConsole(), MathOnly()]).run()
            5

        Args:
            handlers: handlers or chains to dispatch to
        Return:
            handler chain bound to this computation
        """
        return self.begin_chain().handle_all(handlers)

    def run(self, handler: Any) -> A:
        """
        Drive this computation to completion with ``handler``.
        Shorthand for ``engine.run(self, handler)``

        Args:
            handler: a `Handler`, `PartialHandler` or `HandlerChain`
        Return:
            the result of the computation
        """
        from .engine import run
        return run(self, handler)

    def run_checked(self, handler: Any) -> Either[Any, A]:
        """
        Drive this computation to completion with ``handler``, returning
        unhandled operations as a value.
        Shorthand for ``engine.run_checked(self, handler)``

        Args:
            handler: a `Handler`, `PartialHandler` or `HandlerChain`
        Return:
            `Right` with the result, or `Left` with `Unhandled`
        """
        from .engine import run_checked
        return run_checked(self, handler)

    def __repr__(self) -> str:
        name = getattr(self._procedure, '__qualname__', repr(self._procedure))
        return f'Effectful({name}, state={self._state.value!r})'


def pure(value: A) -> Effectful[A]:
    """
    Create a computation that produces ``value`` without performing
    any operations

    Example:
        >>> pure(1).run(Calculator())
        1

    Args:
        value: the result
    Return:
        computation producing ``value``
    """
    return Effectful.pure(value)


def perform_op(op: Any, expected: Any = _UNSET) -> Effectful[Any]:
    """
    Create a computation that performs the single operation ``op`` and
    produces its response

    Example:
        >>> perform_op(Add(2, 3)).run(Calculator())
        5

    Args:
        op: the operation to perform
        expected: type the response must have. Defaults to the type \
            declared by ``op``
    Return:
        computation performing ``op``
    """
    return Effectful(lambda: perform(op, expected))


Effects = Generator[Any, Any, A]


def effectful(f: Callable[..., Effects[A]]) -> Callable[..., Effectful[A]]:
    """
    Decorator for generator functions that yield operations and
    computations. Each yielded operation is performed, each yielded
    `Effectful` is embedded, and the response or result is sent back
    into the generator.

    Example:
        >>> @effectful
        ... def program(x: int) -> Effects[int]:
        ...     total = yield Add(x, 3)
        ...     doubled = yield multiply(total, 2)
        ...     return doubled
        >>> program(2).run(Calculator())
        10

    Args:
        f: generator function to decorate
    Return:
        `f` decorated to return an `Effectful` instead of a generator
    """
    @wraps(f)
    def decorator(*args, **kwargs) -> Effectful[A]:
        def procedure() -> Generator[Effect, Reply, A]:
            g = f(*args, **kwargs)
            if not inspect.isgenerator(g):
                return g
            value = None
            while True:
                try:
                    item = g.send(value)
                except StopIteration as stop:
                    return stop.value
                if isinstance(item, Effectful):
                    value = yield from item
                else:
                    value = yield from perform(item)

        procedure.__qualname__ = f.__qualname__
        return Effectful(procedure)

    return decorator


def sequence(iterable: Iterable[Effectful[A]]) -> Effectful[Tuple[A, ...]]:
    """
    Run each computation in ``iterable`` from left to right and
    collect the results

    Example:
        >>> sequence([add(1, 1), add(2, 2)]).run(Calculator())
        (2, 4)

    Args:
        iterable: the computations to run
    Return:
        computation producing a tuple of results
    """
    effectfuls = tuple(iterable)

    def procedure() -> Generator[Effect, Reply, Tuple[A, ...]]:
        results = []
        for e in effectfuls:
            results.append((yield from e))
        return tuple(results)

    return Effectful(procedure)


def for_each(f: Callable[[A], Effectful[B]],
             iterable: Iterable[A]) -> Effectful[Tuple[B, ...]]:
    """
    Map each element of ``iterable`` to a computation with ``f``,
    run them from left to right and collect the results

    Example:
        >>> for_each(lambda v: add(v, v), range(3)).run(Calculator())
        (0, 2, 4)

    Args:
        f: function producing a computation from each element
        iterable: elements to map ``f`` over
    Return:
        computation producing a tuple of results
    """
    return sequence(f(x) for x in iterable)


def filter_(f: Callable[[A], Effectful[bool]],
            iterable: Iterable[A]) -> Effectful[Tuple[A, ...]]:
    """
    Keep the elements of ``iterable`` for which the computation produced
    by ``f`` has a truthy result, running the computations left to right

    Example:
        >>> filter_(lambda v: is_even(v), range(5)).run(Calculator())
        (0, 2, 4)

    Args:
        f: function producing a predicate computation from each element
        iterable: elements to filter
    Return:
        computation producing a tuple of the kept elements
    """
    elements = tuple(iterable)

    def procedure() -> Generator[Effect, Reply, Tuple[A, ...]]:
        kept = []
        for x in elements:
            if (yield from f(x)):
                kept.append(x)
        return tuple(kept)

    return Effectful(procedure)


def combine(*effectfuls: Effectful[Any]
            ) -> Callable[[Callable[..., B]], Effectful[B]]:
    """
    Create a function that combines the results of ``effectfuls``,
    run from left to right

    Example:
        >>> combine(add(1, 1), add(2, 2))(lambda a, b: a * b).run(Calculator())
        8

    Args:
        effectfuls: the computations whose results are combined
    Return:
        function that takes a combining function and returns a computation
    """
    def _(f: Callable[..., B]) -> Effectful[B]:
        return sequence(effectfuls).map(lambda results: f(*results))

    return _


def lift(f: Callable[..., B]) -> Callable[..., Effectful[B]]:
    """
    Turn a function of plain values into a function of computations

    Example:
        >>> lift(lambda a, b: a + b)(add(1, 1), pure(3)).run(Calculator())
        5

    Args:
        f: function to lift
    Return:
        ``f`` lifted to take `Effectful` arguments
    """
    def _(*effectfuls: Effectful[Any]) -> Effectful[B]:
        return combine(*effectfuls)(f)

    return _


__all__ = [
    'State',
    'Suspended',
    'Completed',
    'Step',
    'Effectful',
    'Effects',
    'pure',
    'perform_op',
    'effectful',
    'sequence',
    'for_each',
    'filter_',
    'combine',
    'lift'
]

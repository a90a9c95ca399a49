from __future__ import annotations

import logging
from typing import (TYPE_CHECKING, Any, Generic, Iterable, Iterator, List,
                    TypeVar, Union)

from .either import Either
from .engine import run, run_checked
from .errors import Unhandled
from .handlers import Handler, PartialHandler, Total, as_partial
from .maybe import Just, Maybe, Nothing

if TYPE_CHECKING:
    from .effectful import Effectful

A = TypeVar('A')

log = logging.getLogger(__name__)


class HandlerChain:
    """
    Ordered sequence of partial handlers dispatched first match wins.
    Pushing a chain into a chain absorbs its handlers in order, so a chain
    never contains another chain.

    Example:
        >>> first = HandlerChain().handle(AddTen()).handle(MultiplyTwo())
        >>> chain = HandlerChain().handle(first).handle(Square())
        >>> list(chain)
        [AddTen(), MultiplyTwo(), Square()]
    """
    def __init__(self, handlers: Iterable[Union[Handler, PartialHandler,
                                                HandlerChain]] = ()):
        self._handlers: List[PartialHandler] = []
        self.handle_all(handlers)

    def handle(
        self, handler: Union[PartialHandler, Handler, HandlerChain]
    ) -> HandlerChain:
        """
        Append ``handler`` to this chain. If ``handler`` is itself a
        `HandlerChain` its handlers are appended one by one instead

        Args:
            handler: the handler or chain to append
        Return:
            this chain
        """
        if isinstance(handler, HandlerChain):
            self._handlers.extend(handler._handlers)
        else:
            self._handlers.append(as_partial(handler))
        return self

    def handle_total(self, handler: Handler) -> HandlerChain:
        """
        Append a total handler wrapped as an always accepting partial handler

        Args:
            handler: the total handler
        Return:
            this chain
        """
        self._handlers.append(Total(handler))
        return self

    def handle_all(
        self, handlers: Iterable[Union[PartialHandler, Handler, HandlerChain]]
    ) -> HandlerChain:
        """
        Append every handler in ``handlers`` in iteration order

        Args:
            handlers: handlers or chains to append
        Return:
            this chain
        """
        for handler in handlers:
            self.handle(handler)
        return self

    def maybe_handle(self, op: Any) -> Maybe[Any]:
        """
        Offer ``op`` to each handler in insertion order. The first handler
        that does not decline answers, and no later handler sees ``op``

        Args:
            op: the operation
        Return:
            `Just` with the first response, or `Nothing` if all declined
        """
        for handler in self._handlers:
            response = handler.maybe_handle(op)
            if not isinstance(response, (Just, Nothing)):
                raise TypeError(
                    f'{handler!r}.maybe_handle must return Just or Nothing, '
                    f'got {response!r}'
                )
            if response:
                log.debug('%r handled by %r', op, handler)
                return response
            log.debug('%r declined by %r', op, handler)
        return Nothing()

    def dispatch(self, op: Any) -> Any:
        """
        Get the response to ``op``

        Args:
            op: the operation
        Return:
            the response of the first handler accepting ``op``
        Raises:
            Unhandled: if every handler declined ``op``
        """
        response = self.maybe_handle(op)
        if not response:
            raise Unhandled(op)
        return response.get

    def __iter__(self) -> Iterator[PartialHandler]:
        return iter(tuple(self._handlers))

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f'HandlerChain({self._handlers!r})'


class Chained(Generic[A]):
    """
    A computation bound to a handler chain under construction, as returned
    by `Effectful.begin_chain`

    Example:
        >>> (program()
        ...     .begin_chain()
        ...     .handle(StdoutHandler())
        ...     .handle(Calculator())
        ...     .run_checked())
        Right(60)
    """
    def __init__(self, computation: Effectful[A], chain: HandlerChain):
        self.computation = computation
        self.chain = chain

    def handle(
        self, handler: Union[PartialHandler, Handler, HandlerChain]
    ) -> Chained[A]:
        self.chain.handle(handler)
        return self

    def handle_total(self, handler: Handler) -> Chained[A]:
        self.chain.handle_total(handler)
        return self

    def handle_all(
        self, handlers: Iterable[Union[PartialHandler, Handler, HandlerChain]]
    ) -> Chained[A]:
        self.chain.handle_all(handlers)
        return self

    def run(self) -> A:
        return run(self.computation, self.chain)

    def run_checked(self) -> Either[Unhandled, A]:
        return run_checked(self.computation, self.chain)


class Handled(Generic[A]):
    """
    A computation bound to a single handler, as returned by
    `Effectful.handle`
    """
    def __init__(
        self,
        computation: Effectful[A],
        handler: Union[Handler, PartialHandler, HandlerChain]
    ):
        self.computation = computation
        self.handler = handler

    def run(self) -> A:
        """
        Run the computation, raising `Unhandled` if the handler cannot
        answer an operation
        """
        return run(self.computation, self.handler)

    def run_checked(self) -> Either[Unhandled, A]:
        """
        Run the computation, returning `Left(Unhandled(op))` if the handler
        cannot answer an operation
        """
        return run_checked(self.computation, self.handler)


__all__ = ['HandlerChain', 'Chained', 'Handled']

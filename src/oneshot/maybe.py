from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar, Union

from .immutable import Immutable

A = TypeVar('A', covariant=True)
B = TypeVar('B')


class Maybe_(Immutable, ABC):
    """
    Abstract super class for the answer of a partial handler: either a
    response (`Just`) or a decline (`Nothing`). A decline is distinct from
    responding with ``None``.
    Should not be instantiated directly. Use `Just` and `Nothing` instead.
    """
    @abstractmethod
    def and_then(self, f: Callable) -> Any:
        raise NotImplementedError()

    @abstractmethod
    def map(self, f: Callable) -> Any:
        """
        Map the response, leaving a decline untouched

        Example:
            >>> Just(2).map(str)
            Just('2')
            >>> Nothing().map(str)
            Nothing()

        Args:
            f: Function to apply to the response
        Return:
            `Just` wrapping the result of ``f``, or `Nothing`
        """
        raise NotImplementedError()

    @abstractmethod
    def or_else(self, default: Any) -> Any:
        """
        Example:
            >>> Just(1).or_else(2)
            1
            >>> Nothing().or_else(2)
            2

        Args:
            default: Value to return if this is a decline
        Return:
            the response if this is `Just`, ``default`` otherwise
        """
        raise NotImplementedError()

    @abstractmethod
    def __bool__(self) -> bool:
        raise NotImplementedError()


class Just(Maybe_, Generic[A]):
    """
    A response to an operation
    """
    get: A
    """
    The response
    """

    def and_then(self, f: Callable[[A], Maybe[B]]) -> Maybe[B]:
        return f(self.get)

    def map(self, f: Callable[[A], B]) -> Maybe[B]:
        return Just(f(self.get))

    def or_else(self, default: B) -> Union[A, B]:
        return self.get

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Just) and self.get == other.get

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f'Just({self.get!r})'


class Nothing(Maybe_):
    """
    A declined operation
    """
    def and_then(self, f: Callable[[Any], Maybe[B]]) -> Maybe[B]:
        return self

    def map(self, f: Callable[[Any], B]) -> Maybe[B]:
        return self

    def or_else(self, default: B) -> B:
        return default

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Nothing)

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'Nothing()'


Maybe = Union[Nothing, Just[A]]
"""
Type-alias for `Union[Nothing, Just[TypeVar('A')]]`
"""

__all__ = ['Maybe', 'Just', 'Nothing']

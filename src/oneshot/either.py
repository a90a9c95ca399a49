from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar, Union

from .immutable import Immutable

A = TypeVar('A', covariant=True)
B = TypeVar('B', covariant=True)
C = TypeVar('C')
D = TypeVar('D')


class Either_(Immutable, ABC):
    """
    Abstract class representing an outcome that is either
    a failure (`Left`) or a success (`Right`).
    Returned by `run_checked`, where the ``Left`` case holds the
    `Unhandled` operation. Should not be instantiated directly,
    use `Left` or `Right` instead
    """
    @abstractmethod
    def and_then(self, f):
        """
        Chain together functions producing either values, short circuiting
        on the first ``Left``

        Example:
            >>> f = lambda i: Right(1 / i) if i != 0 else Left('i was 0')
            >>> Right(1).and_then(f)
            Right(1.0)
            >>> Right(0).and_then(f)
            Left('i was 0')

        Args:
            f: The function to call
        Return:
            result of ``f`` if this is a ``Right``, this ``Left`` otherwise
        """
        raise NotImplementedError()

    @abstractmethod
    def __bool__(self) -> bool:
        """
        Example:
            >>> 'ok' if add(1, 1).run_checked(Calculator()) else 'missing'
            'ok'

        Return:
            True if this as a `Right`, False if this is a `Left`
        """
        raise NotImplementedError()

    @abstractmethod
    def or_else(self, default):
        """
        Get the result of this either value, or ``default`` if this is a
        ``Left``

        Example:
            >>> Right(1).or_else(2)
            1
            >>> Left(Unhandled(ReadLine())).or_else('')
            ''

        Args:
            default: Value to return if this is a ``Left`` value
        Return:
            the wrapped value if this is a ``Right``, ``default`` otherwise
        """
        raise NotImplementedError()

    @abstractmethod
    def map(self, f):
        """
        Map the ``Right`` value

        Example:
            >>> Right(1).map(str)
            Right('1')
            >>> Left('error').map(str)
            Left('error')

        Args:
            f: Function to apply to the result
        Return:
            `Right` wrapping the result of ``f`` if this is a ``Right``, \
            this ``Left`` otherwise
        """
        raise NotImplementedError()


class Right(Either_, Generic[A]):
    """
    Represents the ``Right`` case of ``Either``
    """
    get: A
    """
    The right result
    """

    def or_else(self, default: C) -> A:
        return self.get

    def map(self, f: Callable[[A], C]) -> Either[Any, C]:
        return Right(f(self.get))

    def and_then(self, f: Callable[[A], Either[B, C]]) -> Either[B, C]:
        return f(self.get)

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Right) and self.get == other.get

    def __bool__(self) -> bool:
        return True

    def __repr__(self):
        return f'Right({self.get!r})'


class Left(Either_, Generic[B]):
    """
    Represents the ``Left`` case of ``Either``
    """
    get: B
    """
    The left result
    """

    def or_else(self, default: C) -> C:
        return default

    def map(self, f: Callable[[A], C]) -> Either[B, C]:
        return self

    def and_then(self, f: Callable[[A], Either[B, C]]) -> Either[B, C]:
        return self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Left) and other.get == self.get

    def __bool__(self) -> bool:
        return False

    def __repr__(self):
        return f'Left({self.get!r})'


Either = Union[Left[B], Right[A]]
"""
Type-alias for `Union[Left[TypeVar('L')], Right[TypeVar('R')]]`
"""

__all__ = ['Either', 'Left', 'Right']

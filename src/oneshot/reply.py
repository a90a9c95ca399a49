"""
Write-once, read-once value cell that carries a handler's response back
into a suspended computation.
"""
import types
import typing
from typing import Any, Generic, Optional, Tuple, Type, TypeVar, Union

from .errors import DoubleFill, DoubleTake, NotFilled, TypeMismatch

A = TypeVar('A')

_NoneType = type(None)
_UNION_ORIGINS = (Union, getattr(types, 'UnionType', Union))


def type_name(t: Any) -> str:
    """
    Get a readable name for a type or type expression

    Example:
        >>> type_name(int)
        'int'
        >>> type_name(typing.List[int])
        'typing.List[int]'

    Args:
        t: type to name
    Return:
        name of ``t``
    """
    if t is None or t is _NoneType:
        return 'None'
    if isinstance(t, type) and typing.get_origin(t) is None:
        return t.__qualname__
    return repr(t)


def _accepted_types(expected: Any) -> Optional[Tuple[type, ...]]:
    # None means "accept anything"
    if expected is object or expected is Any:
        return None
    if expected is None:
        return (_NoneType, )
    origin = typing.get_origin(expected)
    if origin in _UNION_ORIGINS:
        accepted: Tuple[type, ...] = ()
        for arg in typing.get_args(expected):
            arg_types = _accepted_types(arg)
            if arg_types is None:
                return None
            accepted += arg_types
        return accepted
    if origin is not None:
        return _accepted_types(origin)
    if isinstance(expected, type):
        return (expected, )
    raise TypeError(f'cannot check replies against {expected!r}')


def matches(tag: type, expected: Any) -> bool:
    """
    Test whether a reply tagged with ``tag`` satisfies ``expected``

    Example:
        >>> matches(int, int)
        True
        >>> matches(str, typing.Optional[int])
        False

    Args:
        tag: the type recorded when the reply was filled
        expected: the type requested when the reply is taken
    Return:
        ``True`` if the reply may be taken as ``expected``
    """
    accepted = _accepted_types(expected)
    if accepted is None:
        return True
    return issubclass(tag, accepted)


class Reply(Generic[A]):
    """
    One-shot container for the response to a single operation.
    A reply is filled exactly once by the handler that accepts the
    operation and taken exactly once by the computation when it resumes.

    Example:
        >>> reply = Reply()
        >>> reply.fill(5)
        >>> reply.take(int)
        5
        >>> reply.take(int)
        DoubleTake: reply was already taken
    """
    __slots__ = ('_value', '_tag', '_filled', '_taken')

    def __init__(self):
        self._value: Any = None
        self._tag: Optional[type] = None
        self._filled = False
        self._taken = False

    @property
    def filled(self) -> bool:
        return self._filled

    @property
    def taken(self) -> bool:
        return self._taken

    @property
    def tag(self) -> Optional[type]:
        return self._tag

    def fill(self, value: A, tag: Optional[type] = None) -> None:
        """
        Store the response ``value`` in this reply

        Args:
            value: the response
            tag: the type witness recorded for ``value``. \
                Defaults to ``type(value)``
        """
        if self._filled:
            raise DoubleFill()
        self._value = value
        self._tag = type(value) if tag is None else tag
        self._filled = True

    def take(self, expected: Union[Type[A], Any] = object) -> A:
        """
        Remove and return the response, checking its type witness
        against ``expected``

        Args:
            expected: the type the caller expects the response to have
        Return:
            the response
        """
        if self._taken:
            raise DoubleTake()
        if not self._filled:
            raise NotFilled()
        if not matches(self._tag, expected):
            raise TypeMismatch(type_name(expected), type_name(self._tag))
        value = self._value
        self._value = None
        self._taken = True
        return value

    def __repr__(self) -> str:
        if self._taken:
            return 'Reply(<taken>)'
        if self._filled:
            return f'Reply({self._value!r})'
        return 'Reply(<empty>)'


__all__ = ['Reply', 'matches', 'type_name']

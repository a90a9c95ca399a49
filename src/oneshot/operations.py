from typing import Any, ClassVar, Optional, Type

from .immutable import Immutable

_UNSET = object()


class Operation(Immutable):
    """
    Base class for operation values. Families of operations are
    declared as direct subclasses, and concrete operations subclass a family
    while declaring the type of their response with the ``returns``
    class keyword.

    Example:
        >>> class Math(Operation):
        ...     pass
        >>> class Add(Math, returns=int):
        ...     a: int
        ...     b: int
        >>> Add(2, 3)
        Add(a=2, b=3)
        >>> response_type(Add(2, 3))
        <class 'int'>
    """
    __returns__: ClassVar[Any] = object

    def __init_subclass__(cls, returns: Any = _UNSET, **kwargs):
        super().__init_subclass__(**kwargs)
        if returns is not _UNSET:
            cls.__returns__ = type(None) if returns is None else returns


def response_type(op: Any) -> Any:
    """
    Get the declared response type of ``op``, or ``object`` when
    ``op`` is not an `Operation`

    Args:
        op: operation value
    Return:
        type that a reply to ``op`` must have
    """
    if isinstance(op, Operation):
        return type(op).__returns__
    return object


def family_of(op: Any) -> Optional[Type[Operation]]:
    """
    Get the family an operation belongs to, i.e the direct subclass of
    `Operation` it derives from

    Example:
        >>> family_of(Add(2, 3))
        <class 'Math'>

    Args:
        op: operation value
    Return:
        the family of ``op``, or ``None`` if it is not an `Operation`
    """
    if not isinstance(op, Operation):
        return None
    for cls in type(op).__mro__:
        if Operation in cls.__bases__:
            return cls
    return None


__all__ = ['Operation', 'response_type', 'family_of']

from dataclasses import dataclass
from typing import TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class Immutable:
    """
    Super class that turns subclasses into frozen dataclasses.
    Fields are declared as class annotations.

    Example:
        >>> class Print(Immutable):
        ...     message: str
        >>> op = Print('hello')
        >>> op.message = 'goodbye'
        FrozenInstanceError: cannot assign to field 'message'
    """
    def __init_subclass__(
        cls, init=True, repr=True, eq=True, order=False, **kwargs
    ):
        super().__init_subclass__(**kwargs)
        return dataclass(
            frozen=True, init=init, repr=repr, eq=eq, order=order
        )(cls)

    def clone(self: T, **kwargs) -> T:
        """
        Make a copy of an instance, overwriting fields given by ``kwargs``

        Example:
            >>> class Print(Immutable):
            ...     message: str
            >>> Print('hello').clone(message='goodbye')
            Print(message='goodbye')

        Args:
            kwargs: fields to overwrite
        Return:
            New instance of the same type with copied and overwritten fields
        """
        attrs = self.__dict__.copy()
        attrs.update(kwargs)
        return type(self)(**attrs)  # type: ignore

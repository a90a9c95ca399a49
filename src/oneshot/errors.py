from typing import Any, Optional


class EffectError(Exception):
    """
    Base class for all errors raised by the effect runtime
    """


class Unhandled(EffectError):
    """
    Raised (by `run`) or returned (by `run_checked`) when no handler
    accepted an operation. This is the only runtime error meant to be
    handled by application code.

    Example:
        >>> Unhandled(Add(1, 2)) == Unhandled(Add(1, 2))
        True

    Attributes:
        op: The operation that was performed but not handled
    """
    def __init__(self, op: Any):
        super().__init__(f'no handler accepted operation {op!r}')
        self.op = op

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Unhandled) and other.op == self.op

    def __hash__(self) -> int:
        return hash((Unhandled, repr(self.op)))

    def __repr__(self) -> str:
        return f'Unhandled({self.op!r})'


class ProtocolError(EffectError):
    """
    Base class for violations of the one-shot reply protocol. These indicate
    a broken handler contract or a misused computation and are never
    recovered by the runtime.
    """


class TypeMismatch(ProtocolError):
    """
    A handler replied with a value whose type does not match the type
    expected where the operation was performed.
    """
    def __init__(self, expected: str, actual: str, op: Any = None):
        self.expected = expected
        self.actual = actual
        self.op = op
        message = f'expected {expected!r} but handler replied with {actual!r}'
        if op is not None:
            message += f' for operation {op!r}'
        super().__init__(message)

    def with_op(self, op: Any) -> 'TypeMismatch':
        return TypeMismatch(self.expected, self.actual, op)


class DoubleFill(ProtocolError):
    def __init__(self, op: Optional[Any] = None):
        message = 'reply was already filled'
        if op is not None:
            message += f' for operation {op!r}'
        super().__init__(message)


class DoubleTake(ProtocolError):
    def __init__(self):
        super().__init__('reply was already taken')


class NotFilled(ProtocolError):
    def __init__(self):
        super().__init__('reply was taken before it was filled')


class AlreadyCompleted(ProtocolError):
    def __init__(self):
        super().__init__('computation has already completed')


class AlreadyStarted(ProtocolError):
    def __init__(self, what: str = 'computation has already been started'):
        super().__init__(what)


__all__ = [
    'EffectError',
    'Unhandled',
    'ProtocolError',
    'TypeMismatch',
    'DoubleFill',
    'DoubleTake',
    'NotFilled',
    'AlreadyCompleted',
    'AlreadyStarted'
]

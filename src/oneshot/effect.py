from typing import Any, Generator, Generic, Optional, TypeVar

from .errors import ProtocolError, TypeMismatch
from .operations import _UNSET, response_type
from .reply import Reply

Op = TypeVar('Op')


class Effect(Generic[Op]):
    """
    Envelope yielded by a suspended computation: one operation paired with
    the empty `Reply` its handler must fill. An envelope is created once per
    performed operation and is never reused.

    Example:
        >>> effect = Effect(Add(2, 3))
        >>> effect.op
        Add(a=2, b=3)
        >>> effect.reply
        Reply(<empty>)
    """
    __slots__ = ('_op', '_reply')

    def __init__(self, op: Op):
        self._op = op
        self._reply: Reply = Reply()

    @property
    def op(self) -> Op:
        return self._op

    @property
    def reply(self) -> Reply:
        return self._reply

    def fill(self, value: Any, tag: Optional[type] = None) -> None:
        self._reply.fill(value, tag)

    def take(self, expected: Any = object) -> Any:
        try:
            return self._reply.take(expected)
        except TypeMismatch as e:
            raise e.with_op(self._op) from None

    def __repr__(self) -> str:
        return f'Effect({self._op!r})'


def perform(op: Any,
            expected: Any = _UNSET) -> Generator[Effect, Reply, Any]:
    """
    Perform ``op`` from inside a generator based computation.
    Suspends with a fresh `Effect` and, when resumed with the filled
    `Reply`, returns the response.

    Example:
        >>> def body():
        ...     total = yield from perform(Add(2, 3))
        ...     return (yield from perform(Multiply(total, 4)))
        >>> Effectful(body).run(Calculator())
        20

    Args:
        op: the operation to perform
        expected: type the response must have. Defaults to the type \
            declared by ``op`` (see `Operation`)
    Return:
        generator that suspends once and returns the response to ``op``
    """
    if expected is _UNSET:
        expected = response_type(op)
    effect: Effect = Effect(op)
    reply = yield effect
    if reply is not effect.reply:
        raise ProtocolError(f'resumed with a foreign reply for {op!r}')
    return effect.take(expected)


__all__ = ['Effect', 'perform']

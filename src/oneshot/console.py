from __future__ import annotations

from typing import Any, Iterable, List

from .effectful import Effectful, perform_op
from .errors import Unhandled
from .operations import Operation


class ConsoleOp(Operation):
    """
    Family of operations that print to and read from a console
    """


class Print(ConsoleOp, returns=None):
    message: str = ''


class ReadLine(ConsoleOp, returns=str):
    prompt: str = ''


class Console:
    """
    Handler that prints to stdout and reads from stdin

    Example:
        >>> print_line('Hello!').run(Console())
        Hello!
    """
    def handle(self, op: Any) -> Any:
        if isinstance(op, Print):
            print(op.message)
            return None
        if isinstance(op, ReadLine):
            return input(op.prompt)
        raise Unhandled(op)

    def __repr__(self) -> str:
        return 'Console()'


class MockConsole:
    """
    Handler that records printed messages and answers reads from a fixed
    list of responses. When the responses run out, reads get ``default``.

    Example:
        >>> console = MockConsole(['Alice'])
        >>> read_line('Name? ').run(console)
        'Alice'
        >>> print_line('Hi Alice').run(console)
        >>> console.printed
        ['Hi Alice']
    """
    def __init__(self, responses: Iterable[str] = (), default: str = ''):
        self.responses = list(responses)
        self.default = default
        self.printed: List[str] = []
        self.prompts: List[str] = []
        self._index = 0

    def handle(self, op: Any) -> Any:
        if isinstance(op, Print):
            self.printed.append(op.message)
            return None
        if isinstance(op, ReadLine):
            self.prompts.append(op.prompt)
            if self._index < len(self.responses):
                response = self.responses[self._index]
                self._index += 1
                return response
            return self.default
        raise Unhandled(op)

    def __repr__(self) -> str:
        return f'MockConsole({self.responses!r})'


def print_line(message: str = '') -> Effectful[None]:
    """
    Get a computation that prints ``message``

    Args:
        message: Message to print
    Return:
        computation performing `Print`
    """
    return perform_op(Print(message))


def read_line(prompt: str = '') -> Effectful[str]:
    """
    Get a computation that reads a line

    Example:
        >>> greeting = lambda name: f'Hello {name}!'
        >>> read_line('What is your name? ').map(greeting).run(Console())
        What is your name?  # input e.g 'John Doe'
        'Hello John Doe!'

    Args:
        prompt: prompt to display
    Return:
        computation performing `ReadLine`
    """
    return perform_op(ReadLine(prompt))


__all__ = [
    'ConsoleOp',
    'Print',
    'ReadLine',
    'Console',
    'MockConsole',
    'print_line',
    'read_line'
]

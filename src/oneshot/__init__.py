from __future__ import annotations

from . import console, logging, state  # noqa
from .chain import Chained, Handled, HandlerChain  # noqa
from .effect import Effect, perform  # noqa
from .effectful import *  # noqa
from .either import Either, Left, Right  # noqa
from .engine import dispatch, run, run_checked, submit  # noqa
from .errors import *  # noqa
from .handlers import *  # noqa
from .immutable import Immutable  # noqa
from .maybe import Just, Maybe, Nothing  # noqa
from .operations import Operation, family_of, response_type  # noqa
from .reply import Reply  # noqa


def default_handlers() -> HandlerChain:
    """
    Chain of live handlers for the operation families shipped with oneshot.

    Example:
        >>> from oneshot import console, default_handlers
        >>> console.print_line('Hello!').run(default_handlers())
        Hello!

    Return:
        `HandlerChain` answering console operations with `console.Console` \
        and log operations with `logging.Logging`
    """
    return HandlerChain([
        only(console.ConsoleOp, console.Console()),
        only(logging.LogOp, logging.Logging())
    ])

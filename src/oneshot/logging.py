"""
Operations for logging from inside computations, with a handler backed by
the built-in `logging` module.
"""
from __future__ import annotations

import logging
from typing import Any, ClassVar, List, Optional, Tuple

from .effectful import Effectful, perform_op
from .errors import Unhandled
from .operations import Operation


class LogOp(Operation, returns=None):
    """
    Family of operations that emit a log record
    """
    message: str
    level: ClassVar[int] = logging.NOTSET


class Debug(LogOp):
    level: ClassVar[int] = logging.DEBUG


class Info(LogOp):
    level: ClassVar[int] = logging.INFO


class Warning(LogOp):
    level: ClassVar[int] = logging.WARNING


class Error(LogOp):
    level: ClassVar[int] = logging.ERROR


class Critical(LogOp):
    level: ClassVar[int] = logging.CRITICAL


class Logging:
    """
    Handler that forwards log operations to a built-in `logging.Logger`

    Example:
        >>> import logging
        >>> info('hello!').run(Logging(logging.getLogger('foo')))
        INFO:foo:hello!
    """
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logging.getLogger() if logger is None else logger

    def handle(self, op: Any) -> None:
        if not isinstance(op, LogOp):
            raise Unhandled(op)
        self.logger.log(op.level, op.message)

    def __repr__(self) -> str:
        return f'Logging({self.logger.name!r})'


class MemoryLog:
    """
    Handler that keeps log operations as ``(level name, message)`` pairs

    Example:
        >>> log = MemoryLog()
        >>> warning('careful').run(log)
        >>> log.records
        [('WARNING', 'careful')]
    """
    def __init__(self):
        self.records: List[Tuple[str, str]] = []

    def handle(self, op: Any) -> None:
        if not isinstance(op, LogOp):
            raise Unhandled(op)
        self.records.append((logging.getLevelName(op.level), op.message))

    def __repr__(self) -> str:
        return f'MemoryLog({len(self.records)} records)'


def debug(message: str) -> Effectful[None]:
    return perform_op(Debug(message))


def info(message: str) -> Effectful[None]:
    return perform_op(Info(message))


def warning(message: str) -> Effectful[None]:
    return perform_op(Warning(message))


def error(message: str) -> Effectful[None]:
    return perform_op(Error(message))


def critical(message: str) -> Effectful[None]:
    return perform_op(Critical(message))


__all__ = [
    'LogOp',
    'Debug',
    'Info',
    'Warning',
    'Error',
    'Critical',
    'Logging',
    'MemoryLog',
    'debug',
    'info',
    'warning',
    'error',
    'critical'
]

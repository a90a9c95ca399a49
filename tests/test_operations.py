from typing import Optional

import pytest

from oneshot.console import ConsoleOp, Print, ReadLine
from oneshot.operations import Operation, family_of, response_type

from .mocks import Add, GetString, Math, Process, Stage


class Lookup(Operation, returns=Optional[str]):
    key: str


class TestOperation:
    def test_operations_are_values(self):
        assert Add(2, 3) == Add(2, 3)
        assert Add(2, 3) != Add(3, 2)
        assert hash(Add(2, 3)) == hash(Add(2, 3))
        assert repr(Add(2, 3)) == 'Add(a=2, b=3)'

    def test_operations_are_immutable(self):
        op = Add(2, 3)
        with pytest.raises(AttributeError):
            op.a = 4

    def test_clone(self):
        assert Add(2, 3).clone(b=4) == Add(2, 4)

    def test_response_type(self):
        assert response_type(Add(2, 3)) is int
        assert response_type(GetString()) is str
        assert response_type(Print('hi')) is type(None)
        assert response_type(ReadLine()) is str
        assert response_type(Lookup('key')) == Optional[str]

    def test_response_type_of_plain_values(self):
        assert response_type('not an operation') is object

    def test_response_type_is_inherited(self):
        class Sum(Add):
            pass

        assert response_type(Sum(1, 2)) is int

    def test_family_of(self):
        assert family_of(Add(2, 3)) is Math
        assert family_of(Process(1)) is Stage
        assert family_of(Print('hi')) is ConsoleOp
        assert family_of('not an operation') is None

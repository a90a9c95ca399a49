from unittest import mock

import pytest

from oneshot.console import (Console, MockConsole, Print, ReadLine,
                             print_line, read_line)
from oneshot.effectful import effectful
from oneshot.errors import Unhandled

from .mocks import Add


@effectful
def greet():
    name = yield read_line('name? ')
    yield print_line(f'Hello {name}!')
    return name


class TestConsole:
    @mock.patch('oneshot.console.print', create=True)
    def test_print_line(self, mocked_print):
        assert print_line('Hello, world!').run(Console()) is None
        mocked_print.assert_called_once_with('Hello, world!')

    @mock.patch('oneshot.console.input', create=True, return_value='Alice')
    def test_read_line(self, mocked_input):
        assert read_line('name? ').run(Console()) == 'Alice'
        mocked_input.assert_called_once_with('name? ')

    def test_unknown_operation(self):
        with pytest.raises(Unhandled):
            Console().handle(Add(1, 1))


class TestMockConsole:
    def test_program(self):
        console = MockConsole(['Alice'])
        assert greet().run(console) == 'Alice'
        assert console.printed == ['Hello Alice!']
        assert console.prompts == ['name? ']

    def test_responses_run_out(self):
        console = MockConsole(['first'], default='default')
        assert console.handle(ReadLine()) == 'first'
        assert console.handle(ReadLine()) == 'default'

    def test_print(self):
        console = MockConsole()
        assert console.handle(Print('message')) is None
        assert console.printed == ['message']

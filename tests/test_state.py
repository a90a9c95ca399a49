import pytest
from hypothesis import given
from hypothesis.strategies import integers, lists

from oneshot.effectful import effectful, for_each
from oneshot.errors import Unhandled
from oneshot.state import StateHandler, get, modify, put

from .mocks import Add


@effectful
def increment():
    n = yield get()
    yield put(n + 1)
    return n


class TestState:
    def test_get(self):
        assert get().run(StateHandler('state')) == 'state'

    def test_put(self):
        handler = StateHandler()
        assert put('state').run(handler) is None
        assert handler.state == 'state'
        assert handler.history == [None, 'state']

    def test_modify(self):
        handler = StateHandler(1)
        assert modify(lambda s: s * 10).run(handler) == 10
        assert handler.state == 10

    def test_program(self):
        handler = StateHandler(0)
        assert increment().discard_and_then(increment()).run(handler) == 1
        assert handler.state == 2
        assert handler.history == [0, 1, 2]

    @given(lists(integers(), max_size=10))
    def test_puts_are_applied_in_order(self, values):
        handler = StateHandler()
        for_each(put, values).run(handler)
        assert handler.history == [None] + values

    def test_unknown_operation(self):
        with pytest.raises(Unhandled):
            StateHandler().handle(Add(1, 1))

import pytest

from oneshot.errors import Unhandled
from oneshot.handlers import (Handler, PartialHandler, Total, as_partial, only,
                              partial, total)
from oneshot.maybe import Just, Nothing

from .mocks import Add, Calculator, GetNumber, Math, MathOnly, Process


class TestContracts:
    def test_protocols(self):
        assert isinstance(Calculator(), Handler)
        assert not isinstance(Calculator(), PartialHandler)
        assert isinstance(MathOnly(), PartialHandler)

    def test_total_never_declines(self):
        assert Total(Calculator()).maybe_handle(Add(2, 3)) == Just(5)

    def test_total_propagates_unhandled(self):
        with pytest.raises(Unhandled) as info:
            Total(Calculator()).maybe_handle(Process(1))
        assert info.value.op == Process(1)

    def test_as_partial(self):
        math_only = MathOnly()
        assert as_partial(math_only) is math_only
        assert isinstance(as_partial(Calculator()), Total)

    def test_as_partial_rejects_non_handlers(self):
        with pytest.raises(TypeError):
            as_partial(object())

    def test_none_response_is_not_a_decline(self):
        h = partial(lambda op: Just(None))
        assert h.maybe_handle(Add(1, 1)) == Just(None)
        assert Just(None) != Nothing()


class TestOnly:
    def test_declines_other_families(self):
        calculator = Calculator()
        h = only(Math, calculator)
        assert h.maybe_handle(GetNumber()) == Nothing()
        assert calculator.ops == []

    def test_forwards_family(self):
        assert only(Math, Calculator()).maybe_handle(Add(1, 2)) == Just(3)

    def test_forwards_to_partial_handler(self):
        h = only(Math, partial(lambda op: Nothing()))
        assert h.maybe_handle(Add(1, 2)) == Nothing()

    def test_tuple_of_families(self):
        h = only((Math, Process), total(lambda op: 'handled'))
        assert h.maybe_handle(Process(1)) == Just('handled')
        assert h.maybe_handle(GetNumber()) == Nothing()


class TestFunctions:
    def test_partial(self):
        evens = partial(
            lambda op: Just(op.n * op.n) if op.n % 2 == 0 else Nothing()
        )
        assert evens.maybe_handle(Process(4)) == Just(16)
        assert evens.maybe_handle(Process(3)) == Nothing()

    def test_total(self):
        h = total(lambda op: op.a + op.b)
        assert isinstance(h, Handler)
        assert h.handle(Add(1, 2)) == 3

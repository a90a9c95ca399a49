import pytest
from hypothesis import given
from hypothesis.strategies import integers

from oneshot.chain import HandlerChain
from oneshot.console import ConsoleOp, MockConsole, print_line
from oneshot.effectful import Effectful
from oneshot.either import Left, Right
from oneshot.errors import Unhandled
from oneshot.handlers import Total, only, partial
from oneshot.maybe import Just, Nothing

from .mocks import (Add, AddTen, Calculator, Constant, Math, MathOnly,
                    MultiplyTwo, Process, Square, add, process_number)


def body_print_then_add():
    yield from print_line('adding')
    return (yield from add(2, 3))


class TestHandlerChain:
    def test_first_match_wins(self):
        a, b = Constant('a'), Constant('b')
        chain = HandlerChain([a, b])
        assert chain.dispatch(Add(1, 1)) == 'a'
        assert a.calls == 1
        assert b.calls == 0

    def test_declines_fall_through(self):
        chain = HandlerChain([MathOnly(), Constant('fallback')])
        assert chain.dispatch(Process(1)) == 'fallback'
        assert chain.dispatch(Add(1, 1)) == 2

    def test_unhandled(self):
        chain = HandlerChain([MathOnly()])
        with pytest.raises(Unhandled) as info:
            chain.dispatch(Process(1))
        assert info.value.op == Process(1)
        assert chain.maybe_handle(Process(1)) == Nothing()

    def test_empty_chain(self):
        with pytest.raises(Unhandled):
            HandlerChain().dispatch(Add(1, 1))

    def test_flattening(self):
        add_ten, multiply_two, square = AddTen(), MultiplyTwo(), Square()
        first = HandlerChain().handle(add_ten).handle(multiply_two)
        second = HandlerChain().handle(square)
        chain = HandlerChain().handle(first).handle(second)
        assert list(chain) == [add_ten, multiply_two, square]
        assert len(chain) == 3
        assert not any(isinstance(h, HandlerChain) for h in chain)

    def test_flattening_nested_chains(self):
        a, b, c = Constant('a'), Constant('b'), Constant('c')
        inner = HandlerChain([a, HandlerChain([b])])
        chain = HandlerChain([HandlerChain([inner]), c])
        assert list(chain) == [a, b, c]

    def test_flattening_copies_members(self):
        a, b = Constant('a'), Constant('b')
        inner = HandlerChain([a])
        chain = HandlerChain().handle(inner)
        inner.handle(b)
        assert list(chain) == [a]

    @given(integers(min_value=-1000, max_value=1000))
    def test_flattening_dispatches_like_flat_chain(self, n):
        nested = (
            HandlerChain()
            .handle(HandlerChain([AddTen(), MultiplyTwo()]))
            .handle(Square())
        )
        flat = (
            HandlerChain()
            .handle(AddTen())
            .handle(MultiplyTwo())
            .handle(Square())
        )
        assert nested.maybe_handle(Process(n)) == flat.maybe_handle(Process(n))

    def test_third_handler_reached_only_after_declines(self):
        add_ten, multiply_two, square = AddTen(), MultiplyTwo(), Square()
        chain = HandlerChain([HandlerChain([add_ten, multiply_two]),
                              HandlerChain([square])])
        assert chain.dispatch(Process(5)) == 15
        assert square.seen == []
        assert chain.dispatch(Process(150)) == 300
        assert square.seen == []
        assert chain.dispatch(Process(-4)) == 16
        assert square.seen == [Process(-4)]

    def test_order_matters(self):
        chain = HandlerChain([Square(), AddTen(), MultiplyTwo()])
        assert chain.dispatch(Process(4)) == 16
        chain = HandlerChain([AddTen(), MultiplyTwo(), Square()])
        assert chain.dispatch(Process(4)) == 14

    def test_handle_total(self):
        chain = HandlerChain().handle_total(Calculator())
        [handler] = chain
        assert isinstance(handler, Total)
        assert chain.dispatch(Add(2, 2)) == 4

    def test_total_handlers_are_wrapped(self):
        chain = HandlerChain().handle(Calculator())
        [handler] = chain
        assert isinstance(handler, Total)

    def test_handle_all_preserves_order(self):
        handlers = [Constant(i) for i in range(5)]
        chain = HandlerChain().handle_all(iter(handlers))
        assert list(chain) == handlers

    def test_invalid_partial_response(self):
        chain = HandlerChain([partial(lambda op: 1)])
        with pytest.raises(TypeError):
            chain.dispatch(Add(1, 1))


class TestChained:
    def test_console_and_math(self):
        console = MockConsole()
        math = MathOnly()

        def body():
            yield from print_line('adding')
            return (yield from add(2, 3))

        result = (
            Effectful(body)
            .begin_chain()
            .handle(only(ConsoleOp, console))
            .handle(math)
            .run_checked()
        )
        assert result == Right(5)
        assert console.printed == ['adding']
        assert math.ops == [Add(2, 3)]

    def test_missing_family_is_unhandled(self):
        console = MockConsole()

        def body():
            yield from print_line('adding')
            return (yield from add(2, 3))

        result = (
            Effectful(body)
            .begin_chain()
            .handle(only(ConsoleOp, console))
            .run_checked()
        )
        assert result == Left(Unhandled(Add(2, 3)))
        assert result.get.op == Add(2, 3)
        assert console.printed == ['adding']

    def test_merged_sub_chains(self):
        result = (
            process_number(4)
            .begin_chain()
            .handle(HandlerChain([AddTen(), MultiplyTwo()]))
            .handle(HandlerChain([Square()]))
            .run()
        )
        assert result == 14

    def test_handle_all_and_total(self):
        result = (
            add(1, 2)
            .begin_chain()
            .handle_all([MathOnly()])
            .handle_total(Calculator())
            .run()
        )
        assert result == 3

    def test_handle_all_on_computation(self):
        console = MockConsole()
        math = MathOnly()
        result = (
            Effectful(body_print_then_add)
            .handle_all([only(ConsoleOp, console), math])
            .run_checked()
        )
        assert result == Right(5)
        assert console.printed == ['adding']
        assert math.ops == [Add(2, 3)]

    def test_handle_all_can_be_extended(self):
        result = (
            add(1, 2)
            .handle_all([HandlerChain([MathOnly()])])
            .handle_total(Calculator())
            .run()
        )
        assert result == 3

    def test_run_raises_unhandled(self):
        with pytest.raises(Unhandled):
            add(1, 2).begin_chain().handle(Square()).run()

    def test_family_filter(self):
        chain = HandlerChain([only(Math, MathOnly()), Constant('other')])
        assert chain.maybe_handle(Process(1)) == Just('other')

import logging
from unittest import mock

from oneshot import default_handlers, logging as effect_logging
from oneshot.console import print_line
from oneshot.effectful import effectful
from oneshot.either import Left
from oneshot.errors import Unhandled

from .mocks import Add, MathOnly


@effectful
def report():
    yield effect_logging.info('reporting')
    yield print_line('report')


class TestDefaultHandlers:
    @mock.patch('oneshot.console.print', create=True)
    def test_console_and_logging(self, mocked_print, caplog):
        with caplog.at_level(logging.INFO):
            assert report().run(default_handlers()) is None
        mocked_print.assert_called_once_with('report')
        assert ('root', logging.INFO, 'reporting') in caplog.record_tuples

    def test_other_families_are_unhandled(self):
        result = default_handlers().maybe_handle(Add(1, 1))
        assert not result

    def test_chain_is_fresh(self):
        chain = default_handlers()
        chain.handle(MathOnly())
        assert len(default_handlers()) == 2

    def test_run_checked(self):
        from .mocks import add
        assert add(1, 1).run_checked(default_handlers()) == Left(
            Unhandled(Add(1, 1))
        )

import threading
import time
import unittest
from unittest.mock import Mock, call

import timeout_decorator
from hamcrest import assert_that, is_

from clusterix.protocol.reader_test import debug_timeout
from clusterix.support.events import Signal


class SignalTest(unittest.TestCase):

    def test_not_fired_initially(self):
        sut = Signal("test")
        assert_that(sut.fired, is_(False))

    def test_fire(self):
        sut = Signal()
        assert_that(sut.fire(), is_(True))
        assert_that(sut.fired, is_(True))

    def test_fire_twice_is_no_op(self):
        sut = Signal()
        handler = Mock()
        sut.when_fired(handler)
        sut.fire()
        assert_that(sut.fire(), is_(False))
        assert_that(sut.fired, is_(True))
        handler.assert_called_once_with()

    def test_handlers_run_in_order(self):
        sut = Signal()
        calls = Mock()
        sut.when_fired(calls.first)
        sut.when_fired(calls.second)
        calls.assert_not_called()
        sut.fire()
        assert_that(calls.mock_calls, is_([call.first(), call.second()]))

    def test_handler_added_after_firing_runs_immediately(self):
        sut = Signal()
        sut.fire()
        handler = Mock()
        sut.when_fired(handler)
        handler.assert_called_once_with()

    def test_failing_handler_does_not_stop_others(self):
        sut = Signal()
        handler = Mock()
        sut.when_fired(Mock(side_effect=RuntimeError("failed")))
        sut.when_fired(handler)
        sut.fire()
        handler.assert_called_once_with()

    def test_wait_timeout(self):
        assert_that(Signal().wait(0.01), is_(False))

    @timeout_decorator.timeout(debug_timeout(2))
    def test_wait_for_other_thread(self):
        sut = Signal()
        thread = threading.Thread(target=sut.fire)
        thread.start()
        assert_that(sut.wait(), is_(True))
        thread.join()

    @timeout_decorator.timeout(debug_timeout(2))
    def test_concurrent_fire_runs_handlers_once(self):
        sut = Signal()
        handler = Mock()
        sut.when_fired(handler)
        threads = [threading.Thread(target=sut.fire) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        handler.assert_called_once_with()

    @timeout_decorator.timeout(debug_timeout(2))
    def test_wait_returns_after_handlers_completed(self):
        sut = Signal()
        seen = []

        def slow_handler():
            time.sleep(0.2)
            seen.append(1)

        sut.when_fired(slow_handler)
        thread = threading.Thread(target=sut.fire)
        thread.start()
        assert_that(sut.wait(), is_(True))
        assert_that(seen, is_([1]))
        thread.join()

    def test_fired_while_handlers_run(self):
        sut = Signal()
        states = []
        sut.when_fired(lambda: states.append((sut.fired, sut.wait(0))))
        sut.fire()
        assert_that(states, is_([(True, False)]))
        assert_that(sut.wait(0), is_(True))

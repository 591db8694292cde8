from unittest import TestCase

from hamcrest import is_, assert_that, greater_than

from clusterix.support.retry_strategy import PeriodRetryStrategy, RetryStrategy


class RetryStrategyTest(TestCase):
    def test_is_zero(self):
        assert_that(RetryStrategy()(), is_(0))

    def test_restart_has_no_effect(self):
        sut = RetryStrategy()
        sut.restart(123)
        assert_that(sut(124), is_(0))


class PeriodRetryStrategyTest(TestCase):

    def setUp(self):
        self.retry_period = 60

    def test_will_retry_immediately_by_default(self):
        retry = PeriodRetryStrategy(self.retry_period)
        time = 123
        assert_that(retry(time), is_(0))
        assert_that(retry(time), is_(self.retry_period))

    def test_time_decreases_and_restarts(self):
        retry = PeriodRetryStrategy(self.retry_period)
        assert_that(retry(0), is_(0))       # 0, so period restarts
        assert_that(retry(50), is_(10))
        assert_that(retry(55), is_(5))
        assert_that(retry(65), is_(-5))     # <0, restart, without accumulating the overshoot
        assert_that(retry(65), is_(60))

    def test_restart_waits_a_full_period(self):
        retry = PeriodRetryStrategy(self.retry_period)
        assert_that(retry(0), is_(0))
        retry.restart(500)                  # e.g. a connection established at 0 was lost at 500
        assert_that(retry(500), is_(60))
        assert_that(retry(530), is_(30))
        assert_that(retry(560), is_(0))

    def test_defaults_to_current_time(self):
        retry = PeriodRetryStrategy(self.retry_period)
        assert_that(retry(), is_(0))
        assert_that(retry(), greater_than(59))

import time

from clusterix.support.mixins import CommonEqualityMixin


class RetryStrategy:
    def __call__(self, current_time=None):
        return 0

    def restart(self, current_time=None):
        """ notes that the retried operation has just ended, so the next retry is measured from now. """


class PeriodRetryStrategy(RetryStrategy, CommonEqualityMixin):

    def __init__(self, retry_period, last_tried=None):
        """
        :param retry_period: The retry period in seconds.
        """
        self.last_tried = last_tried         # the time last tried
        self.retry_period = retry_period

    def __call__(self, current_time=None):
        """return the length of time until an operation should be retried
            :param current_time: the current time, defaults to time.time()
        """
        if current_time is None:
            current_time = time.time()
        result = self._time_to_retry(current_time)
        if result <= 0:
            self.last_tried = current_time
        return result

    def restart(self, current_time=None):
        """
        Restarts the retry period, e.g. when a connection that was established has been lost.
        """
        self.last_tried = time.time() if current_time is None else current_time

    def _time_to_retry(self, current_time):
        """
        Determines how long until the next try
        :param current_time: The current time.
        :return: the number of seconds to wait, zero or less when the operation should be retried now.
        """
        return 0 if self.last_tried is None else self.retry_period - (current_time - self.last_tried)

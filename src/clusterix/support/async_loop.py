"""
Runs a repeated unit of work on a background thread until it is stopped.
"""
import logging
import threading
import time

logger = logging.getLogger(__name__)


class AsyncLoop:
    """ Continually runs a given function on a background thread.
        Exceptions are logged and posted to a given handler
        The background thread is registered as a daemon.
    """

    def __init__(self, fn=None, args=(), name=None, log=logger):
        """
        :param fn the function to run
        :param args arguments to pass to fn
        :param name the name given to the background thread
        """
        self.fn = fn
        self.args = args
        self.name = name
        self.stop_event = threading.Event()
        self.background_thread = None
        self.logger = log

    def start(self):
        """
        Starts the background thread. Calling start on a loop that is already started has no effect.
        """
        if self.background_thread is None:
            t = threading.Thread(target=self._run, name=self.name, daemon=True)
            self.background_thread = t
            t.start()

    def exception_handler(self, e):
        self.logger.exception(e)

    def _run(self):
        """ The processing loop for the background thread.
             Invokes the callable for as long as the stop signal is not received.
        """
        self._do(self.startup)
        while self.running():
            self._do(self.loop)
        self._do(self.shutdown)
        self.logger.debug("background thread %s exiting", self.name)

    def _do(self, callme):
        """ runs a function and captures any exceptions """
        try:
            time.sleep(0)
            callme()
        except Exception as e:
            time.sleep(0)
            self.exception_handler(e)

    def startup(self):
        """ template method called when the thread starts"""
        pass

    def loop(self):
        self.fn(*self.args)

    def shutdown(self):
        """ template method called when the thread exits """
        pass

    def running(self):
        return not self.stop_event.is_set()

    def stop(self, join=True):
        """
        Signals the background thread to stop.
        :param join: when True, waits for the background thread to exit. The thread is never joined
            when stop is called from the background thread itself.
        """
        self.stop_event.set()
        thread = self.background_thread
        if join and thread is not None and thread is not threading.current_thread():
            thread.join()

import logging
import threading

logger = logging.getLogger(__name__)


class Signal(object):
    """
    A broadcast that fires at most once.

    Any number of threads may wait for the signal or register handlers with when_fired(). The first
    call to fire() marks the signal as fired and runs the pending handlers on the firing thread, in the
    order they were added. Waiting threads are released only after those handlers have returned, so a
    handler must not wait for the signal it is registered with.
    Further calls to fire() have no effect, and a fired signal is never reset.
    """

    def __init__(self, name=None):
        self.name = name
        self._fired = False
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._handlers = []

    @property
    def fired(self) -> bool:
        return self._fired

    def fire(self):
        """
        Fires the signal.
        :return: True if this call fired the signal, False if it had already been fired.
        """
        with self._lock:
            if self._fired:
                return False
            self._fired = True
            handlers, self._handlers = self._handlers, []
        try:
            for handler in handlers:
                self._notify(handler)
        finally:
            self._done.set()
        return True

    def when_fired(self, handler):
        """
        Registers a handler called once when the signal fires. If the signal has already fired,
        the handler is called immediately on the calling thread.
        """
        with self._lock:
            if not self._fired:
                self._handlers.append(handler)
                return
        self._notify(handler)

    def wait(self, timeout=None) -> bool:
        """
        Blocks until the signal has fired and its handlers have run, or the timeout elapses.
        :return: True if the signal fired
        """
        return self._done.wait(timeout)

    def _notify(self, handler):
        try:
            handler()
        except Exception as e:
            logger.exception("handler for signal %s failed: %s", self.name, e)

    def __repr__(self):
        return "<Signal %s %s>" % (self.name, "fired" if self.fired else "armed")

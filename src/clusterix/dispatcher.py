"""
Delivers decoded events to observers.

An observer is any object. For each kind of event, the dispatcher checks whether the observer has
the corresponding method and calls it if so; observers implement only the roles they are interested
in. The listener classes below describe the roles. Observers may subclass them, but need not:
``isinstance(observer, SpotListener)`` is true for any object with an ``on_spot`` method.
"""
import logging
from abc import ABCMeta, abstractmethod

logger = logging.getLogger(__name__)


def _implements(cls, method):
    for base in cls.__mro__:
        if method in base.__dict__:
            return base.__dict__[method] is not None
    return False


class _ListenerRole(metaclass=ABCMeta):
    """ A role is implemented by every class that defines the role's method. """
    method = None

    @classmethod
    def __subclasshook__(cls, C):
        if cls.method is not None and _implements(C, cls.method):
            return True
        return NotImplemented


class ConnectionListener(_ListenerRole):
    method = 'on_connection_state'

    @abstractmethod
    def on_connection_state(self, connected: bool):
        """ called with True when the client connected, and with False when the connection was lost or closed. """


class SpotListener(_ListenerRole):
    method = 'on_spot'

    @abstractmethod
    def on_spot(self, record):
        """ called with each SpotRecord received. """


class PropagationListener(_ListenerRole):
    method = 'on_propagation'

    @abstractmethod
    def on_propagation(self, record):
        """ called with each PropagationRecord received. """


class TextListener(_ListenerRole):
    method = 'on_text'

    @abstractmethod
    def on_text(self, record):
        """ called with each TextRecord received. """


class Dispatcher:
    """
    Keeps the registered observers, in registration order, and notifies them synchronously on the
    calling thread.

    A failing observer does not affect the others: the exception is logged and dispatch continues.
    """

    def __init__(self, log=logger):
        self._observers = []
        self.logger = log

    def register(self, observer):
        """ Adds an observer. The same observer may be registered more than once, and is then notified once
            per registration. """
        self._observers.append(observer)
        return self

    def notify_connection_state(self, connected: bool):
        self._notify(ConnectionListener, connected)

    def notify_spot(self, record):
        self._notify(SpotListener, record)

    def notify_propagation(self, record):
        self._notify(PropagationListener, record)

    def notify_text(self, record):
        self._notify(TextListener, record)

    def _notify(self, role, *args):
        for observer in tuple(self._observers):
            if not isinstance(observer, role):
                continue
            try:
                getattr(observer, role.method)(*args)
            except Exception as e:
                self.logger.exception("observer %r failed handling %s: %s", observer, role.method, e)

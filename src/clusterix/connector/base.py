import logging
from abc import abstractmethod

from clusterix.conduit.base import Conduit
from clusterix.errors import ClusterixError

logger = logging.getLogger(__name__)


class ConnectorError(ClusterixError):
    """ Indicates an error condition with a connection. """


class DialFailure(ConnectorError):
    """ The endpoint could not be reached, e.g. the address is unknown or the connection was refused. """


class ClientClosedError(ConnectorError):
    """ The client was closed permanently and will not connect again. """


class Connector():
    """ A connector describes an endpoint to which a conduit can be established. """

    @property
    @abstractmethod
    def endpoint(self):
        """ the endpoint that this connector reaches out to """
        raise NotImplementedError

    @abstractmethod
    def connect(self) -> Conduit:
        """
        Opens a new conduit to the endpoint.
        Raises DialFailure if the connection cannot be established.
        :return: the open conduit
        :rtype: Conduit
        """
        raise NotImplementedError


class AbstractConnector(Connector):
    """ Opens conduits to an endpoint, translating low level errors into DialFailure."""

    def connect(self) -> Conduit:
        try:
            conduit = self._connect()
        except DialFailure:
            raise
        except (IOError, OSError, ValueError) as e:
            logger.warning("error opening connection to %s: %s", self.endpoint, e)
            raise DialFailure("cannot open connection to %s: %s" % (self.endpoint, e)) from e
        logger.debug("opened connection to %s", self.endpoint)
        return conduit

    @abstractmethod
    def _connect(self) -> Conduit:
        """ Template method for subclasses to perform the connection.
            If connection is not possible, an exception should be thrown
        """
        raise NotImplementedError

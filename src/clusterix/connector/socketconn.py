import logging
import socket

from clusterix.conduit.base import Conduit
from clusterix.conduit.socket_conduit import SocketConduit
from clusterix.connector.base import AbstractConnector
from clusterix.support.mixins import CommonEqualityMixin

logger = logging.getLogger(__name__)

# the telnet port
DEFAULT_PORT = 23


class TCPServerEndpoint(CommonEqualityMixin):
    """
    Describes a TCP server endpoint.
    When no port is given, the telnet port is used.
    """
    def __init__(self, hostname, port=None):
        self.hostname = hostname
        self.port = port or DEFAULT_PORT

    @staticmethod
    def parse(arg, default_port=DEFAULT_PORT):
        """
        Parses a host argument of the form host, host:port or [ipv6]:port.

        >>> str(TCPServerEndpoint.parse('dxc.example.org:7300'))
        'dxc.example.org:7300'
        >>> str(TCPServerEndpoint.parse(''))
        'localhost:23'
        >>> TCPServerEndpoint.parse('[::1]:8000').hostname
        '::1'
        """
        host, port = split_host_port(arg or '')
        if not host:
            host = 'localhost'
        if not port:
            return TCPServerEndpoint(host, default_port)
        port = int(port)
        if not 0 < port < 65536:
            raise ValueError("invalid port: %d" % port)
        return TCPServerEndpoint(host, port)

    @property
    def address(self):
        return self.hostname, self.port

    def __str__(self):
        host = self.hostname
        if ':' in host:
            host = '[' + host + ']'
        return "%s:%d" % (host, self.port)

    def __repr__(self):
        return "TCPServerEndpoint(%r, %r)" % (self.hostname, self.port)


def split_host_port(hostport):
    """
    Splits a host:port string. The port is only split off when it consists of digits only.
    Brackets around the host part are removed.
    :return: a tuple (host, port). port is an empty string when no port was given.
    """
    host, port = hostport, ''
    colon = host.rfind(':')
    if colon != -1 and all(c in '0123456789' for c in host[colon + 1:]):
        host, port = host[:colon], host[colon + 1:]
    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]
    return host, port


class SocketConnector(AbstractConnector):
    """
    A connector that communicates data via a TCP socket
    """
    def __init__(self, endpoint: TCPServerEndpoint, timeout=None):
        """
        :param endpoint The server to connect to.
        :param timeout The number of seconds to wait for the connection to be established.
        """
        self._endpoint = endpoint
        self.timeout = timeout

    @property
    def endpoint(self):
        return self._endpoint

    def _connect(self) -> Conduit:
        sock = socket.create_connection(self._endpoint.address, self.timeout)
        logger.info("opened socket to %s", self._endpoint)
        return SocketConduit(sock, write_timeout=self.timeout)

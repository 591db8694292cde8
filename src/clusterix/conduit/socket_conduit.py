import logging
import socket

from clusterix.conduit import base

logger = logging.getLogger(__name__)


class SocketConduit(base.Conduit):
    """
    A conduit that provides communication via a socket.
    :param sock The open, connected socket
    """
    def __init__(self, sock: socket.socket, write_timeout=None):
        """
        :param sock: the client socket that represents the connection
        :type sock: socket
        :param write_timeout: seconds a write may block. None blocks until all data is sent.
        """
        self.sock = sock
        self.write_timeout = write_timeout
        self._closed = False

    def read(self, size, timeout=None):
        self.sock.settimeout(timeout)
        try:
            return self.sock.recv(size)
        except socket.timeout as e:
            raise base.ConduitTimeout("no data within %s seconds" % timeout) from e

    def write(self, data):
        # reads leave the short read timeout on the socket
        self.sock.settimeout(self.write_timeout)
        self.sock.sendall(data)

    def close(self):
        if self._closed:
            return
        self._closed = True
        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except socket.error:
            pass    # the peer may have closed the socket already
        finally:
            self.sock.close()

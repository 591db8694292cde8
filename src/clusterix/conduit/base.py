from abc import abstractmethod


class ConduitTimeout(IOError):
    """ Raised by Conduit.read when no data arrives before the read timeout. """


class Conduit:
    """
    A conduit allows two-way communication with an endpoint. Reads are bounded by a timeout so that
    a caller can tell a quiet peer from a closed one.
    """

    @abstractmethod
    def read(self, size, timeout=None) -> bytes:
        """
        Reads up to size bytes.
        :param size: the maximum number of bytes to return
        :param timeout: seconds to wait for data. None waits indefinitely.
        :return: the bytes read. An empty result means the peer closed the stream.
        :raises ConduitTimeout: no data arrived within the timeout
        :raises IOError: the stream failed
        """
        raise NotImplementedError

    @abstractmethod
    def write(self, data: bytes):
        """ writes all of the given data, or raises IOError. """
        raise NotImplementedError

    @abstractmethod
    def close(self):
        """
        Closes the conduit. Closing a closed conduit has no effect.
        """
        raise NotImplementedError

"""
Turns the raw byte stream from a conduit into text units.

Cluster servers send text in bursts, often splitting a line over several packets, and send prompts
without a line terminator. The reader therefore does not look for line ends: it collects whatever
arrives until the stream has been quiet for a short while, and returns that as one unit.
"""
import logging

from clusterix.conduit.base import Conduit, ConduitTimeout
from clusterix.errors import ClusterixError

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 10 * 1024
DEFAULT_QUIET_PERIOD = 0.1


class StreamError(ClusterixError, IOError):
    """ The stream can no longer be read. """


class EndOfStream(StreamError):
    """ The peer closed the stream. """


class ReadFailure(StreamError):
    """ Reading from the stream failed. """


class ChunkReader:
    """
    Reads text units from a conduit.

    :param conduit: the conduit to read from
    :param quiet_period: seconds without new data after which the collected text is returned
    :param buffer_size: the maximum number of bytes fetched by each read
    :param encoding: the text encoding. Undecodable bytes are replaced.
    """

    def __init__(self, conduit: Conduit, quiet_period=DEFAULT_QUIET_PERIOD, buffer_size=DEFAULT_BUFFER_SIZE,
                 encoding='utf-8'):
        self.conduit = conduit
        self.quiet_period = quiet_period
        self.buffer_size = buffer_size
        self.encoding = encoding

    def read(self) -> str:
        """
        Reads the next text unit.

        Each read on the conduit waits at most one quiet period. Data is collected until a read times
        out; then everything collected is returned, which is an empty string when nothing arrived.
        :raises EndOfStream: the peer closed the stream. Data collected so far is discarded.
        :raises ReadFailure: the conduit raised an error. Data collected so far is discarded.
        """
        received = bytearray()
        while True:
            try:
                data = self.conduit.read(self.buffer_size, self.quiet_period)
            except ConduitTimeout:
                return received.decode(self.encoding, errors='replace')
            except (IOError, OSError, ValueError) as e:
                raise ReadFailure("cannot read incoming data: %s" % e) from e
            if not data:
                raise EndOfStream("connection closed by peer")
            received += data

"""
The cluster client: maintains the connection to a cluster server, logs in and delivers the spots
received to the registered observers.

Each connection is served by a ReadLoop running on its own background thread. The loop ends when
the stream fails or the client is disconnected; it then closes the conduit, notifies the observers
and fires the connection's disconnected signal.

In persistent mode a KeepOpenLoop redials after every lost connection or failed attempt, until the
client is disconnected. A disconnected client stays closed for good.
"""
import logging
import threading
import time

from clusterix.connector.base import ClientClosedError, Connector, ConnectorError
from clusterix.connector.socketconn import SocketConnector, TCPServerEndpoint
from clusterix.dispatcher import Dispatcher
from clusterix.protocol.login import LoginAutomaton, normalize
from clusterix.protocol.reader import DEFAULT_QUIET_PERIOD, ChunkReader, EndOfStream, ReadFailure
from clusterix.protocol.spots import ParserContractViolation, extract_spots
from clusterix.support.async_loop import AsyncLoop
from clusterix.support.events import Signal
from clusterix.support.retry_strategy import PeriodRetryStrategy, RetryStrategy

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
DEFAULT_RETRY_INTERVAL = 30.0


class ReadLoop(AsyncLoop):
    """
    Reads from one connection and passes the received text to the client until the connection ends.

    :param client: the client handling the received text
    :param conduit: the open conduit of this connection
    :param reader: the ChunkReader reading from the conduit
    """

    def __init__(self, client, conduit, reader: ChunkReader):
        super().__init__(name="clusterix-read-%s" % client.endpoint, log=client.logger)
        self.client = client
        self.conduit = conduit
        self.reader = reader
        self.disconnected = Signal("disconnected from %s" % client.endpoint)

    def loop(self):
        client = self.client
        try:
            text = self.reader.read()
        except EndOfStream:
            client.trace("connection closed by %s", client.endpoint)
            self.stop(join=False)
            return
        except ReadFailure as e:
            client.trace("cannot read incoming data: %s", e)
            self.stop(join=False)
            return

        reply = client.handle_incoming_text(text)
        if reply:
            client.trace("< %r", reply)
            try:
                self.conduit.write(reply.encode(self.reader.encoding))
            except (IOError, OSError) as e:
                self.logger.warning("cannot write outgoing data to %s: %s", client.endpoint, e)

    def shutdown(self):
        try:
            self.conduit.close()
        finally:
            try:
                self.client.connection_ended()
            finally:
                self.disconnected.fire()


class KeepOpenLoop(AsyncLoop):
    """
    Connects the client, waits until the connection is lost and connects again after the retry
    strategy allows it. Runs until stopped.
    """

    def __init__(self, client, retry_strategy: RetryStrategy, clock=time.time):
        super().__init__(name="clusterix-keep-open-%s" % client.endpoint, log=client.logger)
        self.client = client
        self.retry_strategy = retry_strategy
        self.clock = clock
        self._attempts = 0

    def loop(self):
        delay = self.retry_strategy(self.clock())
        if delay > 0:
            self.stop_event.wait(delay)
            return

        client = self.client
        if self._attempts:
            client.trace("retrying to connect to %s", client.endpoint)
        else:
            client.trace("connecting to %s...", client.endpoint)
        self._attempts += 1
        try:
            client.connect()
        except ClientClosedError:
            self.stop(join=False)
            return
        except ConnectorError as e:
            client.trace("cannot connect to %s, waiting for retry: %s", client.endpoint, e)
            return

        client.wait_disconnected()
        self.retry_strategy.restart(self.clock())
        if self.running():
            client.trace("connection lost to %s, waiting for retry", client.endpoint)

    def shutdown(self):
        self.client.trace("stopped reconnecting to %s", self.client.endpoint)


class Client:
    """
    A client of a DX cluster.

    :param connector: opens the conduit to the cluster server
    :param username: the username sent to the login prompt, usually the callsign
    :param password: the password sent to the password prompt
    :param trace: when True, the communication is logged at INFO level instead of DEBUG
    :param read_timeout: the quiet period of the stream reader, in seconds
    :param encoding: the text encoding used on the wire
    """

    def __init__(self, connector: Connector, username, password, trace=False, read_timeout=DEFAULT_QUIET_PERIOD,
                 encoding='utf-8', dispatcher: Dispatcher=None, log=logger):
        self.connector = connector
        self.login = LoginAutomaton(username, password)
        self.trace_enabled = trace
        self.read_timeout = read_timeout
        self.encoding = encoding
        self.dispatcher = dispatcher if dispatcher is not None else Dispatcher()
        self.logger = log
        self.closed = Signal("closed")      # fired once by disconnect(), never reset
        self._connection = None             # the ReadLoop of the current or last connection
        self._authenticated = False
        self._keeper = None
        self._connect_lock = threading.Lock()

    @property
    def endpoint(self):
        return self.connector.endpoint

    @property
    def connected(self) -> bool:
        """ True from a successful connect() until the connection has been torn down. """
        connection = self._connection
        return connection is not None and not connection.disconnected.fired

    @property
    def authenticated(self) -> bool:
        return self.connected and self._authenticated

    def register(self, observer):
        """ registers an observer with the dispatcher. See clusterix.dispatcher for the roles an observer may have. """
        self.dispatcher.register(observer)
        return self

    def connect(self):
        """
        Connects to the cluster and starts reading. Does nothing if already connected.
        :raises DialFailure: the server cannot be reached
        :raises ClientClosedError: the client was disconnected before
        """
        with self._connect_lock:
            if self.connected:
                return
            if self.closed.fired:
                raise ClientClosedError("the client to %s is closed" % self.endpoint)
            conduit = self.connector.connect()
            self._authenticated = False
            connection = ReadLoop(self, conduit, ChunkReader(conduit, self.read_timeout, encoding=self.encoding))
            self._connection = connection

        self.trace("connected to %s", self.endpoint)
        self.dispatcher.notify_connection_state(True)
        connection.start()
        if self.closed.fired:     # disconnected while connecting
            connection.stop(join=False)

    def keep_open(self, retry_strategy: RetryStrategy):
        """
        Keeps the client connected in the background, reconnecting as the retry strategy allows,
        until disconnect() is called. Errors are only logged.
        """
        if self._keeper is not None:
            return
        keeper = self._keeper = KeepOpenLoop(self, retry_strategy)
        keeper.start()
        self.closed.when_fired(lambda: keeper.stop(join=False))

    def disconnect(self):
        """
        Closes the client for good. The current connection, if any, ends within one read quiet period.
        Safe to call more than once and from any thread; never waits for the connection to end.
        """
        if self.closed.fire():
            self.trace("closing the connection to %s", self.endpoint)
        connection = self._connection
        if connection is not None:
            connection.stop(join=False)

    def when_disconnected(self, callback):
        """
        Calls the callback once, after the current connection has ended. If there is no current
        connection, the callback is called immediately.
        """
        connection = self._connection
        if connection is None:
            callback()
        else:
            connection.disconnected.when_fired(callback)

    def wait_disconnected(self, timeout=None) -> bool:
        """
        Blocks until the current connection has ended.
        :return: True if there is no current connection, False if the timeout elapsed first.
        """
        connection = self._connection
        return connection is None or connection.disconnected.wait(timeout)

    def handle_incoming_text(self, text):
        """
        Handles one text unit received from the cluster.
        Before the login has completed, the text is answered by the login automaton. Afterwards,
        the spots in the text are dispatched to the observers.
        :return: the reply to send to the cluster, or None
        """
        text = normalize(text)
        if not text:
            return None
        self.trace("> %r", text)

        if not self._authenticated:
            reply, self._authenticated = self.login.step(False, text)
            if self._authenticated:
                self.trace("logged in to %s", self.endpoint)
            return reply

        try:
            records = extract_spots(text)
        except ParserContractViolation as e:
            self.logger.exception("cannot extract spots: %s", e)
            return None
        for record in records:
            self.dispatcher.notify_spot(record)
        return None

    def connection_ended(self):
        """ called by the read loop once the connection is closed. """
        self.trace("disconnected from %s", self.endpoint)
        self.dispatcher.notify_connection_state(False)

    def trace(self, msg, *args):
        self.logger.log(logging.INFO if self.trace_enabled else logging.DEBUG, msg, *args)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()


def new_client(endpoint, username, password, trace=False, timeout=DEFAULT_TIMEOUT,
               read_timeout=DEFAULT_QUIET_PERIOD, encoding='utf-8') -> Client:
    """
    Creates a client for a TCP cluster server without connecting it.
    :param endpoint: a TCPServerEndpoint, or a "host[:port]" string. The port defaults to 23.
    :param timeout: seconds to wait for a connection to be established
    """
    if not isinstance(endpoint, TCPServerEndpoint):
        endpoint = TCPServerEndpoint.parse(endpoint)
    connector = SocketConnector(endpoint, timeout)
    return Client(connector, username, password, trace=trace, read_timeout=read_timeout, encoding=encoding)


def open_client(endpoint, username, password, trace=False, **kwargs) -> Client:
    """
    Connects to a cluster once.
    :return: the connected client
    :raises DialFailure: the server cannot be reached
    """
    client = new_client(endpoint, username, password, trace=trace, **kwargs)
    client.connect()
    return client


def keep_open(endpoint, username, password, retry_interval=DEFAULT_RETRY_INTERVAL, trace=False, **kwargs) -> Client:
    """
    Connects to a cluster in the background and reconnects after retry_interval seconds whenever the
    connection is lost or cannot be established, until the client is disconnected.
    Never raises for connection failures; they are logged.
    """
    client = new_client(endpoint, username, password, trace=trace, **kwargs)
    client.keep_open(PeriodRetryStrategy(retry_interval))
    return client

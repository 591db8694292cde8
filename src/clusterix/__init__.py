"""

DX cluster client

- Conduit: abstraction of a bi-directional byte stream, with reads bounded by a timeout.
- Connector: knows the endpoint and opens a new conduit on each connection.
- ChunkReader: turns the stream into text units, each ending when the server goes quiet.
- LoginAutomaton: answers the username and password prompts and detects the command prompt.
- extract_spots: finds the spots in the received text.
- Dispatcher: delivers connection state and records to the observers that handle them.
- Client: connects, reads and dispatches on a background thread per connection. In persistent
  mode (keep_open) the client reconnects after every lost connection until it is disconnected.

Typical use::

    client = keep_open('dxc.example.org:7300', 'n0call', '')
    client.register(my_spot_observer)
    ...
    client.disconnect()

"""
from clusterix.client import Client, keep_open, new_client, open_client
from clusterix.connector.base import ClientClosedError, ConnectorError, DialFailure
from clusterix.connector.socketconn import DEFAULT_PORT, TCPServerEndpoint
from clusterix.dispatcher import ConnectionListener, Dispatcher, PropagationListener, SpotListener, TextListener
from clusterix.errors import ClusterixError
from clusterix.records import PropagationRecord, SpotRecord, TextRecord

__all__ = [
    'Client', 'keep_open', 'new_client', 'open_client',
    'ClientClosedError', 'ConnectorError', 'DialFailure', 'ClusterixError',
    'DEFAULT_PORT', 'TCPServerEndpoint',
    'ConnectionListener', 'Dispatcher', 'PropagationListener', 'SpotListener', 'TextListener',
    'PropagationRecord', 'SpotRecord', 'TextRecord',
]

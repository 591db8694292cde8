"""
Command line access to DX clusters.

    clusterix --host dxc.example.org:7300 --username n0call --reconnect monitor
"""
import argparse
import logging
import os
import signal
import sys
import threading

from configobj import ConfigObjError

from clusterix.config.config import load_options
from clusterix.connector.base import ConnectorError
from clusterix.connector.socketconn import TCPServerEndpoint
from clusterix.dispatcher import SpotListener

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGHUP, signal.SIGINT, signal.SIGTERM, signal.SIGQUIT)


class SpotLogger(SpotListener):
    """ logs each spot received. """

    def __init__(self, log=logger):
        self.logger = log

    def on_spot(self, record):
        self.logger.info("%s %s %.1f kHz %s %s %s", record.time.strftime('%H%MZ'), record.call,
                         record.frequency / 1000, record.locator or '', record.text, record.spotter)


class Cancellation:
    """
    Handles the shutdown signals: the first one cancels, the second one exits immediately.
    """

    def __init__(self):
        self.cancelled = threading.Event()
        self.count = 0

    def install(self, signals=SHUTDOWN_SIGNALS):
        for s in signals:
            signal.signal(s, self.handle)

    def handle(self, signum, frame=None):
        self.count += 1
        if self.count == 1:
            self.cancel()
        else:
            logger.critical("hard shutdown")
            os._exit(1)

    def cancel(self):
        self.cancelled.set()


def monitor(client, cancellation, args):
    """ logs the incoming spots until cancelled. """
    client.register(SpotLogger())
    cancellation.cancelled.wait()


commands = {
    'monitor': monitor,
}


def build_parser():
    parser = argparse.ArgumentParser(prog='clusterix', description="A simple tool to access DX clusters.")
    parser.add_argument("--host", help="connect to this DX cluster host, as host[:port]")
    parser.add_argument("--reconnect", action="store_true", default=None,
                        help="try to reconnect if the DX cluster connection failed")
    parser.add_argument("--username", help="the username, usually your callsign")
    parser.add_argument("--password", help="the password")
    parser.add_argument("--trace", action="store_true", default=None, help="trace the communication on the console")
    parser.add_argument("--config", help="read the options from this configuration file")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True
    subparsers.add_parser("monitor", help="connect to the DX cluster and log the incoming spots")
    return parser


def run_with_client(command, args, cancellation):
    """
    Opens the client as configured, runs the command and disconnects the client afterwards.
    Without reconnecting, losing the connection cancels the command.
    :return: the process exit code
    """
    overrides = dict(username=args.username, password=args.password, trace=args.trace, reconnect=args.reconnect)
    if args.host is not None:
        try:
            endpoint = TCPServerEndpoint.parse(args.host)
        except ValueError as e:
            logger.error("invalid host address: %s", e)
            return 2
        overrides.update(host=endpoint.hostname, port=endpoint.port)
    try:
        options = load_options(args.config, **overrides)
    except (ConfigObjError, IOError) as e:
        logger.error("invalid configuration: %s", e)
        return 2

    try:
        client = options.open()
    except ConnectorError as e:
        logger.error("cannot connect to %s: %s", options.endpoint, e)
        return 1
    with client:
        if not options.reconnect:
            client.when_disconnected(cancellation.cancel)
        command(client, cancellation, args)
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s %(message)s")
    # spots and, with --trace, the communication are logged at INFO
    logging.getLogger("clusterix").setLevel(logging.INFO)
    cancellation = Cancellation()
    cancellation.install()
    return run_with_client(commands[args.command], args, cancellation)


if __name__ == "__main__":
    sys.exit(main())

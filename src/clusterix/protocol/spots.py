"""
Extracts spots from the text sent by a cluster.

The text is not split into lines beforehand: a received unit may hold any number of spots, partial
lines and bell characters. Spots are found by their structure::

    DX de RX7K:       7154.0  RK7R         CQ                             1650Z KN75

A spot whose callsign or time is invalid is dropped, the others in the same text are kept.
"""
import logging
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation

from clusterix.errors import ClusterixError
from clusterix.hamradio.callsign import InvalidCallsign, parse_callsign
from clusterix.hamradio.locator import InvalidLocator, parse_locator
from clusterix.records import SpotRecord

logger = logging.getLogger(__name__)

SPOT = re.compile(r"dx de ([^:\r\n]+):\s+([0-9]+\.[0-9]+)\s+([0-9a-z/]+)\s+(.+)\s+([0-9]{4})z( [a-z]{2}[0-9]{2})?")
SPOT_GROUPS = 6


class ParserContractViolation(ClusterixError):
    """ A structural match did not capture the expected groups. This is a bug, not bad input. """


class MalformedSpotField(ClusterixError, ValueError):
    """ A field of a spot could not be parsed. """


def extract_spots(text, now=None):
    """
    Finds all spots in the given text.

    :param text: the lowercased text received from the cluster
    :param now: the current time, used for the date of the spots. Defaults to the current UTC time.
    :return: a list of SpotRecord, in the order found in the text
    :raises ParserContractViolation: a match had an unexpected number of groups
    """
    if now is None:
        now = datetime.now(timezone.utc)
    result = []
    for match in SPOT.finditer(text):
        groups = match.groups()
        if len(groups) != SPOT_GROUPS:
            raise ParserContractViolation("invalid group count %d in %r" % (len(groups), match.group(0)))
        spotter, frequency, call, comment, timestamp, locator = groups
        try:
            record = SpotRecord(
                spotter=spotter,
                call=parse_callsign(call),
                frequency=parse_frequency(frequency),
                time=parse_timestamp(now, timestamp),
                locator=parse_optional_locator(locator),
                text=comment.strip())
        except (InvalidCallsign, MalformedSpotField) as e:
            logger.debug("dropping spot %r: %s", match.group(0), e)
            continue
        result.append(record)
    return result


def parse_frequency(khz):
    """
    Converts a frequency in kHz to Hz.

    >>> parse_frequency('14040.1')
    14040100.0
    """
    try:
        return float(Decimal(khz) * 1000)
    except InvalidOperation as e:
        raise MalformedSpotField("invalid frequency: %r" % khz) from e


def parse_timestamp(now, timestamp):
    """
    Combines the date of now, in UTC, with the hours and minutes given as HHMM.
    """
    if len(timestamp) != 4 or not timestamp.isdigit():
        raise MalformedSpotField("invalid timestamp: %r" % timestamp)
    hours, minutes = int(timestamp[:2]), int(timestamp[2:])
    if hours > 23 or minutes > 59:
        raise MalformedSpotField("invalid timestamp: %r" % timestamp)
    today = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    return today + timedelta(hours=hours, minutes=minutes)


def parse_optional_locator(text):
    """ parses the locator, returning None if it is missing or invalid. """
    if not text:
        return None
    try:
        return parse_locator(text)
    except InvalidLocator:
        return None

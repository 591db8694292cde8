"""
Parsing and validation of amateur radio callsigns.

A callsign consists of an optional prefix, the base call and an optional suffix, separated by
slashes, e.g. ``PJ2/K5PI`` or ``DL1ABC/P``. The base call is an ITU prefix, a digit and a suffix
that ends with a letter.
"""
import re

from clusterix.errors import ClusterixError
from clusterix.support.mixins import ImmutableMixin

BASE_CALL = re.compile(r"^(?:[a-z]{1,2}|[0-9][a-z]{1,2}|[a-z][0-9][a-z]?)[0-9]{1,2}[a-z0-9]{0,3}[a-z]$")
PART = re.compile(r"^[a-z0-9]+$")


class InvalidCallsign(ClusterixError, ValueError):
    """ The text is not a valid callsign. """


class Callsign(ImmutableMixin):
    def __init__(self, base_call, prefix='', suffix=''):
        self._assign(prefix=prefix.upper(), base_call=base_call.upper(), suffix=suffix.upper())

    def __str__(self):
        return "/".join(p for p in (self.prefix, self.base_call, self.suffix) if p)

    def __repr__(self):
        return "Callsign(%r)" % str(self)


def is_base_call(text):
    return BASE_CALL.match(text) is not None


def parse_callsign(text) -> Callsign:
    """
    Parses a callsign, ignoring case.

    >>> str(parse_callsign('pj2/k5pi'))
    'PJ2/K5PI'
    >>> parse_callsign('dl1abc/p').suffix
    'P'
    :raises InvalidCallsign: the text is not a valid callsign
    """
    parts = text.strip().lower().split('/')
    if not all(PART.match(p) for p in parts):
        raise InvalidCallsign("invalid callsign: %r" % text)
    if len(parts) == 1 and is_base_call(parts[0]):
        return Callsign(parts[0])
    if len(parts) == 2:
        prefix_or_base, base_or_suffix = parts
        if is_base_call(base_or_suffix):
            return Callsign(base_or_suffix, prefix=prefix_or_base)
        if is_base_call(prefix_or_base):
            return Callsign(prefix_or_base, suffix=base_or_suffix)
    if len(parts) == 3 and is_base_call(parts[1]):
        return Callsign(parts[1], prefix=parts[0], suffix=parts[2])
    raise InvalidCallsign("invalid callsign: %r" % text)

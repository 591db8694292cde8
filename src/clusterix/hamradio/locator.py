"""
Maidenhead grid locators, e.g. ``JN58`` or ``JN58td``.
"""
import re

from clusterix.errors import ClusterixError
from clusterix.support.mixins import ImmutableMixin

LOCATOR = re.compile(r"^([a-r]{2})([0-9]{2})([a-x]{2})?$")


class InvalidLocator(ClusterixError, ValueError):
    """ The text is not a valid Maidenhead locator. """


class Locator(ImmutableMixin):
    """
    A Maidenhead locator with field, square and an optional subsquare.
    """
    def __init__(self, field, square, subsquare=''):
        self._assign(field=field.upper(), square=square, subsquare=subsquare.lower())

    def center(self):
        """
        Calculates the center of the area described by this locator.
        :return: a tuple (latitude, longitude) in degrees
        """
        lon = (ord(self.field[0]) - ord('A')) * 20.0 - 180.0 + int(self.square[0]) * 2.0
        lat = (ord(self.field[1]) - ord('A')) * 10.0 - 90.0 + int(self.square[1]) * 1.0
        if self.subsquare:
            lon += (ord(self.subsquare[0]) - ord('a')) * (2.0 / 24) + (1.0 / 24)
            lat += (ord(self.subsquare[1]) - ord('a')) * (1.0 / 24) + (0.5 / 24)
        else:
            lon += 1.0
            lat += 0.5
        return lat, lon

    def __str__(self):
        return self.field + self.square + self.subsquare

    def __repr__(self):
        return "Locator(%r)" % str(self)


def parse_locator(text) -> Locator:
    """
    Parses a locator, ignoring case and surrounding whitespace.

    >>> str(parse_locator(' kn75 '))
    'KN75'
    :raises InvalidLocator: the text is not a valid locator
    """
    match = LOCATOR.match(text.strip().lower())
    if match is None:
        raise InvalidLocator("invalid locator: %r" % text)
    field, square, subsquare = match.groups()
    return Locator(field, square, subsquare or '')

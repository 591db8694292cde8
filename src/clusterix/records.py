"""
The events decoded from the cluster's text and delivered to observers.
Records are immutable values.
"""
from clusterix.support.mixins import ImmutableMixin, StringerMixin


class SpotRecord(ImmutableMixin, StringerMixin):
    """
    A report that a station was heard.

    :param spotter: the station reporting the spot, as sent by the cluster
    :param call: the Callsign of the station that was heard
    :param frequency: the frequency in Hz
    :param time: the UTC time of the spot
    :param locator: the Locator sent with the spot, or None
    :param text: the comment
    """
    def __init__(self, spotter, call, frequency, time, locator=None, text=''):
        self._assign(spotter=spotter, call=call, frequency=frequency, time=time, locator=locator, text=text)


class PropagationRecord(ImmutableMixin, StringerMixin):
    """ A propagation (WWV) announcement. """
    def __init__(self, text, time=None):
        self._assign(text=text, time=time)


class TextRecord(ImmutableMixin, StringerMixin):
    """ Free text from the cluster, e.g. an announcement or a talk message. """
    def __init__(self, text, time=None):
        self._assign(text=text, time=time)

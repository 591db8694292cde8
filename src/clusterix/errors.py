class ClusterixError(Exception):
    """ Base class for the errors raised by this package. """

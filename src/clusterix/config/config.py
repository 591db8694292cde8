import logging
import os

from configobj import ConfigObj, ConfigObjError, flatten_errors
from validate import Validator

from clusterix.client import keep_open, open_client
from clusterix.connector.socketconn import DEFAULT_PORT, TCPServerEndpoint
from clusterix.support.mixins import StringerMixin

logger = logging.getLogger(__name__)

# The default extension for configuration files
config_extension = '.cfg'

config_name = 'clusterix'

# the schema the loaded configuration is validated against. It also provides the defaults.
config_spec = """
host = string(default='localhost')
port = integer(min=1, max=65535, default=%d)
username = string(default='')
password = string(default='')
trace = boolean(default=False)
timeout = float(min=0, default=5.0)
read_timeout = float(min=0.001, default=0.1)
retry_interval = float(min=0, default=30.0)
reconnect = boolean(default=False)
encoding = string(default='utf-8')
""" % DEFAULT_PORT


def user_config_filename(name=config_name):
    """ the configuration file in the user's home directory. """
    return os.path.expanduser('~/.' + name + config_extension)


def load_config_file_base(file, must_exist=True):
    """
    Loads a configuration file
    :param file:        The configuration file to load
    :param must_exist:  when True, the file must exist or an IOError is raised.
    :return: The ConfigObj instance for the file.
    """
    if must_exist or os.path.exists(file):
        return ConfigObj(file, interpolation='Template', file_error=True)
    return ConfigObj()


def load_config(filename=None, overrides=None, user_file=None):
    """
        Loads the client configuration.
        Configurations are merged in this order, later values replacing earlier ones:
        - the user configuration, if it exists
        - the given file
        - the overrides
        The result is validated against config_spec, which also supplies the defaults.
    :param filename: a configuration file that must exist, or None
    :param overrides: a mapping of option values. None values are ignored.
    :param user_file: the user configuration file, defaults to user_config_filename()
    :return: the validated ConfigObj, with values converted to their types
    :raises ConfigObjError: a value failed validation
    """
    config = ConfigObj(configspec=config_spec.splitlines())
    config.merge(load_config_file_base(user_file or user_config_filename(), must_exist=False))
    if filename:
        config.merge(load_config_file_base(filename))
    if overrides:
        config.merge({k: v for k, v in overrides.items() if v is not None})

    result = config.validate(Validator(), preserve_errors=True)
    if result is not True:
        errors = []
        for section_list, key, res in flatten_errors(config, result):
            if key is not None:
                errors.append('"%s": %s' % (key, res or 'missing'))
            else:
                errors.append('section "%s" is missing' % ', '.join(section_list))
        for error in errors:
            logger.error("configuration error %s", error)
        raise ConfigObjError("the config failed validation: %s" % '; '.join(errors))
    return config


def apply_conf(conf, target):
    """
    Applies the attributes contained in a configuration object to a target object.
    It does this by iterating over the items in the configuration and setting any attributes with the same name.
    :return: the target
    """
    for k, v in conf.items():
        if hasattr(target, k):
            setattr(target, k, v)
    return target


class ClientOptions(StringerMixin):
    """
    The options for connecting a client. The defaults match config_spec.
    """

    def __init__(self):
        self.host = 'localhost'
        self.port = DEFAULT_PORT
        self.username = ''
        self.password = ''
        self.trace = False
        self.timeout = 5.0
        self.read_timeout = 0.1
        self.retry_interval = 30.0
        self.reconnect = False
        self.encoding = 'utf-8'

    @property
    def endpoint(self):
        return TCPServerEndpoint(self.host, self.port)

    def open(self):
        """
        Opens a client with these options. With reconnect set, the client is kept open in the
        background, otherwise it is connected once.
        :raises DialFailure: the server cannot be reached and reconnect is not set
        """
        kwargs = dict(trace=self.trace, timeout=self.timeout, read_timeout=self.read_timeout, encoding=self.encoding)
        if self.reconnect:
            return keep_open(self.endpoint, self.username, self.password, retry_interval=self.retry_interval, **kwargs)
        return open_client(self.endpoint, self.username, self.password, **kwargs)


def load_options(filename=None, user_file=None, **overrides) -> ClientOptions:
    """ Loads the configuration and applies it to a new ClientOptions instance. """
    return apply_conf(load_config(filename, overrides, user_file), ClientOptions())

import os
import tempfile
import unittest
from unittest.mock import patch

from configobj import ConfigObjError
from hamcrest import assert_that, calling, is_, raises

from clusterix.config.config import ClientOptions, apply_conf, load_config, load_options, user_config_filename
from clusterix.connector.socketconn import TCPServerEndpoint


class ConfigTestCase(unittest.TestCase):

    def setUp(self):
        self.dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.dir.cleanup)
        self.no_user_file = self.path('missing.cfg')

    def path(self, name):
        return os.path.join(self.dir.name, name)

    def write(self, name, content):
        filename = self.path(name)
        with open(filename, 'w') as f:
            f.write(content)
        return filename


class LoadConfigTest(ConfigTestCase):

    def test_defaults(self):
        config = load_config(user_file=self.no_user_file)
        assert_that(config['host'], is_('localhost'))
        assert_that(config['port'], is_(23))
        assert_that(config['trace'], is_(False))
        assert_that(config['timeout'], is_(5.0))
        assert_that(config['read_timeout'], is_(0.1))
        assert_that(config['retry_interval'], is_(30.0))
        assert_that(config['reconnect'], is_(False))
        assert_that(config['encoding'], is_('utf-8'))

    def test_file_values_are_converted(self):
        filename = self.write('cluster.cfg', "host = dxc.example.org\nport = 7300\nreconnect = yes\n"
                                             "retry_interval = 10\n")
        config = load_config(filename, user_file=self.no_user_file)
        assert_that(config['host'], is_('dxc.example.org'))
        assert_that(config['port'], is_(7300))
        assert_that(config['reconnect'], is_(True))
        assert_that(config['retry_interval'], is_(10.0))

    def test_merge_order(self):
        user_file = self.write('user.cfg', "host = user.example.org\nusername = n0call\ntrace = true\n")
        filename = self.write('cluster.cfg', "host = dxc.example.org\n")
        config = load_config(filename, dict(trace=False, password=None), user_file=user_file)
        assert_that(config['host'], is_('dxc.example.org'))
        assert_that(config['username'], is_('n0call'))
        assert_that(config['trace'], is_(False))
        assert_that(config['password'], is_(''))

    def test_invalid_value(self):
        filename = self.write('cluster.cfg', "port = 70000\n")
        assert_that(calling(load_config).with_args(filename, user_file=self.no_user_file), raises(ConfigObjError))

    def test_invalid_override(self):
        assert_that(calling(load_config).with_args(None, dict(read_timeout=0), user_file=self.no_user_file),
                    raises(ConfigObjError))

    def test_missing_file(self):
        assert_that(calling(load_config).with_args(self.path('nope.cfg'), user_file=self.no_user_file),
                    raises(IOError))

    def test_user_config_filename(self):
        assert_that(user_config_filename(), is_(os.path.expanduser('~/.clusterix.cfg')))


class ApplyConfTest(unittest.TestCase):

    def test_sets_known_attributes_only(self):
        target = ClientOptions()
        result = apply_conf(dict(host='dxc.example.org', unknown=1), target)
        assert_that(result, is_(target))
        assert_that(target.host, is_('dxc.example.org'))
        assert_that(hasattr(target, 'unknown'), is_(False))


class ClientOptionsTest(ConfigTestCase):

    def test_load_options(self):
        options = load_options(user_file=self.no_user_file, host='dxc.example.org', port=7300, username='n0call')
        assert_that(options.endpoint, is_(TCPServerEndpoint('dxc.example.org', 7300)))
        assert_that(options.username, is_('n0call'))

    @patch('clusterix.config.config.open_client')
    def test_open_once(self, open_client):
        options = load_options(user_file=self.no_user_file, username='n0call', password='pw')
        assert_that(options.open(), is_(open_client.return_value))
        open_client.assert_called_once_with(TCPServerEndpoint('localhost', 23), 'n0call', 'pw', trace=False,
                                            timeout=5.0, read_timeout=0.1, encoding='utf-8')

    @patch('clusterix.config.config.keep_open')
    def test_open_reconnecting(self, keep_open):
        options = load_options(user_file=self.no_user_file, reconnect=True, retry_interval=2.5)
        assert_that(options.open(), is_(keep_open.return_value))
        keep_open.assert_called_once_with(TCPServerEndpoint('localhost', 23), '', '', retry_interval=2.5,
                                          trace=False, timeout=5.0, read_timeout=0.1, encoding='utf-8')

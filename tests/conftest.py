"""Shared fixtures for the pycastor test suite."""

import pytest

from pycastor.conf import ConfigCache, Configuration


NET_CONF = """\
# network settings
[net]
host = localhost
port = 8080
[!net]
"""


@pytest.fixture
def cache():
    """A private cache, so tests never see each other's trees."""
    return ConfigCache()


@pytest.fixture
def net_conf(cache):
    return Configuration.from_string('net.conf', NET_CONF, cache=cache)


@pytest.fixture
def conf_file(tmp_path):
    """Writes `text` to a fresh .conf file and returns its path as str."""
    def _write(text, name='test.conf', encoding='utf-8'):
        path = tmp_path / name
        path.write_text(text, encoding=encoding)
        return str(path)
    return _write

# -*- encoding: utf-8 -*-
# @File   : system.py
# @Time   : 2024/10/14 19:47:33
# @Author : Kariko Lin

"""Locates configurations by short name.

Given `SystemConfig()['net']`, these are tried in order:

    - `<config_path>/<hostname>/net.conf`
    - `<config_path>/net.conf`
    - `./net.conf`

`config_path` comes from `$ES_CONFIG_ROOT`, otherwise `<root>/etc/`,
where `<root>` comes from `$ES_ROOT`.
"""

import logging
import os
import socket
import sys
from collections.abc import Mapping
from os.path import abspath, dirname, exists, isabs, isdir, join
from threading import Lock
from typing import Iterator

from .conf.cache import ConfigCache
from .conf.config import Configuration

logger = logging.getLogger(__name__)

_SLASHES = '/' + os.sep + (os.altsep or '')


def get_base_path(env_var: str, subdir: str = '') -> str:
    """`$env_var/subdir/`, or just `subdir/` if the variable is unset."""
    path = os.environ.get(env_var)
    subdir = subdir.strip('/')
    if path is None:
        return subdir + '/'
    return path.rstrip('/') + '/' + subdir + ('/' if subdir else '')


class SystemConfig(Mapping[str, Configuration]):
    def __init__(
        self,
        env_root: str = 'ES_ROOT',
        env_config_root: str = 'ES_CONFIG_ROOT',
        *,
        cache: ConfigCache | None = None
    ) -> None:
        self._cache = cache
        self.__configs: dict[str, Configuration] = {}
        self.__lock = Lock()

        root = os.environ.get(env_root)
        if root is not None:
            root = join(root.rstrip(_SLASHES), '')
            if not isdir(root):
                root = None
        if root is None:
            # the parent of wherever the running script lives,
            # i.e. `<root>/bin/app.py` -> `<root>/`.
            script_dir = (
                dirname(abspath(sys.argv[0]))
                if sys.argv and sys.argv[0] else os.getcwd())
            root = join(dirname(script_dir), '')
            if not isdir(root):
                root = ''
        self.__root: str = root

        config = os.environ.get(env_config_root)
        if config is None:
            config = join(root, 'etc') + os.sep
            if not isdir(config):
                config = os.sep + 'etc' + os.sep
        elif not config.endswith(tuple(_SLASHES)):
            config += os.sep
        self.__config: str = config

        self.__hostname = socket.gethostname()

    @property
    def root_path(self) -> str:
        return self.__root

    @property
    def config_path(self) -> str:
        return self.__config

    @property
    def lib_path(self) -> str:
        return join(self.__root, 'lib') + os.sep

    @property
    def log_path(self) -> str:
        return join(self.__root, 'log') + os.sep

    @property
    def hostname(self) -> str:
        return self.__hostname

    def candidates(self, name: str) -> list[str]:
        """Files `self[name]` would look at, most specific first."""
        return [
            join(self.__config, self.__hostname, f'{name}.conf'),
            join(self.__config, f'{name}.conf'),
            f'{name}.conf',
        ]

    def __getitem__(self, name: str) -> Configuration:
        if not name:
            raise KeyError(name)
        with self.__lock:
            if name in self.__configs:
                return self.__configs[name]
            for i in self.candidates(name):
                if exists(i):
                    logger.info('Using %s for config "%s".', i, name)
                    ret = Configuration(i, cache=self._cache)
                    self.__configs[name] = ret
                    return ret
        raise KeyError(name)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self.__configs))

    def __len__(self) -> int:
        return len(self.__configs)

    def complete_path(self, path: str) -> str:
        """Relative paths are taken from `root_path`, with a trailing slash."""
        if not path:
            return path
        path = path.rstrip(_SLASHES) + os.sep
        if isabs(path):
            return path
        return join(self.__root, path)

    def __str__(self) -> str:
        return f'SystemConfig root: {self.__root} (config: {self.__config})'

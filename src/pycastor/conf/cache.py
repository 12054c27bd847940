# -*- encoding: utf-8 -*-
# @File   : cache.py
# @Time   : 2024/10/13 02:25:51
# @Author : Kariko Lin

"""Parse each configuration once, then share it.

All holders of one filename see the very same `Tree`.
Writing through one of them is visible to all the others.
"""

import logging
from os.path import exists
from threading import Lock, RLock
from typing import Iterator, NamedTuple

from .parser import ConfParser
from .model import Tree

logger = logging.getLogger(__name__)


class CachedTree(NamedTuple):
    tree: Tree
    # held for one resolve + read (or mutate), shared with every view.
    lock: RLock


class ConfigCache:
    """Maps a filename (or any string id) to its parsed tree."""

    def __init__(self) -> None:
        self.__trees: dict[str, CachedTree] = {}
        self.__lock = Lock()

    def load(
        self, filename: str, *,
        create: bool = False,
        encoding: str | None = None
    ) -> CachedTree:
        """Parses `filename` unless it is already cached.

        With `create=True` a missing file is created empty first.
        `ParseError` and `OSError` propagate, and nothing gets cached then.
        """
        with self.__lock:
            if filename in self.__trees:
                return self.__trees[filename]
            if create and not exists(filename):
                logger.info('Creating empty config %s.', filename)
                open(filename, 'a', encoding=encoding).close()
            ret = CachedTree(ConfParser(filename, encoding).read(), RLock())
            self.__trees[filename] = ret
            logger.info('Loaded config %s.', filename)
            return ret

    def load_string(
        self, identifier: str, text: str, replace: bool = True
    ) -> CachedTree:
        """Same as `load()`, but from an in-memory buffer.

        With `replace=True` an existing tree is thrown away and `text`
        is parsed from scratch. Old holders keep the old tree.
        """
        with self.__lock:
            if identifier in self.__trees and not replace:
                return self.__trees[identifier]
            tree = ConfParser.loads(text, identifier)
            if identifier in self.__trees:
                logger.info('Replacing cached config %s.', identifier)
            ret = CachedTree(tree, RLock())
            self.__trees[identifier] = ret
            return ret

    def evict(self, identifier: str) -> None:
        with self.__lock:
            self.__trees.pop(identifier, None)

    def clear(self) -> None:
        with self.__lock:
            self.__trees.clear()

    def __contains__(self, identifier: object) -> bool:
        with self.__lock:
            return identifier in self.__trees

    def __len__(self) -> int:
        with self.__lock:
            return len(self.__trees)

    def __iter__(self) -> Iterator[str]:
        with self.__lock:
            return iter(list(self.__trees))


# the process wide one, used whenever no cache is passed explicitly.
default_cache = ConfigCache()

# -*- encoding: utf-8 -*-
# @File   : config.py
# @Time   : 2024/10/13 03:02:14
# @Author : Kariko Lin

"""Typed access to a cached configuration tree.

    ```python
    conf = Configuration('net.conf')
    conf.get_int('net.port')            # raises if missing or not an int
    conf.try_get_int(80, 'net', 'port') # falls back to 80 instead
    conf.set_int(8081, 'net.port')      # the key must exist already
    conf.store()
    ```

Locking only covers ONE call. A `get_*` followed by a `set_*` may race
with other threads, so wrap such sequences into `with conf.locked():`.
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Self

from .cache import CachedTree, ConfigCache, default_cache
from .convert import (
    from_bool, from_char, from_float,
    int_converter, int_formatter, remove_comment,
    to_bool, to_char, to_float
)
from .errors import ConversionError, PathNotFound
from .model import NamedEntry, Section, StringValue, Tree
from .parser import ConfParser, serialize
from .path import (
    flatten, path_to_string, resolve_all, resolve_last, resolve_section
)

logger = logging.getLogger(__name__)

_to_byte, _from_byte = int_converter('byte'), int_formatter('byte')
_to_short, _from_short = int_converter('short'), int_formatter('short')
_to_ushort, _from_ushort = int_converter('ushort'), int_formatter('ushort')
_to_int, _from_int = int_converter('int'), int_formatter('int')
_to_uint, _from_uint = int_converter('uint'), int_formatter('uint')
_to_long, _from_long = int_converter('long'), int_formatter('long')
_to_ulong, _from_ulong = int_converter('ulong'), int_formatter('ulong')


class Configuration:
    """A configuration file, or a view onto one of its sections."""

    # typed setters used to drop formatting errors silently.
    # flip this to have them raise `ConversionError` instead.
    strict_setters = False

    def __init__(
        self, filename: str | None = None, *,
        create: bool = False,
        encoding: str | None = None,
        cache: ConfigCache | None = None
    ) -> None:
        self._cache = default_cache if cache is None else cache
        self._fn = ''
        # the file (or id) the whole tree was loaded from, shared by views.
        self._origin = ''
        self._encoding = encoding
        self._root: CachedTree | None = None
        self._local: Tree | None = None
        if filename is not None:
            self.load(filename, create=create)

    @classmethod
    def from_string(
        cls, identifier: str, text: str, replace: bool = True, *,
        cache: ConfigCache | None = None
    ) -> Self:
        ret = cls(cache=cache)
        ret.load_string(identifier, text, replace)
        return ret

    @property
    def filename(self) -> str:
        return self._fn

    @property
    def tree(self) -> Tree:
        """The entries this instance is rooted at."""
        if self._local is None:
            raise RuntimeError('No configuration loaded yet.')
        return self._local

    def load(self, filename: str, *, create: bool = False) -> None:
        """Attaches to `filename`, parsing it only if nobody did before."""
        self._attach(filename, self._cache.load(
            filename, create=create, encoding=self._encoding))

    def load_string(
        self, identifier: str, text: str, replace: bool = True
    ) -> None:
        self._attach(identifier, self._cache.load_string(
            identifier, text, replace))

    def _attach(self, filename: str, root: CachedTree) -> None:
        self._fn = filename
        self._origin = filename
        self._root = root
        self._local = root.tree

    def store(self, filename: str | None = None) -> None:
        """Writes the whole tree back to the file it was loaded from,
        unless `filename` says otherwise.

        A view stores the full tree as well, not just its own section.
        """
        target = filename or self._origin
        with self.locked():
            ConfParser(target, self._encoding).write(
                self._root.tree)  # type: ignore[union-attr]
        logger.info('Stored config %s.', target)

    def serialize(self) -> str:
        with self.locked():
            return serialize(self.tree)

    @contextmanager
    def locked(self) -> Iterator[Self]:
        """Holds the tree lock across several calls.

        The lock is re-entrant, so accessors may be called inside.
        """
        if self._root is None:
            raise RuntimeError('No configuration loaded yet.')
        with self._root.lock:
            yield self

    def get_all_nodes[E: NamedEntry](
        self, kind: type[E], *path: str | None
    ) -> list[E]:
        with self.locked():
            return resolve_all(self.tree, kind, *path, source=self._fn)

    def get_node[E: NamedEntry](
        self, kind: type[E], *path: str | None
    ) -> E | None:
        with self.locked():
            return resolve_last(self.tree, kind, *path, source=self._fn)

    def has(self, *path: str | None) -> bool:
        if not flatten(*path):
            return False
        try:
            return bool(self.get_all_nodes(StringValue, *path)
                        or self.get_all_nodes(Section, *path))
        except PathNotFound:
            return False

    def get_line_in_config(self, *path: str | None) -> int:
        """Source line of the key (or section) at `path`, -1 if absent."""
        if not flatten(*path):
            return -1
        try:
            node: NamedEntry | None = (
                self.get_node(StringValue, *path)
                or self.get_node(Section, *path))
        except PathNotFound:
            return -1
        return -1 if node is None else node.line

    def get_all_strings(self, *path: str | None) -> list[str]:
        """Every value of a (duplicated) key, in file order."""
        found = self.get_all_nodes(StringValue, *path)
        if not found:
            raise PathNotFound(path_to_string(*path), source=self._fn)
        return [i.value for i in found]

    def try_get_all_strings(
        self, default: list[str], *path: str | None
    ) -> list[str]:
        try:
            return self.get_all_strings(*path)
        except PathNotFound:
            return default

    def get_string(self, *path: str | None) -> str:
        """The raw value, trailing comments included."""
        found = self.get_node(StringValue, *path)
        if found is None:
            raise PathNotFound(path_to_string(*path), source=self._fn)
        return found.value

    def try_get_string(self, default: str, *path: str | None) -> str:
        try:
            return self.get_string(*path)
        except PathNotFound:
            return default

    def set_string(self, value: str, *path: str | None) -> None:
        """Overwrites an *existing* key. Missing keys are never created."""
        with self.locked():
            found = resolve_last(self.tree, StringValue, *path, source=self._fn)
            if found is None:
                raise PathNotFound(path_to_string(*path), source=self._fn)
            found.value = value

    def get_as[T](
        self, converter: Callable[[str], T], type_name: str,
        *path: str | None
    ) -> T:
        raw = remove_comment(self.get_string(*path))
        try:
            return converter(raw)
        except (ValueError, TypeError) as e:
            raise ConversionError(
                path_to_string(*path), raw, type_name) from e

    def try_get_as[T](
        self, converter: Callable[[str], T], type_name: str,
        default: T, *path: str | None
    ) -> T:
        try:
            return self.get_as(converter, type_name, *path)
        except (PathNotFound, ConversionError):
            return default

    def set_as(
        self, formatter: Callable[[Any], str], type_name: str,
        value: Any, *path: str | None
    ) -> None:
        with self.locked():
            found = resolve_last(self.tree, StringValue, *path, source=self._fn)
            if found is None:
                raise PathNotFound(path_to_string(*path), source=self._fn)
            try:
                found.value = formatter(value)
            except (ValueError, TypeError) as e:
                if self.strict_setters:
                    raise ConversionError(
                        path_to_string(*path), repr(value), type_name) from e
                logger.warning('Ignored setting %s = %r in %s: %s',
                               path_to_string(*path), value, self._fn, e)

    def get_bool(self, *path: str | None) -> bool:
        return self.get_as(to_bool, 'bool', *path)

    def try_get_bool(self, default: bool, *path: str | None) -> bool:
        return self.try_get_as(to_bool, 'bool', default, *path)

    def set_bool(self, value: bool, *path: str | None) -> None:
        self.set_as(from_bool, 'bool', value, *path)

    def get_char(self, *path: str | None) -> str:
        return self.get_as(to_char, 'char', *path)

    def try_get_char(self, default: str, *path: str | None) -> str:
        return self.try_get_as(to_char, 'char', default, *path)

    def set_char(self, value: str, *path: str | None) -> None:
        self.set_as(from_char, 'char', value, *path)

    def get_byte(self, *path: str | None) -> int:
        return self.get_as(_to_byte, 'byte', *path)

    def try_get_byte(self, default: int, *path: str | None) -> int:
        return self.try_get_as(_to_byte, 'byte', default, *path)

    def set_byte(self, value: int, *path: str | None) -> None:
        self.set_as(_from_byte, 'byte', value, *path)

    def get_short(self, *path: str | None) -> int:
        return self.get_as(_to_short, 'short', *path)

    def try_get_short(self, default: int, *path: str | None) -> int:
        return self.try_get_as(_to_short, 'short', default, *path)

    def set_short(self, value: int, *path: str | None) -> None:
        self.set_as(_from_short, 'short', value, *path)

    def get_ushort(self, *path: str | None) -> int:
        return self.get_as(_to_ushort, 'ushort', *path)

    def try_get_ushort(self, default: int, *path: str | None) -> int:
        return self.try_get_as(_to_ushort, 'ushort', default, *path)

    def set_ushort(self, value: int, *path: str | None) -> None:
        self.set_as(_from_ushort, 'ushort', value, *path)

    def get_int(self, *path: str | None) -> int:
        return self.get_as(_to_int, 'int', *path)

    def try_get_int(self, default: int, *path: str | None) -> int:
        return self.try_get_as(_to_int, 'int', default, *path)

    def set_int(self, value: int, *path: str | None) -> None:
        self.set_as(_from_int, 'int', value, *path)

    def get_uint(self, *path: str | None) -> int:
        return self.get_as(_to_uint, 'uint', *path)

    def try_get_uint(self, default: int, *path: str | None) -> int:
        return self.try_get_as(_to_uint, 'uint', default, *path)

    def set_uint(self, value: int, *path: str | None) -> None:
        self.set_as(_from_uint, 'uint', value, *path)

    def get_long(self, *path: str | None) -> int:
        return self.get_as(_to_long, 'long', *path)

    def try_get_long(self, default: int, *path: str | None) -> int:
        return self.try_get_as(_to_long, 'long', default, *path)

    def set_long(self, value: int, *path: str | None) -> None:
        self.set_as(_from_long, 'long', value, *path)

    def get_ulong(self, *path: str | None) -> int:
        return self.get_as(_to_ulong, 'ulong', *path)

    def try_get_ulong(self, default: int, *path: str | None) -> int:
        return self.try_get_as(_to_ulong, 'ulong', default, *path)

    def set_ulong(self, value: int, *path: str | None) -> None:
        self.set_as(_from_ulong, 'ulong', value, *path)

    def get_float(self, *path: str | None) -> float:
        return self.get_as(to_float, 'float', *path)

    def try_get_float(self, default: float, *path: str | None) -> float:
        return self.try_get_as(to_float, 'float', default, *path)

    def set_float(self, value: float, *path: str | None) -> None:
        self.set_as(from_float, 'float', value, *path)

    # Python has a single float type, double is kept for the API's sake.
    get_double = get_float
    try_get_double = try_get_float
    set_double = set_float

    def get_names(self, *path: str | None) -> list[str]:
        """Keys directly below the section at `path` (root if empty)."""
        with self.locked():
            return resolve_section(self.tree, path, self._fn).names(StringValue)

    def get_sections(self, *path: str | None) -> list[str]:
        """Sections directly below the section at `path` (root if empty)."""
        with self.locked():
            return resolve_section(self.tree, path, self._fn).names(Section)

    def get_instance(self, *path: str | None) -> 'Configuration':
        """A view rooted at the section at `path`.

        Nothing is copied: the view writes straight into this tree.
        """
        with self.locked():
            level = resolve_section(self.tree, path, self._fn)
        ret = Configuration(encoding=self._encoding, cache=self._cache)
        ret._fn = f'{self._fn}-{path_to_string(*path)}'
        ret._origin = self._origin
        ret._root = self._root
        ret._local = level
        return ret

    def __repr__(self) -> str:
        return f'<Configuration {self._fn or "(unloaded)"}>'

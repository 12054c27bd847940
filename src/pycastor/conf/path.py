# -*- encoding: utf-8 -*-
# @File   : path.py
# @Time   : 2024/10/13 00:12:30
# @Author : Kariko Lin

"""Dotted path lookups.

A path is any number of strings, each of which may be dotted itself,
so `('a.b', 'c')`, `('a', 'b', 'c')` and `('a.b.c',)` all mean the same.
"""

from typing import Iterable

from .consts import ConfMark
from .errors import PathNotFound
from .model import NamedEntry, Section, Tree


def flatten(*segments: str | None) -> list[str]:
    ret: list[str] = []
    for i in segments:
        if i is None:
            continue
        ret.extend(i.split(ConfMark.PATH_SEP))
    return ret


def path_to_string(*segments: str | None) -> str:
    return ConfMark.PATH_SEP.value.join(flatten(*segments))


def _walk(
    tree: Tree, components: list[str], source: str | None
) -> Tree:
    """Descends through every component but the last one."""
    level = tree
    for i in components[:-1]:
        section = level.get(Section, i)
        if section is None:
            raise PathNotFound(
                ConfMark.PATH_SEP.value.join(components), i, source)
        level = section.children
    return level


def resolve_all[E: NamedEntry](
    tree: Tree, kind: type[E], *segments: str | None,
    source: str | None = None
) -> list[E]:
    """Every entry of `kind` the path points at, in file order.

    A missing *intermediate* section raises `PathNotFound`,
    while a missing final component just results in `[]`.
    """
    components = flatten(*segments)
    if not components:
        # the root itself, wrapped so that callers need not special-case it.
        if issubclass(Section, kind):
            return [Section('Root', 0, tree)]  # type: ignore[list-item]
        return []
    return _walk(tree, components, source).get_all(kind, components[-1])


def resolve_last[E: NamedEntry](
    tree: Tree, kind: type[E], *segments: str | None,
    source: str | None = None
) -> E | None:
    found = resolve_all(tree, kind, *segments, source=source)
    return found[-1] if found else None


def resolve_section(
    tree: Tree, segments: Iterable[str | None], source: str | None = None
) -> Tree:
    """Children of the section at `segments`, or `tree` for an empty path."""
    segments = tuple(segments)
    section = resolve_last(tree, Section, *segments, source=source)
    if section is None:
        raise PathNotFound(path_to_string(*segments), source=source)
    return section.children

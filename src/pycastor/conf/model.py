# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/12 21:26:09
# @Author : Kariko Lin

"""
Castor configuration tree, basically a nested INI without `configparser`'s
losses. Every line of the source file becomes exactly one entry:

    ```
    # a comment        -> Comment
                       -> Blank
    [net]              -> Section, with its own Tree
        host = local   -> StringValue
    [!net]             -> (closes Section)
    ```

Sections do NOT keep a pointer back to their parent.
Whoever walks the tree has to keep the trail on its own stack.
"""

from collections.abc import MutableSequence
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, overload

from .consts import ConfMark
from .errors import InvalidName


def check_name(name: str) -> str:
    if not name or ConfMark.PATH_SEP in name:
        raise InvalidName(name)
    return name


class _Named:
    # StringValue and Section are identified by name only,
    # so a duplicate key with another value still equals the first one.
    name: str

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.name == other.name  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.name))


@dataclass(eq=False)
class StringValue(_Named):
    name: str
    value: str = ''
    line: int = -1

    def __post_init__(self) -> None:
        check_name(self.name)


@dataclass(eq=False)
class Section(_Named):
    name: str
    line: int = -1
    children: 'Tree' = field(default_factory=lambda: Tree())

    def __post_init__(self) -> None:
        check_name(self.name)


@dataclass
class Comment:
    text: str
    line: int = -1


@dataclass
class Blank:
    line: int = -1


type Entry = StringValue | Section | Comment | Blank
type NamedEntry = StringValue | Section


class Tree(MutableSequence[Entry]):
    """Ordered entries of one scope, either the file root or a section."""

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self.__raw: list[Entry] = list(entries)

    @overload
    def __getitem__(self, index: int) -> Entry: ...
    @overload
    def __getitem__(self, index: slice) -> 'Tree': ...

    def __getitem__(self, index: int | slice) -> 'Entry | Tree':
        if isinstance(index, slice):
            return Tree(self.__raw[index])
        return self.__raw[index]

    def __setitem__(self, index: Any, value: Any) -> None:
        self.__raw[index] = value

    def __delitem__(self, index: int | slice) -> None:
        del self.__raw[index]

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.__raw)

    def insert(self, index: int, value: Entry) -> None:
        self.__raw.insert(index, value)

    def __repr__(self) -> str:
        return 'Tree { .cnt = %d }' % len(self.__raw)

    def get_all[E: NamedEntry](self, kind: type[E], name: str) -> list[E]:
        """Direct children of `kind` called `name`, in file order."""
        return [
            i for i in self.__raw
            if isinstance(i, kind) and i.name == name
        ]

    def get[E: NamedEntry](self, kind: type[E], name: str) -> E | None:
        """The *last* matching child, since duplicate keys are last-wins."""
        found = self.get_all(kind, name)
        return found[-1] if found else None

    def has_section(self, name: str) -> bool:
        return any(
            isinstance(i, Section) and i.name == name for i in self.__raw)

    def names(self, kind: type[NamedEntry]) -> list[str]:
        return [i.name for i in self.__raw if isinstance(i, kind)]

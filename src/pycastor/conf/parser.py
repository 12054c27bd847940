# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/12 22:01:45
# @Author : Kariko Lin

"""Reads and writes Castor `.conf` files.

The format is line based, and every non-blank line has to be one of:

    ```
    # comment, kept verbatim
    [section]
    key = value        ; split at the FIRST '=', both sides trimmed
    [!section]         ; must close the innermost open section
    ```

Leading whitespace is insignificant, so the tab indentation written by
`serialize()` is only cosmetic.
"""

import logging
from io import StringIO
from typing import TextIO
from warnings import warn

import chardet

from ..abstract import FileHandler
from .consts import ConfMark
from .errors import DuplicateSection, InvalidName, ParseError
from .model import Blank, Comment, Section, StringValue, Tree

logger = logging.getLogger(__name__)


class _SkipState:
    """Swallows a duplicated section, nested ones included."""

    def __init__(self, name: str) -> None:
        self.names = [name]

    @property
    def done(self) -> bool:
        return not self.names


class ConfParser(FileHandler[Tree]):
    def __init__(self, filename: str, encoding: str | None = None) -> None:
        super().__init__(filename, encoding)

    @staticmethod
    def _parse_tag(line: str, source: str, lineno: int) -> tuple[bool, str]:
        """`[name]` -> (False, name), `[!name]` -> (True, name)."""
        if not line.endswith(ConfMark.SECTION_END):
            raise ParseError(source, lineno, f'Unterminated section tag ({line})')
        name = line[1:-1]
        closing = name.startswith(ConfMark.SECTION_CLOSE)
        if closing:
            name = name[1:]
        name = name.strip()
        if not name or ConfMark.PATH_SEP in name:
            raise ParseError(source, lineno, f'Invalid section name ({line})')
        return closing, name

    @staticmethod
    def readstream(buf: TextIO, source: str = '<string>') -> Tree:
        """Parses an already decoded text stream.

        Raises `ParseError` on the first malformed line,
        or if some section is still open at the end of input.
        """
        root = Tree()
        # (name, tree) of every open section, innermost last.
        # the root is at the bottom and is never popped.
        history: list[tuple[str, Tree]] = [('', root)]
        skip: _SkipState | None = None
        lineno = 0

        for lineno, raw in enumerate(buf, start=1):
            line = raw.strip()
            level = history[-1][1]

            if skip is not None:
                # only tags matter while skipping
                if line.startswith(ConfMark.SECTION_BEGIN):
                    closing, name = ConfParser._parse_tag(line, source, lineno)
                    if not closing:
                        skip.names.append(name)
                    elif skip.names.pop() != name:
                        raise ParseError(
                            source, lineno,
                            f'Sections nested incorrectly ({line})')
                    if skip.done:
                        skip = None
                continue

            if not line:
                level.append(Blank(lineno))
            elif line.startswith(ConfMark.COMMENT):
                level.append(Comment(line, lineno))
            elif line.startswith(ConfMark.SECTION_BEGIN):
                closing, name = ConfParser._parse_tag(line, source, lineno)
                if closing:
                    if len(history) == 1:
                        raise ParseError(
                            source, lineno,
                            f'Closing a section never opened ({line})')
                    if history[-1][0] != name:
                        raise ParseError(
                            source, lineno,
                            f'Sections nested incorrectly ({line}), '
                            f'expected [!{history[-1][0]}]')
                    history.pop()
                elif level.has_section(name):
                    warn(DuplicateSection(name, lineno, source), stacklevel=2)
                    logger.warning(
                        'Section [%s] already defined in %s, '
                        'skipping the one at line %d.', name, source, lineno)
                    skip = _SkipState(name)
                else:
                    section = Section(name, lineno)
                    level.append(section)
                    history.append((name, section.children))
            else:
                key, sep, val = line.partition(ConfMark.ASSIGN)
                if not sep:
                    raise ParseError(source, lineno, f'Parse error ({line})')
                try:
                    level.append(StringValue(key.strip(), val.strip(), lineno))
                except InvalidName as e:
                    raise ParseError(source, lineno, str(e)) from e

        if skip is not None:
            raise ParseError(
                source, lineno,
                f'Section [{skip.names[-1]}] is never closed')
        if len(history) > 1:
            raise ParseError(
                source, lineno,
                f'Section [{history[-1][0]}] is never closed')
        return root

    @staticmethod
    def loads(text: str, source: str = '<string>') -> Tree:
        return ConfParser.readstream(StringIO(text), source)

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if not codec['encoding'] or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8', 'confidence': 0.0}
        logger.info('Decoding %s as %s.', filename, codec['encoding'])

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            buf = raw.decode('latin-1')
        return StringIO(buf)

    def read(self) -> Tree:
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return self.readstream(fp, self._fn)
        except UnicodeDecodeError:
            return self.readstream(self._decode_file(self._fn), self._fn)

    def write(self, instance: Tree) -> None:
        """Overwrites the file in place. No backup, no atomic rename."""
        with open(self._fn, 'w', encoding=self._codec) as fp:
            fp.write(serialize(instance))

    def __str__(self) -> str:
        return 'Castor config: ' + super().__str__() + f'({self._codec})'


def serialize(tree: Tree, depth: int = 0) -> str:
    pad = ConfMark.INDENT.value * depth
    ret: list[str] = []
    for i in tree:
        match i:
            case StringValue(name=name, value=value):
                ret.append(f'{pad}{name} = {value}\n')
            case Section(name=name, children=children):
                ret.append(f'{pad}[{name}]\n')
                ret.append(serialize(children, depth + 1))
                ret.append(f'{pad}[!{name}]\n')
            case Comment(text=text):
                ret.append(f'{text}\n')
            case Blank():
                ret.append('\n')
    return ''.join(ret)

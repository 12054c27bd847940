# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/12 21:03:17
# @Author : Kariko Lin

from enum import Enum
from typing import NamedTuple


class ConfMark(str, Enum):
    COMMENT = '#'
    SECTION_BEGIN = '['
    SECTION_END = ']'
    SECTION_CLOSE = '!'
    ASSIGN = '='
    PATH_SEP = '.'
    INDENT = '\t'


class IntBounds(NamedTuple):
    low: int
    high: int


# keyed by the accessor suffix, i.e. `get_ushort` -> 'ushort'.
INT_WIDTHS: dict[str, IntBounds] = {
    'byte': IntBounds(0, 0xFF),
    'short': IntBounds(-0x8000, 0x7FFF),
    'ushort': IntBounds(0, 0xFFFF),
    'int': IntBounds(-0x8000_0000, 0x7FFF_FFFF),
    'uint': IntBounds(0, 0xFFFF_FFFF),
    'long': IntBounds(-0x8000_0000_0000_0000, 0x7FFF_FFFF_FFFF_FFFF),
    'ulong': IntBounds(0, 0xFFFF_FFFF_FFFF_FFFF),
}

# prefixes, matched case-insensitively. anything else reads as False.
TRUE_LITERALS = ('true', '1', 'yes', 'on')

# -*- encoding: utf-8 -*-
# @File   : convert.py
# @Time   : 2024/10/13 01:40:08
# @Author : Kariko Lin

"""str <-> typed value conversions of the `Configuration` accessors.

Every `to_*` takes the raw stored string and raises `ValueError`
if it does not fit. Every `from_*` does the reverse for setters.
"""

import math
from typing import Callable

from .consts import ConfMark, INT_WIDTHS, TRUE_LITERALS


def remove_comment(raw: str) -> str:
    """`8080  # http` -> `8080`."""
    return raw.split(ConfMark.COMMENT, 1)[0].strip()


def to_bool(raw: str) -> bool:
    # never fails, unknown literals simply read as False.
    return raw.lower().startswith(TRUE_LITERALS)


def from_bool(value: bool) -> str:
    return str(bool(value))


def _check_width(value: int, width: str) -> int:
    bounds = INT_WIDTHS[width]
    if not bounds.low <= value <= bounds.high:
        raise ValueError(
            f'{value} out of {width} range [{bounds.low}, {bounds.high}]')
    return value


def int_converter(width: str) -> Callable[[str], int]:
    def to_int(raw: str) -> int:
        # `int()` alone would also take '1_000'.
        if '_' in raw:
            raise ValueError(f'invalid literal for {width}: {raw!r}')
        return _check_width(int(raw, 10), width)
    to_int.__name__ = f'to_{width}'
    return to_int


def int_formatter(width: str) -> Callable[[int], str]:
    def from_int(value: int) -> str:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f'{width} expected, got {type(value).__name__}')
        return str(_check_width(value, width))
    from_int.__name__ = f'from_{width}'
    return from_int


def to_float(raw: str) -> float:
    if '_' in raw:
        raise ValueError(f'could not convert string to float: {raw!r}')
    return float(raw)


def from_float(value: float) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f'float expected, got {type(value).__name__}')
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f'{value} has no textual form in a config file')
    return repr(float(value))


def to_char(raw: str) -> str:
    if len(raw) != 1:
        raise ValueError(f'exactly one character expected, got {raw!r}')
    return raw


def from_char(value: str) -> str:
    return to_char(value)

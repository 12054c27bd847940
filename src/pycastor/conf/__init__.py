# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:02:40
# @Author : Kariko Lin

from .cache import CachedTree, ConfigCache, default_cache
from .config import Configuration
from .errors import (
    ConfError,
    ConversionError,
    DuplicateSection,
    InvalidName,
    ParseError,
    PathNotFound
)
from .model import Blank, Comment, Section, StringValue, Tree
from .parser import ConfParser, serialize
from .path import flatten, path_to_string, resolve_all, resolve_last

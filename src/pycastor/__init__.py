# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 20:58:11
# @Author : Kariko Lin

import logging

from .conf import (
    Configuration, ConfigCache, ConfParser, Tree,
    StringValue, Section, Comment, Blank,
    ConfError, ParseError, PathNotFound, ConversionError, DuplicateSection
)
from .system import SystemConfig, get_base_path

__all__ = [
    'Configuration', 'ConfigCache', 'ConfParser', 'Tree',
    'StringValue', 'Section', 'Comment', 'Blank',
    'ConfError', 'ParseError', 'PathNotFound', 'ConversionError',
    'DuplicateSection',
    'SystemConfig', 'get_base_path'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')

# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from typing import TypeVar

T = TypeVar('T')


class FileHandler[T](metaclass=ABCMeta):
    def __init__(self, filename: str, encoding: str | None = None) -> None:
        self._fn = filename
        self._codec = encoding

    @property
    def filename(self) -> str:
        return self._fn

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn

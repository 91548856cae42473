# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/11/04 19:02:45

from abc import ABCMeta, abstractmethod
from os import PathLike, fspath
from typing import TypeVar

T = TypeVar('T')


class FileHandler[T](metaclass=ABCMeta):
    """Something loaded from, and saved back to, one or more files."""
    def __init__(self, *filenames: str | PathLike[str]) -> None:
        self._fns = tuple(fspath(i) for i in filenames)

    @property
    def filenames(self) -> tuple[str, ...]:
        return self._fns

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> bool:
        raise NotImplementedError

    def __str__(self) -> str:
        return ', '.join(self._fns)

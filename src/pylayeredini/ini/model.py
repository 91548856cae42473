# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/11/03 15:40:22

"""
Two layered INI structure.

Each `LayeredIni` keeps two independent groups of sections,
`local` and `global`. Reading goes to `local` first,
writing picks one group explicitly.
"""

from collections.abc import MutableMapping
from enum import Enum
from types import MappingProxyType
from typing import (
    Any, Callable, Iterable, Iterator, Mapping, Protocol, runtime_checkable
)
from warnings import warn

from . import listcodec
from .numeric import (
    Number, NumberFormatError, NumberKind,
    convert, format_number, parse_number
)

__all__ = [
    'Destination', 'InvalidDestination', 'IniRenderable',
    'IniSection', 'LayeredIni', 'NO_SECTION', 'stringify'
]


class Destination(str, Enum):
    LOCAL = 'local'
    GLOBAL = 'global'


class InvalidDestination(RuntimeError):
    """Write target is neither `local` nor `global`.

    A bug in the caller, not something to recover from.
    """
    pass


@runtime_checkable
class IniRenderable(Protocol):
    """Types knowing how to write themselves into an INI value.

    Only `to_string()` counts, a camel case `toString()` does not.
    """
    def to_string(self) -> str:
        ...


def stringify(value: object, base: int = 10) -> str:
    """Render a value the way `IniSection.set()` stores it.

    Numbers win over everything else, so an `int` enum
    still gets numeric formatting.
    """
    if isinstance(value, (bool, int, float)):
        return format_number(value, base)
    if isinstance(value, str):
        return value
    if isinstance(value, IniRenderable):
        return value.to_string()
    raise TypeError(
        f'cannot store {type(value).__name__} as an INI value, '
        'implement `to_string()` or convert it first.')


class IniSection(MutableMapping[str, str]):
    """... is a dict of `str: str`, iterated in key order.

    Typed getters are views over the raw string, nothing typed is kept.
    """
    def __init__(
        self, name: str, pairs_to_import: Mapping[str, str] | None = None
    ) -> None:
        self._name = name
        self._data: dict[str, str] = {}
        if pairs_to_import:
            self.update(pairs_to_import)

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        if isinstance(value, str) and ('\n' in value or '\r' in value):
            warn(f'[{self._name}] "{key}" holds a line break, '
                 'it will not survive saving.')
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._data))

    def __str__(self) -> str:
        return f'[{self._name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))

    def copy(self) -> 'IniSection':
        return IniSection(self._name, self._data)

    def get_as[T](
        self, key: str, converter: Callable[[str], T], default: Any = None
    ) -> T | Any:
        """`converter(raw)` if `key` exists, else `default` untouched."""
        if key not in self:
            return default
        return converter(self[key])

    def get_number(
        self, key: str, default: Number = 0,
        base: int = 10, kind: NumberKind | None = None
    ) -> Number:
        """Number stored at `key`.

        Falls back to `default` when the key is missing
        or its value does not fit `kind` (inferred from `default`).
        """
        if key not in self:
            return default
        return parse_number(self[key], default, base, kind)[0]

    def get_bool(
        self, key: str, default: bool = False, base: int = 10
    ) -> bool:
        return self.get_number(key, default, base, bool)

    def get_list[T](
        self, key: str, converter: Callable[[str], T] = str
    ) -> list[T]:
        if key not in self:
            return []
        return [converter(i) for i in listcodec.decode(self[key])]

    def get_number_list(
        self, key: str, kind: NumberKind = int, base: int = 10
    ) -> list[Number]:
        """Numbers of a list value. Elements which fail to convert
        are left out, rather than replaced by some default.
        """
        if key not in self:
            return []
        ret = []
        for i in listcodec.decode(self[key]):
            try:
                ret.append(convert(i, kind, base))
            except NumberFormatError:
                continue
        return ret

    def set(self, key: str, value: object, base: int = 10) -> str:
        self[key] = stringify(value, base)
        return self[key]

    def set_list(
        self, key: str, values: Iterable[object], base: int = 10
    ) -> str:
        self[key] = listcodec.encode(stringify(i, base) for i in values)
        return self[key]

    def rem(self, key: str) -> bool:
        if key not in self:
            return False
        del self[key]
        return True


class _ReadOnlySection(IniSection):
    def __setitem__(self, key: str, value: str) -> None:
        raise TypeError(f'{self!r} is read only.')

    def __delitem__(self, key: str) -> None:
        raise TypeError(f'{self!r} is read only.')


# returned by `LayeredIni.at()` when neither layer has the section.
NO_SECTION: IniSection = _ReadOnlySection('')


class LayeredIni:
    """INI document made of a `local` and a `global` layer.

    ```ini
    key = val

    [section]
    key = val
    ```

    Pairs before the first section are kept apart, see `self.header`.

    Section lookups prefer `local`. Key lookups (`get*()`) go to
    whichever layer actually holds the key, `local` first.
    Writes land in one explicit layer, `local` by default.
    """
    def __init__(self) -> None:
        self.__local: dict[str, IniSection] = {}
        self.__global: dict[str, IniSection] = {}
        # pairs not belonging to any section, from either layer.
        self.__header = IniSection('')

    @property
    def header(self) -> IniSection:
        """Pairs found before the first section of a parsed stream."""
        return self.__header

    def _layer(self, destination: Destination | str) -> dict[str, IniSection]:
        match destination:
            case Destination.LOCAL:
                return self.__local
            case Destination.GLOBAL:
                return self.__global
            case _:
                raise InvalidDestination(
                    f'invalid configuration destination {destination!r}')

    def layer(
        self, destination: Destination | str
    ) -> Mapping[str, IniSection]:
        """Read only view of one layer. Sections inside stay mutable."""
        return MappingProxyType(self._layer(destination))

    def __getitem__(self, name: str) -> IniSection:
        """Section `name`, created in `local` if neither layer has it."""
        if (ret := self.find(name)) is not None:
            return ret
        return self.emplace(name)

    def at(self, name: str) -> IniSection:
        """Like `self[name]` but never creates,
        returning the read-only empty `NO_SECTION` instead.
        """
        ret = self.find(name)
        return NO_SECTION if ret is None else ret

    def find(self, name: str) -> IniSection | None:
        if name in self.__local:
            return self.__local[name]
        return self.__global.get(name)

    def emplace(
        self, name: str, destination: Destination | str = Destination.LOCAL
    ) -> IniSection:
        """Get or create section `name` in the given layer only."""
        layer = self._layer(destination)
        if name not in layer:
            layer[name] = IniSection(name)
        return layer[name]

    def __contains__(self, name: object) -> bool:
        return name in self.__local or name in self.__global

    def names(self) -> list[str]:
        return sorted(self.__local.keys() | self.__global.keys())

    def size(self) -> int:
        return len(self.names())

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def _holder(self, section: str, key: str) -> IniSection | None:
        for layer in (self.__local, self.__global):
            if section in layer and key in layer[section]:
                return layer[section]
        return None

    def get(self, section: str, key: str, default: Any = None) -> str | Any:
        holder = self._holder(section, key)
        return default if holder is None else holder[key]

    def get_as[T](
        self, section: str, key: str,
        converter: Callable[[str], T], default: Any = None
    ) -> T | Any:
        holder = self._holder(section, key)
        return default if holder is None else holder.get_as(key, converter)

    def get_number(
        self, section: str, key: str, default: Number = 0,
        base: int = 10, kind: NumberKind | None = None
    ) -> Number:
        holder = self._holder(section, key)
        if holder is None:
            return default
        return holder.get_number(key, default, base, kind)

    def get_bool(
        self, section: str, key: str, default: bool = False, base: int = 10
    ) -> bool:
        return self.get_number(section, key, default, base, bool)

    def get_list[T](
        self, section: str, key: str, converter: Callable[[str], T] = str
    ) -> list[T]:
        holder = self._holder(section, key)
        return [] if holder is None else holder.get_list(key, converter)

    def get_number_list(
        self, section: str, key: str, kind: NumberKind = int, base: int = 10
    ) -> list[Number]:
        holder = self._holder(section, key)
        return [] if holder is None else holder.get_number_list(key, kind, base)

    def set(
        self, section: str, key: str, value: object,
        destination: Destination | str = Destination.LOCAL, base: int = 10
    ) -> str:
        return self.emplace(section, destination).set(key, value, base)

    def set_list(
        self, section: str, key: str, values: Iterable[object],
        destination: Destination | str = Destination.LOCAL, base: int = 10
    ) -> str:
        return self.emplace(section, destination).set_list(key, values, base)

    def rem(
        self, section: str, key: str,
        destination: Destination | str = Destination.LOCAL
    ) -> bool:
        layer = self._layer(destination)
        return section in layer and layer[section].rem(key)

    def __str__(self) -> str:
        ret = ''
        for name in self.names():
            sect = self.at(name)
            ret += f'[{name}]\n'
            for k, v in sect.items():
                ret += f'{k} = {v}\n'
            ret += '\n'
        return ret

    def __repr__(self) -> str:
        return '<LayeredIni { .local = %d, .global = %d }>' % (
            len(self.__local), len(self.__global))

# -*- encoding: utf-8 -*-
# @File   : numeric.py
# @Time   : 2024/11/03 00:12:37

"""Number <-> string conversion for INI values.

Python's `int()`/`float()` never look at `LC_NUMERIC`,
so results here are the same whatever locale the host runs.
But `int()` and `float()` are far more forgiving than a config file
should be (`1_000`, trailing blanks, ...), thus the hand-made scanning.
"""

import math
import struct
from dataclasses import dataclass
from re import ASCII, IGNORECASE
from re import compile as regex

from ..text import WHITESPACE, ltrim

__all__ = [
    'IntType', 'FloatType', 'NumberFormatError',
    'INT8', 'INT16', 'INT32', 'INT64',
    'UINT8', 'UINT16', 'UINT32', 'UINT64',
    'FLOAT32', 'FLOAT64',
    'parse_number', 'format_number'
]


class NumberFormatError(ValueError):
    """Text does not hold a number of the requested kind."""
    pass


@dataclass(frozen=True)
class IntType:
    name: str
    bits: int
    signed: bool

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - (1 if self.signed else 0))) - 1

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.min <= value <= self.max


@dataclass(frozen=True)
class FloatType:
    name: str
    bits: int


INT8 = IntType('int8', 8, True)
INT16 = IntType('int16', 16, True)
INT32 = IntType('int32', 32, True)
INT64 = IntType('int64', 64, True)
UINT8 = IntType('uint8', 8, False)
UINT16 = IntType('uint16', 16, False)
UINT32 = IntType('uint32', 32, False)
UINT64 = IntType('uint64', 64, False)
FLOAT32 = FloatType('float32', 32)
FLOAT64 = FloatType('float64', 64)

type NumberKind = IntType | FloatType | type[int] | type[float] | type[bool]
type Number = int | float | bool

_DECIMAL_FLOAT = regex(
    r'[+-]?(\d+\.?\d*|\.\d+)(e[+-]?\d+)?', ASCII | IGNORECASE)
_HEX_FLOAT = regex(
    r'[+-]?0x([0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(p[+-]?\d+)?',
    ASCII | IGNORECASE)
_SPECIAL_FLOAT = regex(r'[+-]?(inf|infinity|nan)', ASCII | IGNORECASE)

_DIGITS = '0123456789abcdefghijklmnopqrstuvwxyz'


def resolve_kind(kind: NumberKind | None, default: object) -> NumberKind:
    """Pick the conversion for `default` when no explicit `kind` given."""
    if kind is not None:
        return kind
    # bool first, since bool is an int.
    if isinstance(default, bool):
        return bool
    if isinstance(default, float):
        return float
    return int


def _split_sign(text: str) -> tuple[int, str]:
    if text[:1] == '-':
        return -1, text[1:]
    if text[:1] == '+':
        return 1, text[1:]
    return 1, text


def parse_int(text: str, base: int = 10) -> int:
    """`strtol`-like, except that the whole text must be a number.

    Leading blanks are skipped, trailing ones are not.
    `base=0` detects `0x` (hex) and a leading `0` (octal).
    """
    if base != 0 and not 2 <= base <= 36:
        raise NumberFormatError(f'unsupported base {base}')
    sign, digits = _split_sign(ltrim(text))
    has_hex_prefix = (
        digits[:2].lower() == '0x'
        and len(digits) > 2
        and digits[2].lower() in _DIGITS[:16]
    )
    if base == 0:
        if has_hex_prefix:
            base, digits = 16, digits[2:]
        elif digits[:1] == '0':
            base = 8
        else:
            base = 10
    elif base == 16 and has_hex_prefix:
        digits = digits[2:]

    if not digits:
        raise NumberFormatError(f'no digits in {text!r}')
    value = 0
    for c in digits.lower():
        d = _DIGITS.find(c)
        if d < 0 or d >= base:
            raise NumberFormatError(
                f'unexpected {c!r} in {text!r} (base {base})')
        value = value * base + d
    return sign * value


def parse_float(text: str, kind: FloatType = FLOAT64) -> float:
    text = ltrim(text)
    if _SPECIAL_FLOAT.fullmatch(text):
        return float(text)
    if m := _HEX_FLOAT.fullmatch(text):
        value = float.fromhex(text)
    elif m := _DECIMAL_FLOAT.fullmatch(text):
        value = float(text)
    else:
        raise NumberFormatError(f'{text!r} is not a floating point number')
    if math.isinf(value):
        raise NumberFormatError(f'{text!r} overflows {kind.name}')
    if kind.bits == 32:
        try:
            value = struct.unpack('f', struct.pack('f', value))[0]
        except OverflowError:
            raise NumberFormatError(f'{text!r} overflows {kind.name}')
    # non-zero digits rounded down to nothing, like `strtod`'s ERANGE.
    if value == 0.0 and m.group(1).strip('0.'):
        raise NumberFormatError(f'{text!r} underflows {kind.name}')
    return value


def parse_bool(text: str, base: int = 10) -> bool:
    word = text.strip(WHITESPACE).lower()
    if word == 'true':
        return True
    if word == 'false':
        return False
    value = parse_int(text, base)
    if value not in (0, 1):
        raise NumberFormatError(f'{text!r} is not a boolean')
    return bool(value)


def convert(text: str, kind: NumberKind, base: int = 10) -> Number:
    """Strict conversion, raises `NumberFormatError`."""
    if kind is bool:
        return parse_bool(text, base)
    if kind is float:
        return parse_float(text)
    if isinstance(kind, FloatType):
        return parse_float(text, kind)
    value = parse_int(text, base)
    if isinstance(kind, IntType) and value not in kind:
        raise NumberFormatError(
            f'{value} out of {kind.name} range [{kind.min}, {kind.max}]')
    return value


def parse_number(
    text: str, default: Number = 0,
    base: int = 10, kind: NumberKind | None = None
) -> tuple[Number, bool]:
    """Convert `text`, never raising on malformed input.

    Returns:
        `(value, True)` if `text` converts,
        otherwise `(default, False)`.
    """
    try:
        return convert(text, resolve_kind(kind, default), base), True
    except NumberFormatError:
        return default, False


def format_int(value: int, base: int = 10) -> str:
    # non 8/16 bases fall back to decimal, like `std::setbase`.
    if base == 16:
        prefix = '0x'
        digits = format(abs(value), 'x')
    elif base == 8:
        prefix = '0'
        digits = format(abs(value), 'o')
    else:
        return str(value)
    if value == 0:
        return '0'
    return f'{"-" if value < 0 else ""}{prefix}{digits}'


def format_number(value: Number, base: int = 10) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return format_int(value, base)
    return repr(float(value))

# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/11/04 20:17:33

"""Reading and writing `LayeredIni`.

The format is deliberately tiny:

```ini
[section]
key = value
```

No comments, no continuation lines. A line that is neither
a `[section]` nor a `key = value` is just dropped, so is a pair with
an empty value. Whitespace around names, keys and values is trimmed.
"""

import logging
from contextlib import ExitStack
from io import StringIO, TextIOBase
from os import PathLike
from typing import IO, Mapping

import chardet

from ..abstract import FileHandler
from ..log import get_logger
from ..text import trim
from .model import Destination, IniSection, LayeredIni

__all__ = [
    'readstream', 'writestream', 'read_stream', 'write_stream',
    'LayeredIniParser', 'from_file', 'to_file'
]

type StrPath = str | PathLike[str]


def readstream(
    buf: TextIOBase | IO[str],
    layer: dict[str, IniSection] | None = None,
    header: IniSection | None = None
) -> dict[str, IniSection]:
    """Parse decoded text into `layer` (a new dict if not given).

    Sections already in `layer` get reused and updated.
    Pairs before the first section go to `header`.
    """
    if layer is None:
        layer = {}
    this_sect = IniSection('') if header is None else header
    while i := buf.readline():
        line = trim(i)
        if not line:
            continue
        if line[0] == '[' and line[-1] == ']':
            name = trim(line[1:-1])
            if name not in layer:
                layer[name] = IniSection(name)
            this_sect = layer[name]
            continue
        key, eq, val = line.partition('=')
        if not eq:
            continue
        val = trim(val)
        if val:
            this_sect[trim(key)] = val
    return layer


def writestream(
    layer: Mapping[str, IniSection], buf: TextIOBase | IO[str]
) -> None:
    """Dump one layer. Empty values are skipped, and so is the
    `[section]` line of a section having nothing else to write.
    """
    for name in sorted(layer):
        has_header = False
        for key, val in layer[name].items():
            if not val:
                continue
            if not has_header:
                buf.write(f'[{name}]\n')
                has_header = True
            buf.write(f'{key} = {val}\n')
        buf.write('\n')


def read_stream(
    local: TextIOBase | IO[str], glob: TextIOBase | IO[str] | None = None
) -> LayeredIni:
    ret = LayeredIni()
    if glob is not None:
        readstream(glob, ret._layer(Destination.GLOBAL), ret.header)
    readstream(local, ret._layer(Destination.LOCAL), ret.header)
    return ret


def write_stream(
    ini: LayeredIni,
    local: TextIOBase | IO[str], glob: TextIOBase | IO[str] | None = None
) -> None:
    if glob is not None:
        writestream(ini.layer(Destination.GLOBAL), glob)
    writestream(ini.layer(Destination.LOCAL), local)


class LayeredIniParser(FileHandler[LayeredIni]):
    """Load/save a `LayeredIni` from a local file and an optional global one.

    Neither reading nor writing raises on I/O trouble:
    problems are logged as warnings instead.
    """
    def __init__(
        self, local: StrPath, glob: StrPath | None = None, *,
        encoding: str | None = None,
        logger: logging.Logger | None = None
    ) -> None:
        if glob is None:
            super().__init__(local)
        else:
            super().__init__(local, glob)
        self._codec = encoding
        self._log = get_logger() if logger is None else logger
        self.missing: list[str] = []

    @property
    def local(self) -> str:
        return self._fns[0]

    @property
    def glob(self) -> str | None:
        return self._fns[1] if len(self._fns) > 1 else None

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if (
            codec is None
            or codec['encoding'] is None
            or codec['confidence'] < 0.8
        ):
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            buf = raw.decode('gbk', errors='replace')
        return StringIO(buf)

    @property
    def codec(self) -> str:
        """Encoding used both ways. `chardet` only steps in on read
        when the file does not decode with it."""
        return self._codec or 'utf-8'

    def _load(self, filename: str) -> StringIO:
        try:
            try:
                with open(filename, 'r', encoding=self.codec) as fp:
                    return StringIO(fp.read())
            except (UnicodeDecodeError, LookupError):
                return self._decode_file(filename)
        except OSError as e:
            self._log.warning(
                f'Unable to open configuration file "{filename}": {e}')
            self.missing.append(filename)
            return StringIO()

    @property
    def no_file(self) -> bool:
        """Whether the last `read()` missed the local file."""
        return self.local in self.missing

    def read(self) -> LayeredIni:
        self.missing = []
        local = self._load(self.local)
        glob = None if self.glob is None else self._load(self.glob)
        return read_stream(local, glob)

    def _render(self, instance: LayeredIni, dest: Destination) -> bytes:
        buf = StringIO()
        writestream(instance.layer(dest), buf)
        return buf.getvalue().encode(self.codec)

    def write(self, instance: LayeredIni) -> bool:
        """Save layers back, global first.

        Everything is encoded, and every file opened, before any file
        gets touched: one bad path or one unencodable value leaves
        all files as they were.
        """
        targets = [(self.local, Destination.LOCAL)]
        if self.glob is not None:
            targets.append((self.glob, Destination.GLOBAL))
        try:
            payloads = [(fn, self._render(instance, dest))
                        for fn, dest in targets]
        except (UnicodeError, LookupError) as e:
            self._log.warning(f'Unable to encode configuration for {self}: {e}')
            return False
        try:
            with ExitStack() as stack:
                # append mode: open (and create) without truncating.
                opened = [(stack.enter_context(open(fn, 'ab')), data)
                          for fn, data in payloads]
                for fp, data in reversed(opened):
                    fp.seek(0)
                    fp.truncate()
                    fp.write(data)
        except OSError as e:
            self._log.warning(f'Unable to save configuration to {self}: {e}')
            return False
        return True

    def __str__(self) -> str:
        return "INI layers: " + super().__str__() + f"({self._codec})"


def from_file(
    local: StrPath, glob: StrPath | None = None, *,
    encoding: str | None = None, logger: logging.Logger | None = None
) -> LayeredIni:
    """Read a `LayeredIni`; a missing file simply yields an empty layer."""
    return LayeredIniParser(
        local, glob, encoding=encoding, logger=logger).read()


def to_file(
    ini: LayeredIni, local: StrPath, glob: StrPath | None = None, *,
    encoding: str | None = None, logger: logging.Logger | None = None
) -> bool:
    """Save `ini`. `False` if any destination can't be opened or written."""
    return LayeredIniParser(
        local, glob, encoding=encoding, logger=logger).write(ini)

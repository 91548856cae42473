# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/02 21:05:44

from .ini import (
    Destination,
    InvalidDestination,
    IniRenderable,
    IniSection,
    LayeredIni,
    LayeredIniParser,
    NO_SECTION,
    from_file,
    to_file,
    read_stream,
    write_stream
)
from .ini.numeric import (
    INT8, INT16, INT32, INT64,
    UINT8, UINT16, UINT32, UINT64,
    FLOAT32, FLOAT64,
    parse_number,
    format_number
)
from .log import init_logging

__all__ = [
    'Destination', 'InvalidDestination', 'IniRenderable',
    'IniSection', 'LayeredIni', 'LayeredIniParser', 'NO_SECTION',
    'from_file', 'to_file', 'read_stream', 'write_stream',
    'INT8', 'INT16', 'INT32', 'INT64',
    'UINT8', 'UINT16', 'UINT32', 'UINT64',
    'FLOAT32', 'FLOAT64', 'parse_number', 'format_number',
    'init_logging'
]

# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/03 15:38:02

from .model import (
    Destination,
    InvalidDestination,
    IniRenderable,
    IniSection,
    LayeredIni,
    NO_SECTION
)
from .parser import (
    LayeredIniParser,
    from_file,
    to_file,
    read_stream,
    write_stream
)

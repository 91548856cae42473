# -*- encoding: utf-8 -*-
# @File   : log.py
# @Time   : 2024/11/04 22:31:10

"""Logging setup.

Nothing is configured on import. Applications call `init_logging()`
once; library parts only ever use `get_logger()` or a logger handed in.
"""

import logging
import sys
from typing import TextIO

LOGGER_NAME = 'pylayeredini'

_PREFIXES = {
    logging.CRITICAL: 'fat',
    logging.ERROR: 'err',
    logging.WARNING: 'war',
    logging.INFO: 'inf',
    logging.DEBUG: 'deb',
}

_COLORS = {
    logging.CRITICAL: '\033[0;37;43;5;1m',
    logging.ERROR: '\033[0;31;1m',
    logging.WARNING: '\033[0;33;1m',
}
_NORMAL = '\033[0m'


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


class PrefixFormatter(logging.Formatter):
    """`[time] [war] message`, optionally colored by level."""
    def __init__(self, colored: bool = False) -> None:
        super().__init__('[%(asctime)s] %(prefix)s %(message)s')
        self.colored = colored

    def format(self, record: logging.LogRecord) -> str:
        # levels between the named ones borrow the closest lower prefix.
        level = max(
            (i for i in _PREFIXES if i <= record.levelno), default=logging.DEBUG
        )
        record.prefix = f'[{_PREFIXES[level]}]'
        msg = super().format(record)
        if self.colored and level in _COLORS:
            return f'{_COLORS[level]}{msg}{_NORMAL}'
        return msg


class PackageHandler(logging.StreamHandler):
    """The handler `init_logging()` installs, and replaces on re-init."""
    pass


def init_logging(
    level: int = logging.INFO,
    stream: TextIO | None = None,
    colored: bool = False
) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling it again replaces the previous handler, so tests
    and long running hosts may re-init freely.
    """
    logger = get_logger()
    for i in list(logger.handlers):
        if isinstance(i, PackageHandler):
            logger.removeHandler(i)
    handler = PackageHandler(stream or sys.stderr)
    handler.setFormatter(PrefixFormatter(colored))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger

# -*- encoding: utf-8 -*-
# @File   : text.py
# @Time   : 2024/11/02 21:14:08

"""Whitespace helpers.

Only the C locale `isspace` set counts as blank here,
so NBSP and friends stay part of keys and values.
"""

WHITESPACE = ' \t\n\v\f\r'


def ltrim(s: str) -> str:
    return s.lstrip(WHITESPACE)


def rtrim(s: str) -> str:
    return s.rstrip(WHITESPACE)


def trim(s: str) -> str:
    return s.strip(WHITESPACE)

# -*- encoding: utf-8 -*-
# @File   : listcodec.py
# @Time   : 2024/11/02 21:30:51

"""List values packed into one INI value.

```ini
[section]
hosts = alpha,beta\\,gamma,c:\\\\temp
```

The separator itself plays the quote role: every element is written as
`,<escaped>,` and neighbours share their separators. Inside an element,
`,` and `\\` get a `\\` prefix.
"""

from typing import Iterable

from ..text import trim

SEPARATOR = ','
ESCAPE = '\\'


def escape(item: str) -> str:
    return ''.join(
        ESCAPE + c if c in (SEPARATOR, ESCAPE) else c for c in item
    )


def quote(item: str) -> str:
    return f'{SEPARATOR}{escape(item)}{SEPARATOR}'


def unquote(token: str) -> str:
    """Reverse `quote()`, reading up to the first unescaped separator.

    A token not opened by the separator is returned as is.
    """
    if not token or token[0] != SEPARATOR:
        return token
    ret, i = [], 1
    while i < len(token):
        c = token[i]
        if c == ESCAPE:
            i += 1
            if i < len(token):
                ret.append(token[i])
        elif c == SEPARATOR:
            break
        else:
            ret.append(c)
        i += 1
    return ''.join(ret)


def _next_separator(buf: str, start: int) -> int:
    escaping = False
    for i in range(start, len(buf)):
        if escaping:
            escaping = False
        elif buf[i] == ESCAPE:
            escaping = True
        elif buf[i] == SEPARATOR:
            return i
    return len(buf)


def encode(items: Iterable[str]) -> str:
    # ",a," + ",b," with shared separators => ",a,b," => "a,b"
    buf = ''
    for i in items:
        buf = buf[:-1] + quote(i)
    return buf[1:-1]


def decode(value: str) -> list[str]:
    """Split an encoded list value. Each element comes back trimmed.

    `decode('')` gives `['']`, never an empty list.
    """
    buf = f'{SEPARATOR}{value}{SEPARATOR}'
    last = len(buf) - 1
    ret: list[str] = []
    start = 0
    while start < last:
        pos = _next_separator(buf, start + 1)
        ret.append(trim(unquote(buf[start:pos])))
        start = pos
    return ret

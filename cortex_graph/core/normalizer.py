"""
Response normalization.

Tags are stored escaped on the server and unescaped on read.
"""

import re
from typing import Optional

from .models import QueryResult

_ESCAPE_RE = re.compile(
    r"\\(?:x([0-9A-Fa-f]{2})|u([0-9A-Fa-f]{4})|c([A-Za-z])|([0-7]{1,3})|(.))",
    re.DOTALL,
)

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "e": "\x1b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

_SURROGATE_PAIR_RE = re.compile("([\ud800-\udbff])([\udc00-\udfff])")


def _join_pair(match: re.Match) -> str:
    high, low = (ord(c) for c in match.groups())
    return chr(0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00))


def _replace(match: re.Match) -> str:
    hex2, hex4, control, octal, other = match.groups()
    if hex2 is not None:
        return chr(int(hex2, 16))
    if hex4 is not None:
        return chr(int(hex4, 16))
    if control is not None:
        return chr(ord(control.upper()) & 0x1F)
    if octal is not None:
        return chr(int(octal, 8) & 0xFF)
    return _SIMPLE_ESCAPES.get(other, other)


def unescape(text: Optional[str]) -> Optional[str]:
    """
    Decode backslash escapes: \\n \\t \\r \\f \\v \\a \\b \\e \\\\,
    \\uXXXX, \\xXX, octal \\NNN and control \\cX. Any other escaped
    character stands for itself. A trailing lone backslash is kept.
    Escaped surrogate pairs are joined; a lone surrogate is kept as is.

    None passes through unchanged.
    """
    if text is None or "\\" not in text:
        return text

    result = _ESCAPE_RE.sub(_replace, text)

    # \uXXXX surrogate pairs decode to two lone surrogates; join them
    return _SURROGATE_PAIR_RE.sub(_join_pair, result)


def normalize_result(result: QueryResult) -> QueryResult:
    """Unescape every non-null tag in place, keeping the received order."""
    for neuron in result.neurons:
        neuron.tag = unescape(neuron.tag)
        if neuron.terminal is not None:
            neuron.terminal.tag = unescape(neuron.terminal.tag)
    for terminal in result.terminals:
        terminal.tag = unescape(terminal.tag)
    return result

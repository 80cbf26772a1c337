"""A small recursive-descent JSON parser.

Values map onto Python types: ``None``, ``bool``, ``int``, ``float``, ``str``,
``list`` and :class:`JsonObject`. An object keeps its members in document
order and may hold the same key more than once.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional, Union

__all__ = ["JsonObject", "JsonParseError", "JsonParser", "JsonValue", "parse"]

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U32_MAX = 2**32 - 1
_DIGITS = "0123456789"
_HEX_DIGITS = "0123456789abcdefABCDEF"
_INTEGER = re.compile(r"[-+]?[0-9]+")
_WHITESPACE = frozenset(
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)
_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


@dataclass
class JsonObject:
    """A JSON object: ordered ``(key, value)`` pairs."""

    pairs: list[tuple[str, Any]] = field(default_factory=list)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value of the first member named ``key``."""
        return next((value for name, value in self.pairs if name == key), default)


JsonValue = Union[None, bool, int, float, str, list, JsonObject]


class JsonParseError(ValueError):
    """Raised when the input is not a JSON value the parser accepts."""


class JsonParser:
    """Parses one JSON value from the start of ``text``."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def parse_value(self) -> JsonValue:
        """Parse the value at the current position and return it."""
        ch = self._peek()
        if ch is None:
            raise JsonParseError("Unexpected end of input")
        if ch == "n":
            return self._parse_null()
        if ch in "tf":
            return self._parse_boolean()
        if ch == '"':
            return self._parse_string()
        if ch == "[":
            return self._parse_array()
        if ch == "{":
            return self._parse_object()
        if ch in _DIGITS or ch == "-":
            return self._parse_number()
        raise JsonParseError(f"Unexpected character: {ch}")

    def _parse_null(self) -> None:
        self._consume_str("null")
        return None

    def _parse_boolean(self) -> bool:
        # The first character is consumed whether or not it is 't'.
        if self._next() == "t":
            self._consume_str("rue")
            return True
        self._consume_str("alse")
        return False

    def _parse_string(self) -> str:
        self._consume_char('"')
        parts: list[str] = []
        while True:
            ch = self._next()
            if ch is None:
                raise JsonParseError("Unexpected end of input")
            if ch == '"':
                return "".join(parts)
            parts.append(self._parse_escaped_char() if ch == "\\" else ch)

    def _parse_escaped_char(self) -> str:
        ch = self._next()
        if ch is None:
            raise JsonParseError("Unexpected end of input")
        if ch == "u":
            return self._parse_unicode_escape()
        try:
            return _ESCAPES[ch]
        except KeyError:
            raise JsonParseError(f"Invalid escape character: {ch}") from None

    def _parse_unicode_escape(self) -> str:
        digits = self._take_while(lambda c: c in _HEX_DIGITS)
        if not digits:
            raise JsonParseError(
                "Invalid Unicode escape: cannot parse integer from empty string"
            )
        code_point = int(digits, 16)
        if code_point > _U32_MAX:
            raise JsonParseError(
                "Invalid Unicode escape: number too large to fit in target type"
            )
        if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
            raise JsonParseError(f"Invalid Unicode code point: {code_point}")
        return chr(code_point)

    def _parse_number(self) -> Union[int, float]:
        chars: list[str] = []
        is_float = False
        while (ch := self._peek()) is not None:
            if ch in _DIGITS or ch == "-":
                chars.append(ch)
            elif ch in ".eE":
                chars.append(ch)
                is_float = True
            else:
                break
            self._pos += 1
        literal = "".join(chars)
        if is_float:
            try:
                return float(literal)
            except ValueError:
                raise JsonParseError(
                    "Invalid float number: invalid float literal"
                ) from None
        if not _INTEGER.fullmatch(literal):
            raise JsonParseError(
                "Invalid integer number: invalid digit found in string"
            )
        number = int(literal)
        if number > _I64_MAX:
            raise JsonParseError(
                "Invalid integer number: number too large to fit in target type"
            )
        if number < _I64_MIN:
            raise JsonParseError(
                "Invalid integer number: number too small to fit in target type"
            )
        return number

    def _parse_array(self) -> list:
        items: list = []
        self._consume_char("[")
        self._consume_whitespace()
        while True:
            if self._peek() == "]":
                self._pos += 1
                return items
            items.append(self.parse_value())
            self._consume_whitespace()
            ch = self._peek()
            if ch == ",":
                self._pos += 1
                self._consume_whitespace()
            elif ch != "]":
                raise JsonParseError("Invalid array")

    def _parse_object(self) -> JsonObject:
        obj = JsonObject()
        self._consume_char("{")
        self._consume_whitespace()
        while (ch := self._peek()) is not None:
            if ch == "}":
                self._pos += 1
                return obj
            if obj.pairs:
                self._consume_char(",")
                self._consume_whitespace()
            key = self._parse_string()
            self._consume_whitespace()
            self._consume_char(":")
            self._consume_whitespace()
            obj.pairs.append((key, self.parse_value()))
            self._consume_whitespace()
        raise JsonParseError("Unexpected end of input")

    def _peek(self) -> Optional[str]:
        if self._pos < len(self._text):
            return self._text[self._pos]
        return None

    def _next(self) -> Optional[str]:
        ch = self._peek()
        if ch is not None:
            self._pos += 1
        return ch

    def _consume_str(self, expected: str) -> None:
        for expected_ch in expected:
            ch = self._next()
            if ch is None:
                raise JsonParseError("Unexpected end of input")
            if ch != expected_ch:
                raise JsonParseError(
                    f"1 Unexpected character: {ch}, expected: {expected_ch}"
                )

    def _consume_char(self, expected: str) -> None:
        ch = self._next()
        if ch is None:
            raise JsonParseError("Unexpected end of input")
        if ch != expected:
            raise JsonParseError(
                f"Unexpected character: {ch}, expected: {expected}"
            )

    def _consume_whitespace(self) -> None:
        while (ch := self._peek()) is not None and ch in _WHITESPACE:
            self._pos += 1

    def _take_while(self, predicate: Callable[[str], bool]) -> str:
        start = self._pos
        while (ch := self._peek()) is not None and predicate(ch):
            self._pos += 1
        return self._text[start:self._pos]


def parse(text: str) -> JsonValue:
    """Parse the JSON value at the start of ``text``."""
    return JsonParser(text).parse_value()
"""Writes JSON values as text."""

from __future__ import annotations

import io
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Iterable, TextIO

from xento.json_parser import JsonObject

__all__ = ["JsonSerializer", "dumps"]

_STRING_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _format_float(number: float) -> str:
    """Format a float in plain decimal notation with the shortest digits."""
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    text = format(Decimal(repr(number)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class JsonSerializer:
    """Writes JSON values to a text writer with a ``write`` method."""

    def __init__(self, writer: TextIO) -> None:
        self._writer = writer

    def serialize(self, value: Any) -> None:
        """Write ``value`` as JSON."""
        self._write_value(value)

    def _write_value(self, value: Any) -> None:
        write = self._writer.write
        if value is None:
            write("null")
        elif value is True:
            write("true")
        elif value is False:
            write("false")
        elif isinstance(value, str):
            self._write_string(value)
        elif isinstance(value, int):
            write(str(value))
        elif isinstance(value, float):
            write(_format_float(value))
        elif isinstance(value, (list, tuple)):
            self._write_array(value)
        elif isinstance(value, JsonObject):
            self._write_object(value.pairs)
        elif isinstance(value, Mapping):
            self._write_object(value.items())
        else:
            raise TypeError(f"cannot serialize {type(value).__name__} as JSON")

    def _write_string(self, text: str) -> None:
        escaped = "".join(_STRING_ESCAPES.get(ch, ch) for ch in text)
        self._writer.write(f'"{escaped}"')

    def _write_array(self, items: Iterable[Any]) -> None:
        self._writer.write("[")
        for position, item in enumerate(items):
            if position:
                self._writer.write(", ")
            self._write_value(item)
        self._writer.write("]")

    def _write_object(self, pairs: Iterable[tuple[str, Any]]) -> None:
        self._writer.write("{")
        for position, (key, item) in enumerate(pairs):
            if position:
                self._writer.write(", ")
            self._write_string(key)
            self._writer.write(": ")
            self._write_value(item)
        self._writer.write("}")


def dumps(value: Any) -> str:
    """Return ``value`` serialized as a JSON string."""
    buffer = io.StringIO()
    JsonSerializer(buffer).serialize(value)
    return buffer.getvalue()
"""Defiltering and de-interlacing of decompressed PNG image data."""

from __future__ import annotations

from functools import partial
from typing import Callable

from xento.png_chunk import AncillaryChunks, PngHeader
from xento.png_scanline import ScanlineIterator
from xento.png_types import FilterType, InterlaceMethod, PixelType, PngError

__all__ = [
    "defilter_scanline",
    "pass_coordinates",
    "pass_dimensions",
    "process",
]


def process(
    ancillary_chunks: AncillaryChunks,
    pixel_type: PixelType,
    png_header: PngHeader,
    scanline_data: bytes,
) -> bytearray:
    """Decode filtered scanlines into an RGBA buffer of ``width * height * 4`` bytes."""
    width, height = png_header.width, png_header.height
    depth = int(png_header.bit_depth)
    samples = png_header.color_type.sample_multiplier()
    bytes_per_pixel = (depth * samples + 7) // 8
    output = bytearray(width * height * 4)
    rows = _RowReader(bytes(scanline_data), bytes_per_pixel)

    passes: list[tuple[tuple[int, int], Callable[[int, int], tuple[int, int]]]]
    if png_header.interlace_method is InterlaceMethod.ADAM7:
        passes = [
            (pass_dimensions(width, height, number), partial(_locate, number))
            for number in range(1, 8)
        ]
    else:
        passes = [((width, height), lambda x, y: (x, y))]

    for (pass_width, pass_height), locate in passes:
        if pass_width == 0 or pass_height == 0:
            continue
        length = (pass_width * depth * samples + 7) // 8
        previous = bytes(length)
        for y in range(pass_height):
            row = rows.read(length, previous)
            scanline = ScanlineIterator(ancillary_chunks, pass_width, pixel_type, row)
            for x, pixel in enumerate(scanline):
                out_x, out_y = locate(x, y)
                offset = (out_y * width + out_x) * 4
                output[offset:offset + 4] = bytes(pixel)
            previous = row
    return output


def _locate(pass_number: int, x: int, y: int) -> tuple[int, int]:
    return pass_coordinates(x, y, pass_number)


class _RowReader:
    """Reads successive filter-byte-prefixed rows from the image data."""

    def __init__(self, data: bytes, bytes_per_pixel: int) -> None:
        self._data = data
        self._cursor = 0
        self._bytes_per_pixel = bytes_per_pixel

    def read(self, length: int, previous: bytes) -> bytes:
        if self._cursor >= len(self._data):
            raise PngError("image data truncated")
        filter_type = FilterType(self._data[self._cursor])
        start = self._cursor + 1
        row = self._data[start:start + length]
        if len(row) < length:
            raise PngError("image data truncated")
        self._cursor = start + length
        return bytes(
            defilter_scanline(filter_type, row, previous, self._bytes_per_pixel)
        )


def pass_dimensions(width: int, height: int, pass_number: int) -> tuple[int, int]:
    """Width and height of an Adam7 pass (1-7); ``(0, 0)`` for other numbers."""
    if pass_number == 1:
        return ((width + 7) // 8, (height + 7) // 8)
    if pass_number == 2:
        return ((width // 8) + ((width % 8) // 5), (height + 7) // 8)
    if pass_number == 3:
        return (
            ((width // 8) * 2) + (width % 8 + 3) // 4,
            (height // 8) + ((height % 8) // 5),
        )
    if pass_number == 4:
        return (((width // 8) * 2) + (width % 8 + 1) // 4, (height + 3) // 4)
    if pass_number == 5:
        return (
            (width // 2) + (width % 2),
            ((height // 8) * 2) + (height % 8 + 1) // 4,
        )
    if pass_number == 6:
        return (width // 2, (height // 2) + (height % 2))
    if pass_number == 7:
        return (width, height // 2)
    return (0, 0)


def pass_coordinates(x: int, y: int, pass_number: int) -> tuple[int, int]:
    """Image coordinates of pixel ``(x, y)`` of an Adam7 pass."""
    if pass_number == 1:
        return (x * 8, y * 8)
    if pass_number == 2:
        return (x * 8 + 4, y * 8)
    if pass_number == 3:
        return (x * 4, y * 8 + 4)
    if pass_number == 4:
        return (x * 4 + 2, y * 4)
    if pass_number == 5:
        return (x * 2, y * 4 + 2)
    if pass_number == 6:
        return (x * 2 + 1, y * 2)
    if pass_number == 7:
        return (x, y * 2 + 1)
    return (0, 0)


def _paeth(left: int, up: int, up_left: int) -> int:
    estimate = left + up - up_left
    distance_left = abs(estimate - left)
    distance_up = abs(estimate - up)
    distance_up_left = abs(estimate - up_left)
    if distance_left <= distance_up and distance_left <= distance_up_left:
        return left
    if distance_up <= distance_up_left:
        return up
    return up_left


def _predict(filter_type: FilterType, left: int, up: int, up_left: int) -> int:
    if filter_type is FilterType.SUB:
        return left
    if filter_type is FilterType.UP:
        return up
    if filter_type is FilterType.AVERAGE:
        return (left + up) // 2
    if filter_type is FilterType.PAETH:
        return _paeth(left, up, up_left)
    return 0


def defilter_scanline(
    filter_type: FilterType,
    scanline: bytes,
    previous_scanline: bytes,
    bytes_per_pixel: int,
) -> bytearray:
    """Undo a scanline filter, given the already defiltered previous scanline."""
    if len(previous_scanline) < len(scanline):
        raise PngError("previous scanline too short")
    filter_type = FilterType(filter_type)
    result = bytearray()
    for x, (raw, up) in enumerate(zip(scanline, previous_scanline)):
        has_left = x >= bytes_per_pixel
        left = result[x - bytes_per_pixel] if has_left else 0
        up_left = previous_scanline[x - bytes_per_pixel] if has_left else 0
        result.append((raw + _predict(filter_type, left, up, up_left)) & 0xFF)
    return result
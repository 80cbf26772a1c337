"""Enumerations describing PNG chunks, headers and pixel layouts."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Union

__all__ = [
    "PngError",
    "BitDepth",
    "ChunkType",
    "ColorType",
    "CompressionMethod",
    "FilterMethod",
    "FilterType",
    "InterlaceMethod",
    "PixelType",
    "parse_chunk_type",
    "pixel_type_for",
]


class PngError(ValueError):
    """Raised when PNG data is malformed or uses an unsupported feature."""


class _StrictIntEnum(IntEnum):
    """An integer enumeration that raises :class:`PngError` for unknown values."""

    @classmethod
    def _missing_(cls, value: object) -> None:
        raise PngError(f"invalid {cls.__name__} value: {value!r}")


class BitDepth(_StrictIntEnum):
    """Bits per sample (or per palette index)."""

    ONE = 1
    TWO = 2
    FOUR = 4
    EIGHT = 8
    SIXTEEN = 16


class ColorType(_StrictIntEnum):
    """How pixel samples are interpreted."""

    GRAYSCALE = 0
    RGB = 2
    PALETTE = 3
    GRAYSCALE_ALPHA = 4
    RGB_ALPHA = 6

    def sample_multiplier(self) -> int:
        """Number of samples that make up one pixel."""
        return _SAMPLES_PER_PIXEL[self]


_SAMPLES_PER_PIXEL = {
    ColorType.GRAYSCALE: 1,
    ColorType.RGB: 3,
    ColorType.PALETTE: 1,
    ColorType.GRAYSCALE_ALPHA: 2,
    ColorType.RGB_ALPHA: 4,
}


class CompressionMethod(_StrictIntEnum):
    """Compression method of the image data."""

    DEFLATE = 0


class FilterMethod(_StrictIntEnum):
    """Filter method applied to scanlines."""

    ADAPTIVE = 0


class FilterType(_StrictIntEnum):
    """Per-scanline filter type."""

    NONE = 0
    SUB = 1
    UP = 2
    AVERAGE = 3
    PAETH = 4


class InterlaceMethod(_StrictIntEnum):
    """Interlacing scheme of the image data."""

    NONE = 0
    ADAM7 = 1


class ChunkType(Enum):
    """The chunk types this decoder recognises, keyed by their four-byte tag."""

    BACKGROUND = b"bKGD"
    GAMMA = b"gAMA"
    IMAGE_DATA = b"IDAT"
    IMAGE_END = b"IEND"
    IMAGE_HEADER = b"IHDR"
    PALETTE = b"PLTE"
    SRGB = b"sRGB"
    TRANSPARENCY = b"tRNS"


def parse_chunk_type(data: bytes) -> Union[ChunkType, bytes]:
    """Return the known chunk type for the first four bytes of ``data``.

    An unrecognised tag is returned as its four raw bytes.
    """
    tag = bytes(data[:4])
    if len(tag) < 4:
        raise PngError("chunk type needs four bytes")
    try:
        return ChunkType(tag)
    except ValueError:
        return tag


class PixelType(Enum):
    """A supported combination of colour type and bit depth."""

    GRAYSCALE1 = (ColorType.GRAYSCALE, BitDepth.ONE)
    GRAYSCALE2 = (ColorType.GRAYSCALE, BitDepth.TWO)
    GRAYSCALE4 = (ColorType.GRAYSCALE, BitDepth.FOUR)
    GRAYSCALE8 = (ColorType.GRAYSCALE, BitDepth.EIGHT)
    GRAYSCALE16 = (ColorType.GRAYSCALE, BitDepth.SIXTEEN)
    RGB8 = (ColorType.RGB, BitDepth.EIGHT)
    RGB16 = (ColorType.RGB, BitDepth.SIXTEEN)
    PALETTE1 = (ColorType.PALETTE, BitDepth.ONE)
    PALETTE2 = (ColorType.PALETTE, BitDepth.TWO)
    PALETTE4 = (ColorType.PALETTE, BitDepth.FOUR)
    PALETTE8 = (ColorType.PALETTE, BitDepth.EIGHT)
    GRAYSCALE_ALPHA8 = (ColorType.GRAYSCALE_ALPHA, BitDepth.EIGHT)
    GRAYSCALE_ALPHA16 = (ColorType.GRAYSCALE_ALPHA, BitDepth.SIXTEEN)
    RGB_ALPHA8 = (ColorType.RGB_ALPHA, BitDepth.EIGHT)
    RGB_ALPHA16 = (ColorType.RGB_ALPHA, BitDepth.SIXTEEN)

    @classmethod
    def _missing_(cls, value: object) -> None:
        raise PngError(f"unsupported colour type and bit depth: {value!r}")


def pixel_type_for(color: int, depth: int) -> PixelType:
    """Return the pixel type for a colour type and bit depth.

    Raises :class:`PngError` if the combination is not allowed.
    """
    return PixelType((ColorType(color), BitDepth(depth)))
"""PNG chunks, the image header and ancillary chunk data."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Optional, Union

from xento.png_types import (
    BitDepth,
    ChunkType,
    ColorType,
    CompressionMethod,
    FilterMethod,
    InterlaceMethod,
    PixelType,
    PngError,
    parse_chunk_type,
)

__all__ = [
    "AncillaryChunks",
    "Chunk",
    "GrayscaleTransparency",
    "PaletteTransparency",
    "PngHeader",
    "RgbTransparency",
    "Transparency",
    "transparency_from_chunk",
]

_U32 = struct.Struct(">I")
_HEADER_SIZE = 13


@dataclass(frozen=True)
class Chunk:
    """One chunk: its type, payload and stored CRC (not verified)."""

    chunk_type: Union[ChunkType, bytes]
    data: bytes
    crc: int

    @classmethod
    def read(cls, data: bytes) -> "Chunk":
        """Read the chunk at the start of ``data``; trailing bytes are ignored."""
        if len(data) < 4:
            raise PngError("chunk too short for its length field")
        (length,) = _U32.unpack_from(data, 0)
        rest = data[4:]
        if len(rest) < length + 8:
            raise PngError("chunk truncated")
        chunk_type = parse_chunk_type(rest[:4])
        (crc,) = _U32.unpack_from(rest, length + 4)
        return cls(chunk_type=chunk_type, data=bytes(rest[4:length + 4]), crc=crc)

    def byte_size(self) -> int:
        """Size of the chunk as stored, including length, type and CRC."""
        return 12 + len(self.data)


@dataclass(frozen=True)
class PngHeader:
    """The contents of an IHDR chunk."""

    width: int
    height: int
    bit_depth: BitDepth
    color_type: ColorType
    compression_method: CompressionMethod
    filter_method: FilterMethod
    interlace_method: InterlaceMethod

    @classmethod
    def from_chunk(cls, chunk: Chunk) -> "PngHeader":
        """Decode an IHDR chunk; raise :class:`PngError` if it is not valid."""
        data = chunk.data
        if chunk.chunk_type is not ChunkType.IMAGE_HEADER:
            raise PngError("not an image header chunk")
        if len(data) < _HEADER_SIZE:
            raise PngError("image header too short")
        width, height, depth, color, compression, filtering, interlace = (
            struct.unpack_from(">IIBBBBB", data)
        )
        return cls(
            width=width,
            height=height,
            bit_depth=BitDepth(depth),
            color_type=ColorType(color),
            compression_method=CompressionMethod(compression),
            filter_method=FilterMethod(filtering),
            interlace_method=InterlaceMethod(interlace),
        )


@dataclass(frozen=True)
class GrayscaleTransparency:
    """The grey level that is fully transparent."""

    value: int


@dataclass(frozen=True)
class PaletteTransparency:
    """Alpha values for the leading palette entries."""

    alphas: bytes


@dataclass(frozen=True)
class RgbTransparency:
    """The colour that is fully transparent."""

    red: int
    green: int
    blue: int


Transparency = Union[GrayscaleTransparency, PaletteTransparency, RgbTransparency]


@dataclass
class AncillaryChunks:
    """Optional chunks that affect how pixels are decoded."""

    palette: Optional[bytes] = None
    transparency: Optional[Transparency] = None
    background: Optional[bytes] = None


_GRAYSCALE_MASKS = {
    PixelType.GRAYSCALE1: 0b1,
    PixelType.GRAYSCALE2: 0b11,
    PixelType.GRAYSCALE4: 0b1111,
    PixelType.GRAYSCALE8: 0xFF,
}
_PALETTE_TYPES = frozenset(
    {PixelType.PALETTE1, PixelType.PALETTE2, PixelType.PALETTE4, PixelType.PALETTE8}
)


def _require(data: bytes, size: int) -> None:
    if len(data) < size:
        raise PngError("transparency chunk too short")


def transparency_from_chunk(
    chunk: Chunk, pixel_type: PixelType
) -> Optional[Transparency]:
    """Decode a tRNS chunk for ``pixel_type``.

    Returns ``None`` for pixel types that carry their own alpha channel.
    """
    data = chunk.data
    if pixel_type in _GRAYSCALE_MASKS:
        _require(data, 2)
        return GrayscaleTransparency(data[1] & _GRAYSCALE_MASKS[pixel_type])
    if pixel_type is PixelType.GRAYSCALE16:
        _require(data, 2)
        return GrayscaleTransparency(data[0])
    if pixel_type in _PALETTE_TYPES:
        return PaletteTransparency(data)
    if pixel_type is PixelType.RGB8:
        _require(data, 6)
        return RgbTransparency(data[1], data[3], data[5])
    if pixel_type is PixelType.RGB16:
        _require(data, 6)
        return RgbTransparency(data[0], data[2], data[4])
    return None
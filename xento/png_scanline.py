"""Iteration over the pixels of one defiltered PNG scanline."""

from __future__ import annotations

from typing import Callable, Iterator

from xento.png_chunk import AncillaryChunks
from xento.png_types import ColorType, PixelType, PngError

__all__ = ["Pixel", "ScanlineIterator"]

Pixel = tuple[int, int, int, int]

_OPAQUE = 255


class ScanlineIterator:
    """Yields ``(red, green, blue, alpha)`` tuples for each pixel of a scanline."""

    def __init__(
        self,
        extra_chunks: AncillaryChunks,
        image_width: int,
        pixel_type: PixelType,
        scanline: bytes,
    ) -> None:
        self.extra_chunks = extra_chunks
        self.width = image_width
        self.pixel_type = pixel_type
        self.scanline = bytes(scanline)

    def __iter__(self) -> Iterator[Pixel]:
        read = self._reader()
        for index in range(self.width):
            yield read(index)

    def _reader(self) -> Callable[[int], Pixel]:
        color, depth = self.pixel_type.value
        depth = int(depth)
        if depth < 8:
            if color is ColorType.PALETTE:
                return lambda index: self._palette_entry(self._packed(index, depth))
            scale = _OPAQUE // ((1 << depth) - 1)
            return lambda index: _gray(self._packed(index, depth) * scale)
        samples = color.sample_multiplier()
        step = depth // 8
        expand = _EXPANDERS[color]

        def read(index: int) -> Pixel:
            start = index * samples * step
            # For 16-bit samples only the high byte of each is kept.
            values = self.scanline[start:start + samples * step:step]
            if len(values) < samples:
                raise PngError("scanline too short")
            if color is ColorType.PALETTE:
                return self._palette_entry(values[0])
            return expand(values)

        return read

    def _packed(self, index: int, depth: int) -> int:
        per_byte = 8 // depth
        try:
            byte = self.scanline[index // per_byte]
        except IndexError:
            raise PngError("scanline too short") from None
        shift = 8 - depth * (index % per_byte + 1)
        return (byte >> shift) & ((1 << depth) - 1)

    def _palette_entry(self, palette_index: int) -> Pixel:
        palette = self.extra_chunks.palette
        if palette is None:
            raise PngError("palette image without a palette")
        entry = palette[palette_index * 3:palette_index * 3 + 3]
        if len(entry) < 3:
            raise PngError(f"palette index out of range: {palette_index}")
        red, green, blue = entry
        return (red, green, blue, _OPAQUE)


def _gray(value: int) -> Pixel:
    return (value, value, value, _OPAQUE)


def _gray_alpha(values: bytes) -> Pixel:
    value, alpha = values
    return (value, value, value, alpha)


def _rgb(values: bytes) -> Pixel:
    red, green, blue = values
    return (red, green, blue, _OPAQUE)


def _rgba(values: bytes) -> Pixel:
    red, green, blue, alpha = values
    return (red, green, blue, alpha)


_EXPANDERS: dict[ColorType, Callable[[bytes], Pixel]] = {
    ColorType.GRAYSCALE: lambda values: _gray(values[0]),
    ColorType.RGB: _rgb,
    ColorType.PALETTE: lambda values: _gray(values[0]),
    ColorType.GRAYSCALE_ALPHA: _gray_alpha,
    ColorType.RGB_ALPHA: _rgba,
}
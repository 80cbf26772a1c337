import pytest

from xento.png_chunk import AncillaryChunks
from xento.png_scanline import ScanlineIterator
from xento.png_types import PixelType, PngError


def pixels(pixel_type, width, scanline, palette=None):
    chunks = AncillaryChunks(palette=palette)
    return list(ScanlineIterator(chunks, width, pixel_type, scanline))


def test_rgb8_pixels_are_opaque_copies():
    assert pixels(PixelType.RGB8, 2, bytes([1, 2, 3, 4, 5, 6])) == [
        (1, 2, 3, 255),
        (4, 5, 6, 255),
    ]


def test_rgba8_passes_alpha_through():
    assert pixels(PixelType.RGB_ALPHA8, 1, bytes([9, 8, 7, 6])) == [(9, 8, 7, 6)]


def test_rgb16_keeps_high_bytes():
    data = bytes([0x12, 0x34, 0x56, 0x78, 0x9A, 0xBC])
    assert pixels(PixelType.RGB16, 1, data) == [(0x12, 0x56, 0x9A, 255)]


def test_rgba16_keeps_high_bytes():
    data = bytes([1, 0xFF, 2, 0xFF, 3, 0xFF, 4, 0xFF])
    assert pixels(PixelType.RGB_ALPHA16, 1, data) == [(1, 2, 3, 4)]


def test_grayscale8_and_alpha8():
    assert pixels(PixelType.GRAYSCALE8, 2, bytes([10, 20])) == [
        (10, 10, 10, 255),
        (20, 20, 20, 255),
    ]
    assert pixels(PixelType.GRAYSCALE_ALPHA8, 1, bytes([10, 20])) == [
        (10, 10, 10, 20)
    ]


def test_grayscale16_and_alpha16():
    assert pixels(PixelType.GRAYSCALE16, 1, bytes([0xAB, 0xCD])) == [
        (0xAB, 0xAB, 0xAB, 255)
    ]
    assert pixels(PixelType.GRAYSCALE_ALPHA16, 1, bytes([5, 0, 6, 0])) == [
        (5, 5, 5, 6)
    ]


def test_grayscale1_bits_most_significant_first():
    result = pixels(PixelType.GRAYSCALE1, 3, bytes([0b10100000]))
    assert [pixel[0] for pixel in result] == [255, 0, 255]


@pytest.mark.parametrize(
    "pixel_type, full",
    [
        (PixelType.GRAYSCALE1, 0b10000000),
        (PixelType.GRAYSCALE2, 0b11000000),
        (PixelType.GRAYSCALE4, 0b11110000),
    ],
)
def test_packed_grayscale_extremes(pixel_type, full):
    assert pixels(pixel_type, 2, bytes([full])) == [
        (255, 255, 255, 255),
        (0, 0, 0, 255),
    ]


def test_packed_grayscale_is_monotonic():
    result = pixels(PixelType.GRAYSCALE2, 4, bytes([0b00011011]))
    values = [pixel[0] for pixel in result]
    assert values == sorted(values)
    assert values[0] == 0 and values[-1] == 255


def test_palette8_looks_up_entries():
    palette = bytes([10, 11, 12, 20, 21, 22])
    assert pixels(PixelType.PALETTE8, 2, bytes([1, 0]), palette) == [
        (20, 21, 22, 255),
        (10, 11, 12, 255),
    ]


def test_palette1_uses_bits():
    palette = bytes([10, 11, 12, 20, 21, 22])
    assert pixels(PixelType.PALETTE1, 2, bytes([0b01000000]), palette) == [
        (10, 11, 12, 255),
        (20, 21, 22, 255),
    ]


def test_palette_missing_raises():
    with pytest.raises(PngError):
        pixels(PixelType.PALETTE8, 1, bytes([0]))


def test_palette_index_out_of_range_raises():
    with pytest.raises(PngError):
        pixels(PixelType.PALETTE8, 1, bytes([5]), bytes([1, 2, 3]))


def test_short_scanline_raises():
    with pytest.raises(PngError):
        pixels(PixelType.RGB8, 2, bytes([1, 2, 3]))


def test_yields_one_pixel_per_column():
    assert len(pixels(PixelType.GRAYSCALE1, 5, bytes([0xFF]))) == 5
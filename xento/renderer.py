"""An RGBA drawing surface that is copied to a BGR framebuffer."""

from __future__ import annotations

from typing import Sequence

__all__ = ["Renderer"]

_U32_MAX = 2**32 - 1


def _check_dimension(name: str, value: int) -> int:
    if value > _U32_MAX:
        raise ValueError(f"{name} too large")
    if value <= 0:
        raise ValueError("failed to create pixmap")
    return value


def _premultiplied(color: Sequence[int]) -> bytes:
    if len(color) != 4:
        raise ValueError("a colour needs red, green, blue and alpha")
    if any(not 0 <= channel <= 255 for channel in color):
        raise ValueError(f"colour channels must be bytes, got {tuple(color)}")
    red, green, blue, alpha = color
    return bytes(
        [round(red * alpha / 255), round(green * alpha / 255), round(blue * alpha / 255), alpha]
    )


class Renderer:
    """Draws into a premultiplied RGBA pixmap and presents it to a framebuffer."""

    def __init__(self, framebuffer: bytearray, width: int, height: int) -> None:
        self.framebuffer = framebuffer
        self.width = _check_dimension("width", width)
        self.height = _check_dimension("height", height)
        self.pixmap = bytearray(self.width * self.height * 4)
        self.clear()

    def clear(self) -> None:
        """Make every pixel transparent black."""
        self.fill((0, 0, 0, 0))

    def fill(self, color: Sequence[int]) -> None:
        """Set every pixel to an ``(red, green, blue, alpha)`` colour."""
        pixel = _premultiplied(color)
        self.pixmap[:] = pixel * (self.width * self.height)

    def update(self) -> None:
        """Copy the pixmap to the framebuffer, swapping red and blue."""
        num_pixels = len(self.framebuffer) // 4
        if num_pixels * 4 > len(self.pixmap):
            raise ValueError("framebuffer is larger than the pixmap")
        size = num_pixels * 4
        self.framebuffer[0:size:4] = self.pixmap[2:size:4]
        self.framebuffer[1:size:4] = self.pixmap[1:size:4]
        self.framebuffer[2:size:4] = self.pixmap[0:size:4]
"""Kernel-wide definitions."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["QEMU_EXIT_PORT", "QemuExitCode", "binary_to_text"]

QEMU_EXIT_PORT = 0xF4


class QemuExitCode(IntEnum):
    """Values written to the emulator's exit device."""

    SUCCESS = 0x10
    FAILED = 0x11


def binary_to_text(binary: bytes) -> str:
    """Decode bytes one character per byte, stopping at the first zero byte."""
    data = bytes(binary)
    end = data.find(0)
    if end != -1:
        data = data[:end]
    return data.decode("latin-1")
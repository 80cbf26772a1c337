"""Heap layout helpers shared by the simulated kernel allocators."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generic, Iterator, NoReturn, TypeVar

__all__ = [
    "HEAP_SIZE",
    "HEAP_START",
    "USIZE_MAX",
    "DummyAllocator",
    "Layout",
    "Locked",
    "align_up",
]

HEAP_START = 0x_4444_4444_0000
HEAP_SIZE = 32 * 1024 * 1024
USIZE_MAX = 2**64 - 1
_ISIZE_MAX = 2**63 - 1

A = TypeVar("A")


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


def align_up(addr: int, align: int) -> int:
    """Round ``addr`` up to the next multiple of ``align`` (a power of two)."""
    if not _is_power_of_two(align):
        raise ValueError(f"alignment must be a power of two, got {align}")
    return (addr + align - 1) & ~(align - 1)


@dataclass(frozen=True)
class Layout:
    """The size and alignment requested for a block of memory."""

    size: int
    align: int = 1

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"size must not be negative, got {self.size}")
        if not _is_power_of_two(self.align):
            raise ValueError(f"alignment must be a power of two, got {self.align}")
        if align_up(self.size, self.align) > _ISIZE_MAX:
            raise ValueError("layout size overflows when padded to its alignment")

    def align_to(self, align: int) -> "Layout":
        """Return a layout with at least the given alignment."""
        return Layout(self.size, max(self.align, align))

    def pad_to_align(self) -> "Layout":
        """Return a layout whose size is a multiple of its alignment."""
        return Layout(align_up(self.size, self.align), self.align)


class Locked(Generic[A]):
    """Wraps a value behind a mutex."""

    def __init__(self, inner: A) -> None:
        self._inner = inner
        self._mutex = threading.Lock()

    @contextmanager
    def lock(self) -> Iterator[A]:
        """Hold the lock and give access to the wrapped value."""
        with self._mutex:
            yield self._inner


class DummyAllocator:
    """An allocator that never hands out memory."""

    def alloc(self, layout: Layout) -> NoReturn:
        raise MemoryError(f"cannot allocate {layout.size} bytes")

    def dealloc(self, ptr: int, layout: Layout) -> NoReturn:
        raise RuntimeError(
            f"dealloc should be never called (ptr={ptr:#x}, "
            f"size={layout.size}, align={layout.align})"
        )
"""An allocator with per-size free lists and a first-fit fallback."""

from __future__ import annotations

from typing import Optional

from xento.allocator import Layout
from xento.linked_list import LinkedListAllocator

__all__ = ["BLOCK_SIZES", "FixedSizeBlockAllocator", "list_index"]

# Each size is also used as the block's alignment, so all are powers of two.
BLOCK_SIZES = (8, 16, 32, 64, 128, 256, 512, 1024, 2048)


def list_index(layout: Layout) -> Optional[int]:
    """Index of the smallest block size that fits ``layout``, or ``None``."""
    required = max(layout.size, layout.align)
    return next(
        (index for index, size in enumerate(BLOCK_SIZES) if size >= required), None
    )


class FixedSizeBlockAllocator:
    """Serves small requests from free lists of fixed-size blocks."""

    def __init__(self) -> None:
        self._free_blocks: list[list[int]] = [[] for _ in BLOCK_SIZES]
        self._fallback = LinkedListAllocator()

    def init(self, heap_start: int, heap_size: int) -> None:
        """Give the heap to the fallback allocator."""
        self._fallback.init(heap_start, heap_size)

    def alloc(self, layout: Layout) -> int:
        """Return the start address of a new block; raise MemoryError if none."""
        index = list_index(layout)
        if index is None:
            return self._fallback.alloc(layout)
        free = self._free_blocks[index]
        if free:
            return free.pop()
        block_size = BLOCK_SIZES[index]
        return self._fallback.alloc(Layout(block_size, block_size))

    def dealloc(self, ptr: int, layout: Layout) -> None:
        """Put a block back on its free list, or return it to the fallback."""
        index = list_index(layout)
        if index is None:
            self._fallback.dealloc(ptr, layout)
        else:
            self._free_blocks[index].append(ptr)
"""A first-fit free-list allocator over a simulated address range."""

from __future__ import annotations

from collections import deque
from typing import Optional

from xento.allocator import USIZE_MAX, Layout, align_up

__all__ = ["NODE_ALIGN", "NODE_SIZE", "LinkedListAllocator", "size_align"]

# A free-list node stores its region size and a link to the next node.
NODE_SIZE = 16
NODE_ALIGN = 8


def size_align(layout: Layout) -> tuple[int, int]:
    """Adjust ``layout`` so the block can later hold a free-list node.

    Returns the adjusted ``(size, align)``.
    """
    adjusted = layout.align_to(NODE_ALIGN).pad_to_align()
    return max(adjusted.size, NODE_SIZE), adjusted.align


def _alloc_from_region(start: int, size: int, wanted: int, align: int) -> Optional[int]:
    """Start address of an allocation inside the region, if it fits."""
    end = start + size
    alloc_start = align_up(start, align)
    alloc_end = alloc_start + wanted
    if alloc_end > USIZE_MAX or alloc_end > end:
        return None
    excess = end - alloc_end
    if 0 < excess < NODE_SIZE:
        # The remainder could not hold a free-list node.
        return None
    return alloc_start


class LinkedListAllocator:
    """Keeps free regions in a list and allocates from the first that fits."""

    def __init__(self) -> None:
        self._regions: deque[tuple[int, int]] = deque()

    def init(self, heap_start: int, heap_size: int) -> None:
        """Add the heap as one free region."""
        self._add_free_region(heap_start, heap_size)

    def alloc(self, layout: Layout) -> int:
        """Return the start address of a new block; raise MemoryError if none fits."""
        size, align = size_align(layout)
        for position, (start, region_size) in enumerate(self._regions):
            alloc_start = _alloc_from_region(start, region_size, size, align)
            if alloc_start is None:
                continue
            del self._regions[position]
            alloc_end = alloc_start + size
            excess = start + region_size - alloc_end
            if excess > 0:
                self._add_free_region(alloc_end, excess)
            return alloc_start
        raise MemoryError(f"out of memory allocating {layout.size} bytes")

    def dealloc(self, ptr: int, layout: Layout) -> None:
        """Return a block to the front of the free list."""
        size, _ = size_align(layout)
        self._add_free_region(ptr, size)

    def free_regions(self) -> list[tuple[int, int]]:
        """The free regions as ``(start, size)`` pairs, in list order."""
        return list(self._regions)

    def _add_free_region(self, addr: int, size: int) -> None:
        if align_up(addr, NODE_ALIGN) != addr:
            raise ValueError(f"free region at {addr:#x} is not {NODE_ALIGN}-byte aligned")
        if size < NODE_SIZE:
            raise ValueError(f"free region of {size} bytes cannot hold a list node")
        self._regions.appendleft((addr, size))
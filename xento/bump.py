"""A bump allocator over a simulated address range."""

from __future__ import annotations

from xento.allocator import USIZE_MAX, Layout, align_up

__all__ = ["BumpAllocator"]


class BumpAllocator:
    """Hands out addresses in increasing order; resets when all are freed."""

    def __init__(self) -> None:
        self.heap_start = 0
        self.heap_end = 0
        self.next_free = 0
        self.allocations = 0

    def init(self, heap_start: int, heap_size: int) -> None:
        """Set the heap bounds."""
        self.heap_start = heap_start
        self.heap_end = min(heap_start + heap_size, USIZE_MAX)
        self.next_free = heap_start

    def alloc(self, layout: Layout) -> int:
        """Return the start address of a new block; raise MemoryError if full."""
        alloc_start = align_up(self.next_free, layout.align)
        alloc_end = alloc_start + layout.size
        if alloc_end > USIZE_MAX or alloc_end > self.heap_end:
            raise MemoryError(f"out of memory allocating {layout.size} bytes")
        self.next_free = alloc_end
        self.allocations += 1
        return alloc_start

    def dealloc(self, ptr: int, layout: Layout) -> None:
        """Release one block; the heap is reclaimed once every block is freed."""
        if self.allocations == 0:
            raise RuntimeError("dealloc without a matching alloc")
        self.allocations -= 1
        if self.allocations == 0:
            self.next_free = self.heap_start
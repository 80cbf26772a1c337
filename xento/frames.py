"""Physical frame allocation from a boot memory map."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from itertools import islice
from typing import Iterable, Iterator, Optional

__all__ = [
    "PAGE_SIZE",
    "BootInfoFrameAllocator",
    "EmptyFrameAllocator",
    "MemoryRegion",
    "MemoryRegionKind",
]

PAGE_SIZE = 4096


class MemoryRegionKind(Enum):
    """What a region of physical memory is used for."""

    USABLE = "usable"
    BOOTLOADER = "bootloader"
    UNKNOWN_UEFI = "unknown-uefi"
    UNKNOWN_BIOS = "unknown-bios"


@dataclass(frozen=True)
class MemoryRegion:
    """A physical address range ``[start, end)`` and its kind."""

    start: int
    end: int
    kind: MemoryRegionKind


@dataclass
class EmptyFrameAllocator:
    """A frame allocator that never has a frame to give; counts the requests."""

    requests: int = 0

    def allocate_frame(self) -> Optional[int]:
        """Record the request and report that no frame is available."""
        self.requests += 1
        return None


class BootInfoFrameAllocator:
    """Hands out the usable frames of a memory map, in order."""

    def __init__(self, memory_map: Iterable[MemoryRegion]) -> None:
        self.memory_map = tuple(memory_map)
        self._next = 0

    def usable_frames(self) -> Iterator[int]:
        """Start addresses of the frames in the usable regions."""
        for region in self.memory_map:
            if region.kind is not MemoryRegionKind.USABLE:
                continue
            for addr in range(region.start, region.end, PAGE_SIZE):
                yield addr - addr % PAGE_SIZE

    def allocate_frame(self) -> Optional[int]:
        """Start address of the next unused frame, or ``None`` when exhausted."""
        frame = next(islice(self.usable_frames(), self._next, None), None)
        self._next += 1
        return frame
from xento.frames import (
    PAGE_SIZE,
    BootInfoFrameAllocator,
    EmptyFrameAllocator,
    MemoryRegion,
    MemoryRegionKind,
)

USABLE = MemoryRegionKind.USABLE


def test_empty_frame_allocator_has_nothing():
    allocator = EmptyFrameAllocator()
    assert allocator.allocate_frame() is None
    assert allocator.allocate_frame() is None


def test_usable_frames_of_one_region():
    start = 0x100000
    region = MemoryRegion(start, start + 2 * PAGE_SIZE, USABLE)
    frames = list(BootInfoFrameAllocator([region]).usable_frames())
    assert frames == [start, start + PAGE_SIZE]


def test_non_usable_regions_are_skipped():
    regions = [
        MemoryRegion(0, PAGE_SIZE, MemoryRegionKind.BOOTLOADER),
        MemoryRegion(PAGE_SIZE, 2 * PAGE_SIZE, USABLE),
        MemoryRegion(2 * PAGE_SIZE, 4 * PAGE_SIZE, MemoryRegionKind.UNKNOWN_BIOS),
    ]
    frames = list(BootInfoFrameAllocator(regions).usable_frames())
    assert frames == [PAGE_SIZE]


def test_frames_are_page_aligned_and_inside_usable_regions():
    regions = [
        MemoryRegion(0x3000, 0x7000, USABLE),
        MemoryRegion(0x9000, 0xB000, USABLE),
    ]
    frames = list(BootInfoFrameAllocator(regions).usable_frames())
    assert len(frames) == len(set(frames))
    for frame in frames:
        assert frame % PAGE_SIZE == 0
        assert any(r.start <= frame < r.end for r in regions)


def test_allocate_frame_walks_usable_frames_then_runs_out():
    regions = [
        MemoryRegion(0x10000, 0x10000 + 2 * PAGE_SIZE, USABLE),
        MemoryRegion(0x40000, 0x40000 + PAGE_SIZE, USABLE),
    ]
    allocator = BootInfoFrameAllocator(regions)
    expected = list(allocator.usable_frames())
    allocated = [allocator.allocate_frame() for _ in expected]
    assert allocated == expected
    assert allocator.allocate_frame() is None
    assert allocator.allocate_frame() is None


def test_no_usable_memory():
    regions = [MemoryRegion(0, PAGE_SIZE, MemoryRegionKind.UNKNOWN_UEFI)]
    assert BootInfoFrameAllocator(regions).allocate_frame() is None
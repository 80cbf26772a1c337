import pytest

from xento.allocator import Layout
from xento.linked_list import NODE_ALIGN, NODE_SIZE, LinkedListAllocator, size_align

HEAP = 0x20000
SIZE = 4096


@pytest.fixture
def heap():
    allocator = LinkedListAllocator()
    allocator.init(HEAP, SIZE)
    return allocator


def test_size_align_minimum():
    assert size_align(Layout(1, 1)) == (NODE_SIZE, NODE_ALIGN)


def test_init_creates_one_region(heap):
    assert heap.free_regions() == [(HEAP, SIZE)]


def test_alloc_splits_the_region(heap):
    layout = Layout(10, 1)
    used, _ = size_align(layout)
    assert heap.alloc(layout) == HEAP
    assert heap.free_regions() == [(HEAP + used, SIZE - used)]


def test_dealloc_pushes_region_to_front(heap):
    layout = Layout(32, 8)
    addr = heap.alloc(layout)
    heap.dealloc(addr, layout)
    assert heap.free_regions()[0] == (addr, size_align(layout)[0])


def test_freed_block_is_reused(heap):
    layout = Layout(32, 8)
    addr = heap.alloc(layout)
    heap.dealloc(addr, layout)
    assert heap.alloc(layout) == addr


def test_alignment_is_honoured(heap):
    addr = heap.alloc(Layout(8, 64))
    assert addr % 64 == 0


def test_allocations_do_not_overlap(heap):
    layouts = [Layout(24, 8), Layout(5, 1), Layout(100, 16), Layout(40, 8)]
    spans = []
    for layout in layouts:
        addr = heap.alloc(layout)
        spans.append((addr, addr + size_align(layout)[0]))
    spans.sort()
    for (_, end), (start, _) in zip(spans, spans[1:]):
        assert end <= start
    assert spans[0][0] >= HEAP and spans[-1][1] <= HEAP + SIZE


def test_whole_heap_leaves_no_free_region():
    allocator = LinkedListAllocator()
    allocator.init(HEAP, 32)
    assert allocator.alloc(Layout(32, 8)) == HEAP
    assert allocator.free_regions() == []


def test_remainder_too_small_for_a_node_is_refused():
    allocator = LinkedListAllocator()
    allocator.init(HEAP, NODE_SIZE + NODE_ALIGN)
    with pytest.raises(MemoryError):
        allocator.alloc(Layout(NODE_SIZE, NODE_ALIGN))


def test_out_of_memory(heap):
    with pytest.raises(MemoryError):
        heap.alloc(Layout(SIZE + 1, 8))


def test_init_rejects_misaligned_start():
    with pytest.raises(ValueError):
        LinkedListAllocator().init(HEAP + 1, SIZE)


def test_init_rejects_tiny_heap():
    with pytest.raises(ValueError):
        LinkedListAllocator().init(HEAP, NODE_SIZE - 1)
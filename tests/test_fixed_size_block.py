import pytest

from xento.allocator import Layout
from xento.fixed_size_block import BLOCK_SIZES, FixedSizeBlockAllocator, list_index

HEAP = 0x40000
SIZE = 64 * 1024


@pytest.fixture
def allocator():
    fixed = FixedSizeBlockAllocator()
    fixed.init(HEAP, SIZE)
    return fixed


def test_smallest_block_for_tiny_layout():
    assert list_index(Layout(1, 1)) == 0


def test_largest_block_size_is_last():
    assert list_index(Layout(BLOCK_SIZES[-1], 1)) == len(BLOCK_SIZES) - 1


def test_too_large_layout_has_no_list():
    assert list_index(Layout(BLOCK_SIZES[-1] + 1, 1)) is None


@pytest.mark.parametrize(
    "layout", [Layout(1, 16), Layout(9, 1), Layout(100, 4), Layout(3, 512)]
)
def test_list_index_picks_smallest_fitting_block(layout):
    index = list_index(layout)
    required = max(layout.size, layout.align)
    assert BLOCK_SIZES[index] >= required
    assert index == 0 or BLOCK_SIZES[index - 1] < required


@pytest.mark.parametrize("size", [1, 8, 24, 100, 2048])
def test_small_blocks_are_aligned_to_their_block_size(allocator, size):
    layout = Layout(size, 1)
    addr = allocator.alloc(layout)
    assert addr % BLOCK_SIZES[list_index(layout)] == 0


def test_freed_block_is_reused_last_in_first_out(allocator):
    layout = Layout(40, 8)
    first = allocator.alloc(layout)
    second = allocator.alloc(layout)
    allocator.dealloc(first, layout)
    allocator.dealloc(second, layout)
    assert allocator.alloc(layout) == second
    assert allocator.alloc(layout) == first


def test_same_class_layouts_share_blocks(allocator):
    addr = allocator.alloc(Layout(33, 1))
    allocator.dealloc(addr, Layout(33, 1))
    assert allocator.alloc(Layout(64, 8)) == addr


def test_large_allocation_goes_to_fallback_and_back(allocator):
    layout = Layout(5000, 8)
    addr = allocator.alloc(layout)
    assert HEAP <= addr and addr + layout.size <= HEAP + SIZE
    allocator.dealloc(addr, layout)
    assert allocator.alloc(layout) == addr


def test_allocations_do_not_overlap(allocator):
    layouts = [Layout(8, 8), Layout(100, 4), Layout(3000, 8), Layout(16, 16)]
    spans = []
    for layout in layouts:
        addr = allocator.alloc(layout)
        index = list_index(layout)
        length = layout.size if index is None else BLOCK_SIZES[index]
        spans.append((addr, addr + length))
    spans.sort()
    for (_, end), (start, _) in zip(spans, spans[1:]):
        assert end <= start


def test_uninitialised_allocator_has_no_memory():
    with pytest.raises(MemoryError):
        FixedSizeBlockAllocator().alloc(Layout(8, 8))


def test_out_of_memory(allocator):
    with pytest.raises(MemoryError):
        allocator.alloc(Layout(SIZE * 2, 8))
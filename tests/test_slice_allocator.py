import pytest

from hevcore.slice_allocator import (
    MAX_CACHED_COUNT,
    MAX_SLICE_SIZE,
    SLICE_ALIGN,
    SliceAllocator,
)


@pytest.fixture
def allocator():
    return SliceAllocator()


def test_alloc_zero_returns_none(allocator):
    assert allocator.alloc(0) is None


def test_alloc_gives_requested_length_zeroed(allocator):
    block = allocator.alloc(10)
    assert len(block) == 10
    assert bytes(block.data) == bytes(10)


def test_freed_block_is_reused_for_same_class(allocator):
    block = allocator.alloc(10)
    block.data[:] = b"\xff" * 10
    allocator.free(block)
    assert allocator.cached_count() == 1
    again = allocator.alloc(SLICE_ALIGN)
    assert again is block
    assert bytes(again.data) == bytes(SLICE_ALIGN)
    assert again.freed is False
    assert allocator.cached_count() == 0


def test_different_class_not_reused(allocator):
    block = allocator.alloc(SLICE_ALIGN)
    allocator.free(block)
    assert allocator.alloc(SLICE_ALIGN + 1) is not block
    assert allocator.cached_count() == 1


@pytest.mark.parametrize(
    "size, cached", [(MAX_SLICE_SIZE, 1), (MAX_SLICE_SIZE + 1, 0)]
)
def test_caching_limit_by_size(allocator, size, cached):
    block = allocator.alloc(size)
    allocator.free(block)
    assert allocator.cached_count() == cached
    assert (allocator.alloc(size) is block) == bool(cached)


def test_stack_order_is_last_in_first_out(allocator):
    a = allocator.alloc(SLICE_ALIGN)
    b = allocator.alloc(SLICE_ALIGN)
    allocator.free(a)
    allocator.free(b)
    assert allocator.alloc(SLICE_ALIGN) is b
    assert allocator.alloc(SLICE_ALIGN) is a


def test_cache_is_bounded(allocator):
    blocks = [allocator.alloc(SLICE_ALIGN) for _ in range(MAX_CACHED_COUNT + 5)]
    for block in blocks:
        allocator.free(block)
    assert allocator.cached_count() == MAX_CACHED_COUNT


def test_eviction_takes_least_recent_class(allocator):
    small = [allocator.alloc(SLICE_ALIGN) for _ in range(MAX_CACHED_COUNT - 1)]
    big1 = allocator.alloc(2 * SLICE_ALIGN)
    big2 = allocator.alloc(2 * SLICE_ALIGN)
    for block in small + [big1, big2]:
        allocator.free(block)
    assert allocator.cached_count() == MAX_CACHED_COUNT

    assert allocator.alloc(2 * SLICE_ALIGN) is big2
    assert allocator.alloc(2 * SLICE_ALIGN) is big1
    # The last small block freed was evicted.
    assert allocator.alloc(SLICE_ALIGN) is small[-2]
    assert allocator.cached_count() == len(small) - 2


def test_realloc_zero_frees_into_cache(allocator):
    block = allocator.alloc(SLICE_ALIGN)
    assert allocator.realloc(block, 0) is None
    assert block.freed is True
    assert allocator.cached_count() == 1


def test_realloc_moves_block_to_new_class(allocator):
    block = allocator.alloc(SLICE_ALIGN)
    block.data[:4] = b"abcd"
    block = allocator.realloc(block, 3 * SLICE_ALIGN)
    assert bytes(block.data[:4]) == b"abcd"
    allocator.free(block)
    assert allocator.alloc(3 * SLICE_ALIGN) is block


def test_realloc_beyond_largest_class_is_uncached(allocator):
    block = allocator.realloc(allocator.alloc(SLICE_ALIGN), MAX_SLICE_SIZE + 1)
    assert block.index == -1
    allocator.free(block)
    assert allocator.cached_count() == 0


def test_double_free_keeps_cache_count(allocator):
    block = allocator.alloc(SLICE_ALIGN)
    allocator.free(block)
    with pytest.raises(ValueError):
        allocator.free(block)
    assert allocator.cached_count() == 1


def test_destroy_empties_cache_on_last_unref(allocator):
    blocks = [allocator.alloc(SLICE_ALIGN) for _ in range(3)]
    for block in blocks:
        allocator.free(block)
    allocator.unref()
    assert allocator.cached_count() == 0
    assert allocator.alloc(SLICE_ALIGN) not in blocks
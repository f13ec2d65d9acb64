"""Allocator that caches freed blocks by size class.

Requests are rounded up to a multiple of :data:`SLICE_ALIGN`. Blocks of up
to :data:`MAX_SLICE_SIZE` bytes are kept on a per-class stack when freed, at
most :data:`MAX_CACHED_COUNT` of them in total. When the cache is full the
size class that least recently became non-empty gives up a block.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import List, Optional

from hevcore.allocator import MemoryBlock
from hevcore.simple_allocator import SimpleAllocator

SLICE_ALIGN = 64
MAX_SLICE_SIZE = 4096
MAX_CACHED_COUNT = 1000

_MAX_INDEX = MAX_SLICE_SIZE // SLICE_ALIGN


def _size_class(size: int) -> int:
    return -(-size // SLICE_ALIGN)


class SliceAllocator(SimpleAllocator):
    """An allocator that reuses freed blocks of the same size class."""

    def __init__(self) -> None:
        super().__init__()
        # Non-empty class stacks, least recently inserted first.
        self._lru: OrderedDict[int, List[MemoryBlock]] = OrderedDict()
        self._count = 0

    def cached_count(self) -> int:
        """Return how many freed blocks are held in the cache."""
        return self._count

    def alloc(self, size: int) -> Optional[MemoryBlock]:
        """Return a zero-filled block of ``size`` bytes, or None for size 0."""
        self._check_size(size)
        index = _size_class(size)
        if index == 0:
            return None
        if index > _MAX_INDEX:
            return self._new_block(size)

        stack = self._lru.pop(index - 1, None)
        if not stack:
            return self._new_block(size, index - 1)

        block = stack.pop()
        self._count -= 1
        if stack:
            self._lru[index - 1] = stack

        block.data = bytearray(size)
        block.freed = False
        return block

    def realloc(self, block: Optional[MemoryBlock], size: int) -> Optional[MemoryBlock]:
        """Resize ``block`` and move it to the size class of ``size``."""
        block = super().realloc(block, size)
        if block is not None:
            index = _size_class(size)
            block.index = index - 1 if index <= _MAX_INDEX else -1
        return block

    def free(self, block: Optional[MemoryBlock]) -> None:
        """Give ``block`` back, caching it if it belongs to a size class."""
        super().free(block)
        if block is None or block.index < 0:
            return

        if self._count >= MAX_CACHED_COUNT:
            tail = next(iter(self._lru))
            victims = self._lru[tail]
            victims.pop()
            self._count -= 1
            if not victims:
                del self._lru[tail]

        self._lru.setdefault(block.index, []).append(block)
        self._count += 1

    def destroy(self) -> None:
        """Drop every cached block."""
        self._lru.clear()
        self._count = 0
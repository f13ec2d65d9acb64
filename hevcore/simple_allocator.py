"""Allocator that makes a fresh block for every request."""

from __future__ import annotations

from typing import Optional

from hevcore.allocator import MemoryAllocator, MemoryBlock


class SimpleAllocator(MemoryAllocator):
    """An allocator that keeps nothing between requests."""

    def alloc(self, size: int) -> Optional[MemoryBlock]:
        """Return a new zero-filled block of ``size`` bytes."""
        self._check_size(size)
        return self._new_block(size)

    def realloc(self, block: Optional[MemoryBlock], size: int) -> Optional[MemoryBlock]:
        """Resize ``block``; a None block allocates, a zero size frees."""
        self._check_size(size)
        if block is None:
            return self.alloc(size)
        if size == 0:
            self.free(block)
            return None
        self._check_live(block)
        self._resize_block(block, size)
        return block

    def free(self, block: Optional[MemoryBlock]) -> None:
        """Release ``block``; None is ignored."""
        if block is not None:
            self._release(block)
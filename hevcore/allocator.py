"""Base class for reference-counted memory allocators."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Optional


@dataclass(eq=False)
class MemoryBlock:
    """A block of memory handed out by an allocator.

    ``index`` is bookkeeping private to the allocator that made the block;
    -1 means the block belongs to no size class.
    """

    data: bytearray
    index: int = -1
    freed: bool = False

    def __len__(self) -> int:
        return len(self.data)


class MemoryAllocator(abc.ABC):
    """An allocator of :class:`MemoryBlock` objects with a reference count.

    A new allocator holds one reference; :meth:`destroy` runs when the last
    reference is dropped.
    """

    def __init__(self) -> None:
        self.ref_count = 1

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ref_count={self.ref_count})"

    def ref(self) -> MemoryAllocator:
        """Add a reference and return the allocator."""
        if self.ref_count == 0:
            raise RuntimeError("allocator has already been destroyed")
        self.ref_count += 1
        return self

    def unref(self) -> None:
        """Drop a reference; destroy the allocator when none are left."""
        if self.ref_count == 0:
            raise RuntimeError("allocator has already been destroyed")
        self.ref_count -= 1
        if self.ref_count > 0:
            return
        self.destroy()

    @abc.abstractmethod
    def alloc(self, size: int) -> Optional[MemoryBlock]:
        """Allocate a block of ``size`` bytes."""

    @abc.abstractmethod
    def realloc(self, block: Optional[MemoryBlock], size: int) -> Optional[MemoryBlock]:
        """Resize ``block`` to ``size`` bytes, keeping its leading content."""

    @abc.abstractmethod
    def free(self, block: Optional[MemoryBlock]) -> None:
        """Give ``block`` back to the allocator."""

    def destroy(self) -> None:
        """Release whatever the allocator keeps. Nothing by default."""

    @staticmethod
    def _check_size(size: int) -> None:
        if size < 0:
            raise ValueError(f"negative size: {size}")

    @staticmethod
    def _check_live(block: MemoryBlock) -> None:
        if block.freed:
            raise ValueError("block has already been freed")

    @staticmethod
    def _new_block(size: int, index: int = -1) -> MemoryBlock:
        return MemoryBlock(bytearray(size), index)

    @staticmethod
    def _resize_block(block: MemoryBlock, size: int) -> None:
        current = len(block.data)
        if size < current:
            del block.data[size:]
        else:
            block.data.extend(bytes(size - current))

    def _release(self, block: MemoryBlock) -> None:
        self._check_live(block)
        block.freed = True
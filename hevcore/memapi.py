"""Memory functions that go through the calling thread's default allocator."""

from __future__ import annotations

import threading
from typing import Optional

from hevcore.allocator import MemoryAllocator, MemoryBlock
from hevcore.simple_allocator import SimpleAllocator

_local = threading.local()


def default_allocator() -> MemoryAllocator:
    """Return this thread's default allocator, creating a simple one if unset."""
    allocator = getattr(_local, "allocator", None)
    if allocator is None:
        allocator = SimpleAllocator()
        _local.allocator = allocator
    return allocator


def set_default_allocator(allocator: Optional[MemoryAllocator]) -> Optional[MemoryAllocator]:
    """Set this thread's default allocator and return the previous one."""
    old = getattr(_local, "allocator", None)
    _local.allocator = allocator
    return old


def malloc(size: int) -> Optional[MemoryBlock]:
    """Allocate ``size`` bytes from the default allocator."""
    return default_allocator().alloc(size)


def malloc0(size: int) -> Optional[MemoryBlock]:
    """Allocate ``size`` zero-filled bytes from the default allocator."""
    block = default_allocator().alloc(size)
    if block is not None:
        block.data[:] = bytes(len(block.data))
    return block


def calloc(nmemb: int, size: int) -> Optional[MemoryBlock]:
    """Allocate a zero-filled array of ``nmemb`` items of ``size`` bytes."""
    if nmemb < 0 or size < 0:
        raise ValueError("negative element count or size")
    if not nmemb or not size:
        return None
    return malloc0(nmemb * size)


def realloc(block: Optional[MemoryBlock], size: int) -> Optional[MemoryBlock]:
    """Resize ``block`` to ``size`` bytes with the default allocator."""
    return default_allocator().realloc(block, size)


def free(block: Optional[MemoryBlock]) -> None:
    """Give ``block`` back to the default allocator."""
    default_allocator().free(block)
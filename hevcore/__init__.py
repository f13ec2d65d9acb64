"""Intrusive red-black trees, reference-counted objects and memory allocators."""

__version__ = "0.1.0"

__all__ = [
    "allocator",
    "memapi",
    "rbtree",
    "rbtree_cached",
    "refobject",
    "simple_allocator",
    "slice_allocator",
]
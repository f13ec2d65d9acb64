# hevcore

Small building blocks for systems-style code in Python:

- **`hevcore.rbtree`**: an intrusive red-black tree. You decide where each
  node goes, and the tree keeps itself balanced. `RBTree.link_node` attaches a
  node, `RBTree.insert_color` rebalances, and `RBTree.erase` and
  `RBTree.replace` remove or swap nodes. You can walk the tree in order with
  `iter(tree)`, `first()`/`last()`, or `RBNode.next()`/`RBNode.prev()`.
  `RBNode.is_empty()` tells whether a node is linked into a tree.
- **`hevcore.rbtree_cached`**: `CachedRBTree`, a red-black tree that keeps its
  leftmost node at hand, so `first()` takes constant time.
- **`hevcore.refobject`**: `RefObject` and the thread-safe `AtomicRefObject`,
  base classes with explicit reference counts. `destruct()` is called once the
  last reference is dropped.
- **`hevcore.allocator`**, **`hevcore.simple_allocator`**,
  **`hevcore.slice_allocator`**: allocators that hand out `MemoryBlock`
  objects backed by a `bytearray`. `SliceAllocator` keeps freed blocks in size
  classes and reuses them.
- **`hevcore.memapi`**: `malloc`, `malloc0`, `calloc`, `realloc` and `free`
  on top of a per-thread default allocator. You can swap that allocator with
  `set_default_allocator`.

## Installation

```
pip install hevcore
```

## Red-black tree

The tree is intrusive: it does not compare keys itself. You walk down from the
root and link the new node where it belongs, then let the tree rebalance.

```python
from hevcore.rbtree import RBNode, RBTree


class Item(RBNode):
    def __init__(self, key):
        super().__init__()
        self.key = key


def insert(tree, item):
    parent, left = None, False
    node = tree.root
    while node is not None:
        parent = node
        left = item.key < node.key
        node = node.left if left else node.right
    tree.link_node(item, parent, left)
    tree.insert_color(item)


tree = RBTree()
for key in (5, 1, 9, 3):
    insert(tree, Item(key))

print([item.key for item in tree])   # [1, 3, 5, 9]
tree.erase(tree.first())
print(tree.first().key)              # 3
```

`RBNode` also takes an optional `value` argument if you prefer not to
subclass. After `erase` or `replace`, the removed node is unlinked again
(`is_empty()` returns `True`).

`CachedRBTree` works the same way. The only difference is that
`insert_color` takes an extra `leftmost` flag (default `False`). Pass `True`
when the new node was linked as the leftmost node, that is, when you went left
at every step of the descent.

## Reference-counted objects

```python
from hevcore.refobject import RefObject


class Resource(RefObject):
    def destruct(self):
        print("released")


res = Resource()     # reference count starts at 1
res.ref()
res.unref()
res.unref()          # prints "released"
```

Instead of subclassing you can pass `on_destruct=callback`; the callback is
called with the object when the last reference goes. Calling `ref()` or
`unref()` on an object whose count has reached zero raises `RuntimeError`.

Use `AtomicRefObject` when references are taken and dropped from several
threads.

## Memory allocation

```python
from hevcore import memapi

block = memapi.malloc0(64)       # 64 zero bytes in block.data
block = memapi.realloc(block, 256)
memapi.free(block)
```

Each thread has its own default allocator. At first it is a `SimpleAllocator`.
You can install a caching allocator instead:

```python
from hevcore import memapi
from hevcore.slice_allocator import SliceAllocator

previous = memapi.set_default_allocator(SliceAllocator())
```

Behaviour worth knowing:

- `realloc(None, size)` allocates; `realloc(block, 0)` frees and returns
  `None`.
- `calloc` returns `None` when either argument is zero.
- Negative sizes raise `ValueError`, and so does freeing or resizing a block
  that was already freed.
- `SliceAllocator` rounds sizes up to multiples of 64 bytes and returns `None`
  for a size of 0. Freed blocks of up to 4096 bytes are cached, at most 1000
  in all; when the cache is full, a block is dropped from the size class that
  was least recently used. `cached_count()` reports how many blocks are held,
  and `destroy()` (run when the last reference is dropped) empties the cache.

Allocators are reference counted like `RefObject`: `ref()`, `unref()`, and
`destroy()` when the count reaches zero.

## What this package does not do

Memory blocks are ordinary Python `bytearray` objects; the allocators do
their own bookkeeping but do not manage raw memory or addresses.

## Running the tests

```
pip install -e ".[test]"
pytest
```
"""Red-black tree that keeps its leftmost node cached.

Only the leftmost node is cached: ``first()`` is O(1), ``last()`` still
walks down the right spine.
"""

from __future__ import annotations

from typing import Optional

from hevcore.rbtree import RBNode, RBTree


class CachedRBTree(RBTree):
    """An :class:`RBTree` that remembers its leftmost node."""

    def __init__(self) -> None:
        super().__init__()
        self.leftmost: Optional[RBNode] = None

    def first(self) -> Optional[RBNode]:
        """Return the cached leftmost node, or None if the tree is empty."""
        return self.leftmost

    def insert_color(self, node: RBNode, leftmost: bool = False) -> None:
        """Rebalance after linking ``node``; ``leftmost`` marks it as the new minimum."""
        if leftmost:
            self.leftmost = node
        super().insert_color(node)

    def replace(self, victim: RBNode, new: RBNode) -> None:
        """Put ``new`` in the place of ``victim``, keeping the cache right."""
        super().replace(victim, new)
        if self.leftmost is victim:
            self.leftmost = new

    def erase(self, node: RBNode) -> None:
        """Remove ``node`` and advance the cache if it was the leftmost."""
        if node is self.leftmost:
            self.leftmost = node.next()
        super().erase(node)
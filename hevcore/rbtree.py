"""Intrusive red-black tree with explicit linking and rebalancing.

The tree never compares keys itself: callers walk down from ``root``,
attach a node with :meth:`RBTree.link_node` and then call
:meth:`RBTree.insert_color` to restore the red-black properties.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional


class RBNode:
    """A node of an :class:`RBTree`, optionally carrying a value."""

    __slots__ = ("value", "parent", "left", "right", "black")

    def __init__(self, value: Any = None) -> None:
        self.value = value
        # A node whose parent is itself is not linked into any tree.
        self.parent: Optional[RBNode] = self
        self.left: Optional[RBNode] = None
        self.right: Optional[RBNode] = None
        self.black = False

    def __repr__(self) -> str:
        colour = "black" if self.black else "red"
        return f"RBNode({self.value!r}, {colour})"

    def _clear(self) -> None:
        self.parent = self
        self.left = None
        self.right = None
        self.black = False

    def is_empty(self) -> bool:
        """Return True if the node is not linked into a tree."""
        return self.parent is self

    def prev(self) -> Optional[RBNode]:
        """Return the in-order predecessor, or None."""
        if self.is_empty():
            return None
        node = self
        if node.left is not None:
            node = node.left
            while node.right is not None:
                node = node.right
            return node
        parent = node.parent
        while parent is not None and node is parent.left:
            node = parent
            parent = node.parent
        return parent

    def next(self) -> Optional[RBNode]:
        """Return the in-order successor, or None."""
        if self.is_empty():
            return None
        node = self
        if node.right is not None:
            node = node.right
            while node.left is not None:
                node = node.left
            return node
        parent = node.parent
        while parent is not None and node is parent.right:
            node = parent
            parent = node.parent
        return parent


def _set_parent_color(node: RBNode, parent: Optional[RBNode], black: bool) -> None:
    node.parent = parent
    node.black = black


class RBTree:
    """A red-black tree of :class:`RBNode` objects."""

    def __init__(self) -> None:
        self.root: Optional[RBNode] = None

    def __iter__(self) -> Iterator[RBNode]:
        node = self.first()
        while node is not None:
            yield node
            node = node.next()

    def _change_child(
        self, old: RBNode, new: Optional[RBNode], parent: Optional[RBNode]
    ) -> None:
        if parent is not None:
            if parent.left is old:
                parent.left = new
            else:
                parent.right = new
        else:
            self.root = new

    def _rotate_set_parents(self, old: RBNode, new: RBNode, black: bool) -> None:
        parent = old.parent
        new.parent = old.parent
        new.black = old.black
        _set_parent_color(old, new, black)
        self._change_child(old, new, parent)

    def link_node(self, node: RBNode, parent: Optional[RBNode], left: bool) -> None:
        """Attach a red leaf under ``parent`` (as root when parent is None)."""
        node.parent = parent
        node.black = False
        node.left = None
        node.right = None
        if parent is None:
            self.root = node
        elif left:
            parent.left = node
        else:
            parent.right = node

    def first(self) -> Optional[RBNode]:
        """Return the leftmost node, or None if the tree is empty."""
        node = self.root
        if node is None:
            return None
        while node.left is not None:
            node = node.left
        return node

    def last(self) -> Optional[RBNode]:
        """Return the rightmost node, or None if the tree is empty."""
        node = self.root
        if node is None:
            return None
        while node.right is not None:
            node = node.right
        return node

    def insert_color(self, node: RBNode) -> None:
        """Rebalance the tree after ``node`` has been linked in."""
        parent = node.parent
        while True:
            if parent is None:
                _set_parent_color(node, None, True)
                break
            if parent.black:
                break
            gparent = parent.parent
            tmp = gparent.right
            if parent is not tmp:
                if tmp is not None and not tmp.black:
                    _set_parent_color(tmp, gparent, True)
                    _set_parent_color(parent, gparent, True)
                    node = gparent
                    parent = node.parent
                    _set_parent_color(node, parent, False)
                    continue
                tmp = parent.right
                if node is tmp:
                    tmp = node.left
                    parent.right = tmp
                    node.left = parent
                    if tmp is not None:
                        _set_parent_color(tmp, parent, True)
                    _set_parent_color(parent, node, False)
                    parent = node
                    tmp = node.right
                gparent.left = tmp
                parent.right = gparent
                if tmp is not None:
                    _set_parent_color(tmp, gparent, True)
                self._rotate_set_parents(gparent, parent, False)
                break
            else:
                tmp = gparent.left
                if tmp is not None and not tmp.black:
                    _set_parent_color(tmp, gparent, True)
                    _set_parent_color(parent, gparent, True)
                    node = gparent
                    parent = node.parent
                    _set_parent_color(node, parent, False)
                    continue
                tmp = parent.left
                if node is tmp:
                    tmp = node.right
                    parent.left = tmp
                    node.right = parent
                    if tmp is not None:
                        _set_parent_color(tmp, parent, True)
                    _set_parent_color(parent, node, False)
                    parent = node
                    tmp = node.left
                gparent.right = tmp
                parent.left = gparent
                if tmp is not None:
                    _set_parent_color(tmp, gparent, True)
                self._rotate_set_parents(gparent, parent, False)
                break

    def replace(self, victim: RBNode, new: RBNode) -> None:
        """Put ``new`` in the place of ``victim`` without rebalancing."""
        parent = victim.parent
        new.parent = victim.parent
        new.black = victim.black
        new.left = victim.left
        new.right = victim.right
        if victim.left is not None:
            victim.left.parent = new
        if victim.right is not None:
            victim.right.parent = new
        self._change_child(victim, new, parent)
        victim._clear()

    def _erase(self, node: RBNode) -> Optional[RBNode]:
        child = node.right
        tmp = node.left
        rebalance: Optional[RBNode]

        if tmp is None:
            parent = node.parent
            was_black = node.black
            self._change_child(node, child, parent)
            if child is not None:
                child.parent = parent
                child.black = was_black
                rebalance = None
            else:
                rebalance = parent if was_black else None
        elif child is None:
            parent = node.parent
            tmp.parent = parent
            tmp.black = node.black
            self._change_child(node, tmp, parent)
            rebalance = None
        else:
            successor = child
            tmp = child.left
            if tmp is None:
                parent = successor
                child2 = successor.right
            else:
                while tmp is not None:
                    parent = successor
                    successor = tmp
                    tmp = tmp.left
                child2 = successor.right
                parent.left = child2
                successor.right = child
                child.parent = successor

            tmp = node.left
            successor.left = tmp
            tmp.parent = successor

            node_parent = node.parent
            was_black = node.black
            self._change_child(node, successor, node_parent)

            if child2 is not None:
                _set_parent_color(child2, parent, True)
                rebalance = None
            else:
                rebalance = parent if successor.black else None
            successor.parent = node_parent
            successor.black = was_black

        return rebalance

    def _erase_color(self, parent: RBNode) -> None:
        node: Optional[RBNode] = None
        while True:
            sibling = parent.right
            if node is not sibling:
                if not sibling.black:
                    tmp1 = sibling.left
                    parent.right = tmp1
                    sibling.left = parent
                    _set_parent_color(tmp1, parent, True)
                    self._rotate_set_parents(parent, sibling, False)
                    sibling = tmp1
                tmp1 = sibling.right
                if tmp1 is None or tmp1.black:
                    tmp2 = sibling.left
                    if tmp2 is None or tmp2.black:
                        _set_parent_color(sibling, parent, False)
                        if not parent.black:
                            parent.black = True
                        else:
                            node = parent
                            parent = node.parent
                            if parent is not None:
                                continue
                        break
                    tmp1 = tmp2.right
                    sibling.left = tmp1
                    tmp2.right = sibling
                    parent.right = tmp2
                    if tmp1 is not None:
                        _set_parent_color(tmp1, sibling, True)
                    tmp1 = sibling
                    sibling = tmp2
                tmp2 = sibling.left
                parent.right = tmp2
                sibling.left = parent
                _set_parent_color(tmp1, sibling, True)
                if tmp2 is not None:
                    tmp2.parent = parent
                self._rotate_set_parents(parent, sibling, True)
                break
            else:
                sibling = parent.left
                if not sibling.black:
                    tmp1 = sibling.right
                    parent.left = tmp1
                    sibling.right = parent
                    _set_parent_color(tmp1, parent, True)
                    self._rotate_set_parents(parent, sibling, False)
                    sibling = tmp1
                tmp1 = sibling.left
                if tmp1 is None or tmp1.black:
                    tmp2 = sibling.right
                    if tmp2 is None or tmp2.black:
                        _set_parent_color(sibling, parent, False)
                        if not parent.black:
                            parent.black = True
                        else:
                            node = parent
                            parent = node.parent
                            if parent is not None:
                                continue
                        break
                    tmp1 = tmp2.left
                    sibling.right = tmp1
                    tmp2.left = sibling
                    parent.left = tmp2
                    if tmp1 is not None:
                        _set_parent_color(tmp1, sibling, True)
                    tmp1 = sibling
                    sibling = tmp2
                tmp2 = sibling.right
                parent.left = tmp2
                sibling.right = parent
                _set_parent_color(tmp1, sibling, True)
                if tmp2 is not None:
                    tmp2.parent = parent
                self._rotate_set_parents(parent, sibling, True)
                break

    def erase(self, node: RBNode) -> None:
        """Remove ``node`` from the tree and rebalance."""
        rebalance = self._erase(node)
        if rebalance is not None:
            self._erase_color(rebalance)
        node._clear()
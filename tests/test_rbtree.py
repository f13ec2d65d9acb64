import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from hevcore.rbtree import RBNode, RBTree


def insert(tree, value):
    node = RBNode(value)
    parent = None
    left = False
    cur = tree.root
    while cur is not None:
        parent = cur
        if value < cur.value:
            cur = cur.left
            left = True
        else:
            cur = cur.right
            left = False
    tree.link_node(node, parent, left)
    tree.insert_color(node)
    return node


def check(tree):
    """Verify red-black invariants; return the black height."""
    root = tree.root
    if root is None:
        return 0
    assert root.parent is None
    assert root.black

    def walk(node):
        if node is None:
            return 1
        for child in (node.left, node.right):
            if child is not None:
                assert child.parent is node
                if not node.black:
                    assert child.black
        lh = walk(node.left)
        rh = walk(node.right)
        assert lh == rh
        return lh + (1 if node.black else 0)

    return walk(root)


def values(tree):
    return [n.value for n in tree]


def test_empty_tree():
    tree = RBTree()
    assert tree.first() is None
    assert tree.last() is None
    assert list(tree) == []


def test_fresh_node_is_empty():
    node = RBNode(1)
    assert node.is_empty()
    assert node.prev() is None
    assert node.next() is None


def test_single_root_is_black():
    tree = RBTree()
    node = insert(tree, 5)
    assert tree.root is node
    assert node.black
    assert not node.is_empty()
    assert tree.first() is node
    assert tree.last() is node


@pytest.mark.parametrize("order", ["ascending", "descending", "shuffled"])
def test_insert_keeps_order_and_invariants(order):
    data = list(range(200))
    if order == "descending":
        data.reverse()
    elif order == "shuffled":
        random.Random(7).shuffle(data)
    tree = RBTree()
    for v in data:
        insert(tree, v)
        check(tree)
    assert values(tree) == sorted(data)
    assert tree.first().value == min(data)
    assert tree.last().value == max(data)


def test_prev_walks_backwards():
    tree = RBTree()
    for v in [8, 3, 10, 1, 6, 14, 4, 7, 13]:
        insert(tree, v)
    out = []
    node = tree.last()
    while node is not None:
        out.append(node.value)
        node = node.prev()
    assert out == sorted([8, 3, 10, 1, 6, 14, 4, 7, 13], reverse=True)


def test_erase_all_nodes():
    tree = RBTree()
    nodes = [insert(tree, v) for v in range(100)]
    rng = random.Random(3)
    rng.shuffle(nodes)
    remaining = set(range(100))
    for node in nodes:
        tree.erase(node)
        remaining.discard(node.value)
        assert node.is_empty()
        check(tree)
        assert values(tree) == sorted(remaining)
    assert tree.root is None


def test_replace_keeps_structure():
    tree = RBTree()
    nodes = {v: insert(tree, v) for v in range(20)}
    victim = nodes[10]
    new = RBNode(10)
    was_black = victim.black
    tree.replace(victim, new)
    assert victim.is_empty()
    assert new.black == was_black
    assert values(tree) == list(range(20))
    assert any(n is new for n in tree)
    check(tree)


def test_replace_root():
    tree = RBTree()
    for v in range(5):
        insert(tree, v)
    root = tree.root
    new = RBNode(root.value)
    tree.replace(root, new)
    assert tree.root is new
    assert new.parent is None
    check(tree)


def test_duplicates_allowed():
    tree = RBTree()
    for v in [2, 2, 1, 2, 1]:
        insert(tree, v)
    assert values(tree) == [1, 1, 2, 2, 2]
    check(tree)


@settings(max_examples=60)
@given(
    st.lists(st.integers(-1000, 1000), max_size=80),
    st.lists(st.integers(0, 10_000), max_size=80),
)
def test_random_insert_erase(data, removals):
    tree = RBTree()
    nodes = [insert(tree, v) for v in data]
    check(tree)
    live = list(nodes)
    for r in removals:
        if not live:
            break
        node = live.pop(r % len(live))
        tree.erase(node)
        check(tree)
    assert values(tree) == sorted(n.value for n in live)


@given(st.lists(st.integers(), min_size=1, max_size=60))
def test_black_height_bound(data):
    tree = RBTree()
    for v in data:
        insert(tree, v)
    height = check(tree)
    assert 2 ** (height - 1) - 1 <= len(data)
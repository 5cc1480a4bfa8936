#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
red_black_set.py
----------------

An ordered, in‑memory set of distinct values kept in a **Red‑Black** tree.
Insertion and exact lookup both run in O(log n) because the colouring rules
bound the height of the tree by ``2 * log2(n + 1)``.

Features
~~~~~~~~
* `tree.put(value)`      – insert (a value already present is silently ignored)
* `tree.find(value)`     – return the node holding *value* or ``None``
* `tree.size()`, `len(tree)`
* `tree.is_empty()`, `bool(tree)`
* `value in tree`        – membership test
* `key=` / `cmp=`        – caller supplied ordering (natural order by default)
* `tree.height()`, `tree.black_height()`
* `tree.validate()`      – sanity‑check the red‑black invariants (debugging)

There is no removal, no range query and no iteration API: the
tree only grows, and nodes keep their value for the lifetime of the tree.

Absent children are plain ``None`` and are treated as BLACK nil leaves, so
the nodes returned by :meth:`RedBlackTree.find` can be inspected directly.

Typical usage
~~~~~~~~~~~~~
>>> from red_black_set import RedBlackTree
>>> rbt = RedBlackTree()
>>> for v in (15, 5, 1):
...     rbt.put(v)
>>> rbt.root
<B 5>
>>> rbt.root.left, rbt.root.right
(<R 1>, <R 15>)
>>> rbt.put(5)
>>> rbt.size()
3
>>> rbt.find(42) is None
True
"""

from __future__ import annotations

import logging
from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    List,
    Optional,
    Tuple,
    TypeVar,
)

logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------
#  Type variable (values must be ordered by the tree's comparison)
# ----------------------------------------------------------------------
V = TypeVar("V")

# ----------------------------------------------------------------------
#  Node colour constants
# ----------------------------------------------------------------------
RED = True
BLACK = False


class TreeStructureError(RuntimeError):
    """Parent/child links of the tree contradict each other."""


class Node(Generic[V]):
    """A single tree node. ``value`` must not be changed once inserted."""

    __slots__ = ("value", "color", "left", "right", "parent")

    def __init__(
        self,
        value: V,
        parent: Optional["Node[V]"] = None,
        color: bool = RED,
    ) -> None:
        self.value = value
        self.color = color
        self.parent = parent
        self.left: Optional[Node[V]] = None
        self.right: Optional[Node[V]] = None

    @property
    def is_red(self) -> bool:
        return self.color == RED

    @property
    def grandparent(self) -> Optional["Node[V]"]:
        if self.parent is None:
            return None
        return self.parent.parent

    def __repr__(self) -> str:
        col = "R" if self.color == RED else "B"
        return f"<{col} {self.value!r}>"


def _is_red(node: Optional[Node[Any]]) -> bool:
    """Nil leaves (``None``) are black."""
    return node is not None and node.color == RED


def _make_comparator(
    key: Optional[Callable[[Any], Any]],
    cmp: Optional[Callable[[Any, Any], int]],
) -> Callable[[Any, Any], int]:
    """
    Build the three‑way comparison used by the tree.

    ``cmp`` is used as is.  Otherwise values (or ``key(value)`` when a key
    function is given) are compared with ``<`` and ``>``, the same way
    ``sorted`` does.
    """
    if key is not None and cmp is not None:
        raise ValueError("pass either key or cmp, not both")
    if cmp is not None:
        return cmp

    extract: Callable[[Any], Any] = (lambda x: x) if key is None else key

    def compare(a: Any, b: Any) -> int:
        ka, kb = extract(a), extract(b)
        if ka < kb:
            return -1
        if ka > kb:
            return 1
        return 0

    return compare


class RedBlackTree(Generic[V]):
    """
    A set of distinct values stored in a red‑black binary search tree.

    Parameters
    ----------
    items : iterable of values, optional
        Each value is inserted with :meth:`put` (duplicates are dropped).
    key : Callable[[V], Any], optional
        Order values by ``key(value)`` instead of the values themselves.
    cmp : Callable[[V, V], int], optional
        Three‑way comparator returning a negative number, zero or a
        positive number.  Mutually exclusive with ``key``.

    The tree is not thread‑safe; callers sharing one instance between
    threads must serialise access themselves.
    """

    __slots__ = ("_root", "_size", "_compare")

    def __init__(
        self,
        items: Optional[Iterable[V]] = None,
        *,
        key: Optional[Callable[[V], Any]] = None,
        cmp: Optional[Callable[[V, V], int]] = None,
    ) -> None:
        self._compare: Callable[[Any, Any], int] = _make_comparator(key, cmp)
        self._root: Optional[Node[V]] = None
        self._size: int = 0

        if items is not None:
            for value in items:
                self.put(value)

    # ------------------------------------------------------------------
    #   Public API
    # ------------------------------------------------------------------
    def put(self, value: V) -> None:
        """Insert *value*; a value that is already present is ignored."""
        node = self._bst_insert(value)
        if node is not None:
            self._size += 1
            self._repair(node)
        if self._root is not None:
            self._root.color = BLACK

    def find(self, value: V) -> Optional[Node[V]]:
        """Return the node holding *value*, or ``None`` if it was never put."""
        return self._search_node(value)

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    @property
    def root(self) -> Optional[Node[V]]:
        return self._root

    # ------------------------------------------------------------------
    #   Container protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: object) -> bool:
        return self._search_node(value) is not None

    def __repr__(self) -> str:
        return f"RedBlackTree(size={self._size}, root={self._root!r})"

    # ------------------------------------------------------------------
    #   Lookup
    # ------------------------------------------------------------------
    def _search_node(self, value: Any) -> Optional[Node[V]]:
        cur = self._root
        while cur is not None:
            res = self._compare(value, cur.value)
            if res < 0:
                cur = cur.left
            elif res > 0:
                cur = cur.right
            else:
                return cur
        return None

    # ------------------------------------------------------------------
    #   Core BST insertion (without red‑black repair)
    # ------------------------------------------------------------------
    def _bst_insert(self, value: V) -> Optional[Node[V]]:
        """
        Attach a new RED node for *value* at its BST position and return it.
        Returns ``None`` when an equal value is already stored.
        """
        if self._root is None:
            self._root = Node(value)
            return self._root

        cur = self._root
        while True:
            res = self._compare(value, cur.value)
            if res == 0:
                return None
            if res < 0:
                if cur.left is None:
                    cur.left = Node(value, parent=cur)
                    return cur.left
                cur = cur.left
            else:
                if cur.right is None:
                    cur.right = Node(value, parent=cur)
                    return cur.right
                cur = cur.right

    # ------------------------------------------------------------------
    #   Insert repair (restores the red‑black properties)
    # ------------------------------------------------------------------
    def _repair(self, node: Node[V]) -> None:
        """Walk up from the freshly inserted RED *node* fixing red‑red links."""
        while True:
            parent = node.parent
            if parent is None or parent.color == BLACK:
                return
            # A black node cannot start a red-red violation.
            if node.color == BLACK:
                return
            grandparent = parent.parent
            if grandparent is None:
                return

            uncle = self._uncle(parent)
            if _is_red(uncle):
                # Case 1 – recolour, the violation may move up two levels
                logger.debug("repair %r: red uncle %r, recolouring", node, uncle)
                parent.color = BLACK
                uncle.color = BLACK  # type: ignore[union-attr]
                grandparent.color = RED
                node = grandparent
            elif self._forms_triangle(parent, node):
                # Case 2 – straighten the triangle into a line
                logger.debug("repair %r: triangle under %r", node, grandparent)
                if parent.left is node:
                    self._rotate_right(parent)
                else:
                    self._rotate_left(parent)
                node = parent
            elif self._forms_line(parent, node):
                # Case 3 – rotate the grandparent away from the line
                logger.debug("repair %r: line under %r", node, grandparent)
                if parent.left is node:
                    self._rotate_right(grandparent)
                else:
                    self._rotate_left(grandparent)
                grandparent.color = RED
                parent.color = BLACK
                node = parent
            else:
                logger.warning(
                    "repair %r: no case matched under %r, moving to parent",
                    node,
                    parent,
                )
                node = parent

    @staticmethod
    def _uncle(parent: Node[V]) -> Optional[Node[V]]:
        grandparent = parent.parent
        if grandparent is None:
            raise TreeStructureError(f"{parent!r} has no grandparent side")
        if grandparent.left is parent:
            return grandparent.right
        if grandparent.right is parent:
            return grandparent.left
        raise TreeStructureError(
            f"{parent!r} is not a child of its parent {grandparent!r}"
        )

    @staticmethod
    def _forms_triangle(parent: Node[V], child: Node[V]) -> bool:
        """*child* is the inner grandchild: left‑of‑right or right‑of‑left."""
        grandparent = parent.parent
        if grandparent is None:
            return False
        if parent.left is child and grandparent.right is parent:
            return True
        return parent.right is child and grandparent.left is parent

    @staticmethod
    def _forms_line(parent: Node[V], child: Node[V]) -> bool:
        """*child*, *parent* and the grandparent all lean the same way."""
        grandparent = parent.parent
        if grandparent is None:
            return False
        if grandparent.right is parent and parent.right is child:
            return True
        return grandparent.left is parent and parent.left is child

    # ------------------------------------------------------------------
    #   Left / right rotations – helper primitives
    # ------------------------------------------------------------------
    def _replace_child(
        self, parent: Optional[Node[V]], old: Node[V], new: Node[V]
    ) -> None:
        """Point the link that referenced *old* (or the root) at *new*."""
        if parent is None:
            self._root = new
        elif parent.left is old:
            parent.left = new
        elif parent.right is old:
            parent.right = new
        else:
            raise TreeStructureError(
                f"{old!r} is not a child of its parent {parent!r}"
            )
        new.parent = parent

    def _rotate_left(self, x: Node[V]) -> None:
        """Left‑rotate the subtree rooted at `x`."""
        y = x.right
        if y is None:
            raise TreeStructureError(
                f"rotate_left called on {x!r} without a right child"
            )
        logger.debug("rotate left at %r", x)
        # Link x's parent to y
        self._replace_child(x.parent, x, y)
        # Turn y's left subtree into x's right subtree
        x.right = y.left
        if y.left is not None:
            y.left.parent = x
        # Put x on y's left
        y.left = x
        x.parent = y

    def _rotate_right(self, y: Node[V]) -> None:
        """Right‑rotate the subtree rooted at `y`."""
        x = y.left
        if x is None:
            raise TreeStructureError(
                f"rotate_right called on {y!r} without a left child"
            )
        logger.debug("rotate right at %r", y)
        self._replace_child(y.parent, y, x)
        y.left = x.right
        if x.right is not None:
            x.right.parent = y
        x.right = y
        y.parent = x

    # ------------------------------------------------------------------
    #   Shape metrics
    # ------------------------------------------------------------------
    def height(self) -> int:
        """Number of nodes on the longest root‑to‑leaf path (0 when empty)."""
        best = 0
        stack: List[Tuple[Node[V], int]] = []
        if self._root is not None:
            stack.append((self._root, 1))
        while stack:
            node, depth = stack.pop()
            best = max(best, depth)
            if node.left is not None:
                stack.append((node.left, depth + 1))
            if node.right is not None:
                stack.append((node.right, depth + 1))
        return best

    def black_height(self) -> int:
        """Black nodes on the leftmost root‑to‑nil path, nil leaf excluded."""
        count = 0
        node = self._root
        while node is not None:
            if node.color == BLACK:
                count += 1
            node = node.left
        return count

    # ------------------------------------------------------------------
    #   Validation – useful for debugging
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """
        Verify that the tree satisfies all red‑black invariants.
        Raises ``AssertionError`` with a descriptive message if something is broken.
        """

        def dfs(node: Optional[Node[V]]) -> Tuple[int, int]:
            """Return ``(black_height, node_count)`` of the subtree."""
            if node is None:
                return 1, 0  # nil leaves are black

            assert node.color in (RED, BLACK), f"{node!r} has no valid colour"

            if node.color == RED:
                assert not _is_red(node.left), f"Red node {node!r} has red left child"
                assert not _is_red(node.right), f"Red node {node!r} has red right child"

            for child in (node.left, node.right):
                if child is not None:
                    assert child.parent is node, f"{child!r} has a stale parent link"

            if node.left is not None:
                assert (
                    self._compare(node.left.value, node.value) < 0
                ), "BST property violated (left child larger)"
            if node.right is not None:
                assert (
                    self._compare(node.right.value, node.value) > 0
                ), "BST property violated (right child smaller)"

            left_black, left_count = dfs(node.left)
            right_black, right_count = dfs(node.right)
            assert left_black == right_black, f"Black-height mismatch below {node!r}"

            bh = left_black + (1 if node.color == BLACK else 0)
            return bh, left_count + right_count + 1

        if self._root is None:
            assert self._size == 0, "Empty tree with non-zero size"
            return

        assert self._root.color == BLACK, "Root is not black"
        assert self._root.parent is None, "Root has a parent"
        _, count = dfs(self._root)
        assert count == self._size, f"Size is {self._size} but {count} nodes are linked"

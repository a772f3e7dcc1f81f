from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

from .arena import NIL, NodeArena
from .bound import Bound
from .iter import MutableTreeIter, TreeIter
from .navigable import NavigableSet
from .view import RangeView

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Tree(NavigableSet[T]):
    """An ordered set stored as a plain binary search tree.

    Nodes live in a `NodeArena` and are addressed by integer handles.
    Balancing disciplines subclass this and override `_retrace`, which is
    handed the lowest node whose subtree changed shape after every
    insertion and removal.
    """

    def __init__(self, capacity: int = 16):
        self._arena: NodeArena[T] = NodeArena(capacity)
        self._root: int = NIL
        self._len: int = 0

    @classmethod
    def _from_iterable(cls, it: Iterable[T]) -> Tree[T]:
        ret = cls()
        for value in it:
            ret.add(value)
        return ret

    # link surgery:

    def _set_left_child(self, node: int, child: int):
        self._arena.left[node] = child
        if child != NIL:
            self._arena.parent[child] = node

    def _set_right_child(self, node: int, child: int):
        self._arena.right[node] = child
        if child != NIL:
            self._arena.parent[child] = node

    def _replace_child(self, parent: int, old: int, new: int):
        """Put `new` in whichever slot of `parent` currently holds `old`."""
        arena = self._arena

        if parent == NIL:
            self._root = new
            if new != NIL:
                arena.parent[new] = NIL
        elif arena.left[parent] == old:
            self._set_left_child(parent, new)
        else:
            assert arena.right[parent] == old, "node is not a child of its parent"
            self._set_right_child(parent, new)

    def _rotate_left(self, node: int) -> int:
        arena = self._arena
        parent = int(arena.parent[node])
        pivot = int(arena.right[node])

        self._set_right_child(node, int(arena.left[pivot]))
        self._replace_child(parent, node, pivot)
        self._set_left_child(pivot, node)
        return pivot

    def _rotate_right(self, node: int) -> int:
        arena = self._arena
        parent = int(arena.parent[node])
        pivot = int(arena.left[node])

        self._set_left_child(node, int(arena.right[pivot]))
        self._replace_child(parent, node, pivot)
        self._set_right_child(pivot, node)
        return pivot

    # methods for subclasses to override:

    def _retrace(self, start: int):
        pass

    # lookup:

    def _find(self, value: T) -> int:
        """The node holding `value`, or else the node a new `value` would
        hang from. `NIL` only if the tree is empty."""
        arena = self._arena
        node = self._root
        if node == NIL:
            return NIL

        while True:
            cur = arena.values[node]
            if value == cur:
                return node

            if value < cur:
                child = int(arena.left[node])
            else:
                child = int(arena.right[node])

            if child == NIL:
                return node
            node = child

    def _first_node(self) -> int:
        node = self._root
        if node == NIL:
            raise IndexError("Tree is empty")

        left = self._arena.left
        while left[node] != NIL:
            node = int(left[node])
        return node

    def _last_node(self) -> int:
        node = self._root
        if node == NIL:
            raise IndexError("Tree is empty")

        right = self._arena.right
        while right[node] != NIL:
            node = int(right[node])
        return node

    def _neighbor(
        self,
        value: T,
        below: bool,
        inclusive: bool,
        valid: Optional[Callable[[T], bool]] = None,
    ) -> Optional[T]:
        """Single descent for the nearest element on one side of `value`.

        Every visited node on the requested side is closer to `value` than
        the previous candidate, so the last accepted one is the answer.
        """
        arena = self._arena
        node = self._root
        best = NIL

        while node != NIL:
            cur = arena.values[node]
            if inclusive and cur == value and (valid is None or valid(cur)):
                return cur

            if below:
                if cur < value:
                    if valid is None or valid(cur):
                        best = node
                    node = int(arena.right[node])
                else:
                    node = int(arena.left[node])
            else:
                if cur > value:
                    if valid is None or valid(cur):
                        best = node
                    node = int(arena.left[node])
                else:
                    node = int(arena.right[node])

        if best == NIL:
            return None
        return arena.values[best]

    def contains(self, value: T) -> bool:
        node = self._find(value)
        return node != NIL and self._arena.values[node] == value

    def size(self) -> int:
        return self._len

    def is_empty(self) -> bool:
        return self._root == NIL

    def first(self) -> T:
        return self._arena.values[self._first_node()]

    def last(self) -> T:
        return self._arena.values[self._last_node()]

    def lower(self, value: T) -> Optional[T]:
        return self._neighbor(value, below=True, inclusive=False)

    def higher(self, value: T) -> Optional[T]:
        return self._neighbor(value, below=False, inclusive=False)

    def floor(self, value: T) -> Optional[T]:
        return self._neighbor(value, below=True, inclusive=True)

    def ceiling(self, value: T) -> Optional[T]:
        return self._neighbor(value, below=False, inclusive=True)

    # mutation:

    def add(self, value: T) -> bool:
        arena = self._arena
        closest = self._find(value)
        if closest != NIL and arena.values[closest] == value:
            return False

        node = arena.alloc(value)
        if closest == NIL:
            self._root = node
        elif value < arena.values[closest]:
            assert arena.left[closest] == NIL
            self._set_left_child(closest, node)
        else:
            assert arena.right[closest] == NIL
            self._set_right_child(closest, node)
        self._len += 1

        self._retrace(closest)
        return True

    def remove(self, value: T) -> bool:
        node = self._find(value)
        if node == NIL or not (self._arena.values[node] == value):
            return False

        self._len -= 1
        start = self._splice_out(node)
        self._retrace(start if start != NIL else self._root)
        return True

    def _splice_out(self, node: int) -> int:
        """Detach `node` from the tree and release it.

        Returns the lowest node whose subtree lost height, or `NIL` if the
        removed node was the root and nothing above it changed.
        """
        arena = self._arena
        parent = int(arena.parent[node])
        left = int(arena.left[node])
        right = int(arena.right[node])

        if left == NIL or right == NIL:
            self._replace_child(parent, node, left if left != NIL else right)
            arena.release(node)
            return parent

        # Two children: swap in a fresh node carrying the in-order
        # predecessor's value.
        pred = left
        while arena.right[pred] != NIL:
            pred = int(arena.right[pred])
        pred_parent = int(arena.parent[pred])
        self._replace_child(pred_parent, pred, int(arena.left[pred]))

        replacement = arena.alloc(arena.values[pred])
        arena.height[replacement] = arena.height[node]
        self._set_left_child(replacement, int(arena.left[node]))
        self._set_right_child(replacement, right)
        self._replace_child(parent, node, replacement)

        logger.debug(
            "replaced %r with in-order predecessor %r",
            arena.values[node],
            arena.values[pred],
        )

        arena.release(node)
        arena.release(pred)

        if pred_parent == node:
            return replacement
        return pred_parent

    def clear(self):
        self._arena = NodeArena(self._arena.capacity)
        self._root = NIL
        self._len = 0

    # traversal and views:

    def iterator(self) -> MutableTreeIter[T]:
        return MutableTreeIter(self)

    def __iter__(self) -> TreeIter[T]:
        return TreeIter(self)

    def _view(self, lower: Optional[Bound], upper: Optional[Bound]) -> RangeView[T]:
        return RangeView(self, lower, upper)

    def check_invariant(self) -> bool:
        """Verify BST ordering, parent links and the stored size."""
        arena = self._arena
        if self._root == NIL:
            return self._len == 0
        if arena.parent[self._root] != NIL:
            return False

        # (node, tightest ancestor below it, tightest ancestor above it)
        stack: List[Tuple[int, int, int]] = [(self._root, NIL, NIL)]
        count = 0
        while len(stack) > 0:
            node, lo, hi = stack.pop()
            value = arena.values[node]
            count += 1

            if lo != NIL and not value > arena.values[lo]:
                return False
            if hi != NIL and not value < arena.values[hi]:
                return False

            left = int(arena.left[node])
            if left != NIL:
                if arena.parent[left] != node:
                    return False
                stack.append((left, lo, node))

            right = int(arena.right[node])
            if right != NIL:
                if arena.parent[right] != node:
                    return False
                stack.append((right, node, hi))

        return count == self._len

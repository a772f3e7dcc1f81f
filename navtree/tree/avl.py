from __future__ import annotations

import logging
from typing import List, TypeVar

from .arena import NIL
from .base import Tree

T = TypeVar("T")

logger = logging.getLogger(__name__)


class AVLTree(Tree[T]):
    """A `Tree` kept height-balanced by AVL rotations.

    Every node caches the height of its subtree. After each insertion or
    removal the tree is retraced from the lowest changed node up to the
    root, recomputing heights and rotating wherever the two child heights
    differ by two.
    """

    def height(self) -> int:
        return self._arena.height_of(self._root)

    def _update_height(self, node: int):
        arena = self._arena
        arena.height[node] = 1 + max(
            arena.height_of(int(arena.left[node])),
            arena.height_of(int(arena.right[node])),
        )

    def _balance_factor(self, node: int) -> int:
        arena = self._arena
        return arena.height_of(int(arena.right[node])) - arena.height_of(
            int(arena.left[node])
        )

    def _rotate_left(self, node: int) -> int:
        pivot = super()._rotate_left(node)
        self._update_height(node)
        self._update_height(pivot)
        return pivot

    def _rotate_right(self, node: int) -> int:
        pivot = super()._rotate_right(node)
        self._update_height(node)
        self._update_height(pivot)
        return pivot

    def _rotate_left_then_right(self, node: int) -> int:
        self._rotate_left(int(self._arena.left[node]))
        return self._rotate_right(node)

    def _rotate_right_then_left(self, node: int) -> int:
        self._rotate_right(int(self._arena.right[node]))
        return self._rotate_left(node)

    def _rebalance(self, node: int) -> int:
        """Restore the balance of `node` if it is off by two.

        Returns the root of the (possibly rotated) subtree.
        """
        arena = self._arena
        bal = self._balance_factor(node)

        if bal == -2:
            child = int(arena.left[node])
            if arena.height_of(int(arena.left[child])) >= arena.height_of(
                int(arena.right[child])
            ):
                logger.debug("right rotation at %r", arena.values[node])
                return self._rotate_right(node)
            logger.debug("left-right rotation at %r", arena.values[node])
            return self._rotate_left_then_right(node)
        elif bal == 2:
            child = int(arena.right[node])
            if arena.height_of(int(arena.right[child])) >= arena.height_of(
                int(arena.left[child])
            ):
                logger.debug("left rotation at %r", arena.values[node])
                return self._rotate_left(node)
            logger.debug("right-left rotation at %r", arena.values[node])
            return self._rotate_right_then_left(node)

        assert -1 <= bal <= 1, "balance factor {} at {!r}".format(
            bal, arena.values[node]
        )
        return node

    def _retrace(self, start: int):
        arena = self._arena
        node = start

        # Rotations can change an ancestor's balance, so always walk to the
        # root.
        while node != NIL:
            self._update_height(node)
            node = self._rebalance(node)
            node = int(arena.parent[node])

    def check_invariant(self) -> bool:
        """Verify BST ordering plus cached heights and AVL balance."""
        if not super().check_invariant():
            return False
        if self._root == NIL:
            return True

        arena = self._arena
        # Each node is checked against its children's cached heights, which
        # are in turn checked against theirs.
        stack: List[int] = [self._root]
        while len(stack) > 0:
            node = stack.pop()
            left = int(arena.left[node])
            right = int(arena.right[node])

            lh = arena.height_of(left)
            rh = arena.height_of(right)
            if arena.height[node] != 1 + max(lh, rh):
                return False
            if abs(rh - lh) > 1:
                return False

            if left != NIL:
                stack.append(left)
            if right != NIL:
                stack.append(right)

        return True

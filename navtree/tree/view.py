from __future__ import annotations

from collections.abc import Set
from typing import TYPE_CHECKING, Iterable, Optional, TypeVar

from .arena import NIL
from .bound import Bound, in_bounds, tighter_lower, tighter_upper
from .iter import MutableTreeIter, TreeIter
from .navigable import NavigableSet

if TYPE_CHECKING:
    from .base import Tree

T = TypeVar("T")


class RangeView(NavigableSet[T]):
    """A live window over the elements of a tree that lie within bounds.

    A view stores nothing but its bounds and a reference to the backing
    tree; every read and write goes straight to the tree's nodes, so
    changes made through either side are visible through the other.
    Narrowing a view produces another view over the same backing tree
    with the combined bounds, never a view of a view.
    """

    def __init__(
        self, tree: Tree[T], lower: Optional[Bound], upper: Optional[Bound]
    ):
        self._tree: Tree[T] = tree
        self.lower_bound: Optional[Bound] = lower
        self.upper_bound: Optional[Bound] = upper

    @classmethod
    def _from_iterable(cls, it: Iterable[T]):
        from .avl import AVLTree

        return AVLTree._from_iterable(it)

    def _valid(self, value: T) -> bool:
        return in_bounds(value, self.lower_bound, self.upper_bound)

    def _below_range(self, value: T) -> bool:
        return self.lower_bound is not None and not self.lower_bound.admits_above(
            value
        )

    def _above_range(self, value: T) -> bool:
        return self.upper_bound is not None and not self.upper_bound.admits_below(
            value
        )

    def _check_range(self, value: T):
        if not self._valid(value):
            raise ValueError("{!r} is outside the range of this view".format(value))

    def contains(self, value: T) -> bool:
        return self._valid(value) and self._tree.contains(value)

    def add(self, value: T) -> bool:
        self._check_range(value)
        return self._tree.add(value)

    def remove(self, value: T) -> bool:
        self._check_range(value)
        return self._tree.remove(value)

    # In-place set operators skip out-of-range elements instead of raising
    # partway through. `-=` goes through `discard`.

    def discard(self, value: T):
        if self._valid(value):
            self._tree.remove(value)

    def __ior__(self, it: Iterable[T]) -> RangeView[T]:
        for value in it:
            if self._valid(value):
                self._tree.add(value)
        return self

    def __ixor__(self, it: Iterable[T]) -> RangeView[T]:
        if it is self:
            self.clear()
            return self

        if not isinstance(it, Set):
            it = self._from_iterable(it)

        for value in it:
            if not self._valid(value):
                continue
            if not self._tree.remove(value):
                self._tree.add(value)
        return self

    def size(self) -> int:
        # Not cached: the backing tree may change between calls.
        return sum(1 for _ in self)

    def is_empty(self) -> bool:
        return self._first_node() == NIL

    def _first_node(self) -> int:
        arena = self._tree._arena
        node = self._tree._root
        ans = NIL

        while node != NIL:
            value = arena.values[node]
            if self._below_range(value):
                node = int(arena.right[node])
            elif self._above_range(value):
                node = int(arena.left[node])
            else:
                ans = node
                node = int(arena.left[node])
        return ans

    def _last_node(self) -> int:
        arena = self._tree._arena
        node = self._tree._root
        ans = NIL

        while node != NIL:
            value = arena.values[node]
            if self._above_range(value):
                node = int(arena.left[node])
            elif self._below_range(value):
                node = int(arena.right[node])
            else:
                ans = node
                node = int(arena.right[node])
        return ans

    def first(self) -> T:
        node = self._first_node()
        if node == NIL:
            raise IndexError("View is empty")
        return self._tree._arena.values[node]

    def last(self) -> T:
        node = self._last_node()
        if node == NIL:
            raise IndexError("View is empty")
        return self._tree._arena.values[node]

    def _first_or_none(self) -> Optional[T]:
        node = self._first_node()
        return None if node == NIL else self._tree._arena.values[node]

    def _last_or_none(self) -> Optional[T]:
        node = self._last_node()
        return None if node == NIL else self._tree._arena.values[node]

    # Each neighbor query first settles queries that fall outside the range
    # from the bounds alone, then descends the backing tree accepting only
    # in-range candidates.

    def lower(self, value: T) -> Optional[T]:
        if self.lower_bound is not None and value <= self.lower_bound.value:
            return None
        if self._above_range(value):
            return self._last_or_none()
        return self._tree._neighbor(value, True, False, self._valid)

    def higher(self, value: T) -> Optional[T]:
        if self.upper_bound is not None and value >= self.upper_bound.value:
            return None
        if self._below_range(value):
            return self._first_or_none()
        return self._tree._neighbor(value, False, False, self._valid)

    def floor(self, value: T) -> Optional[T]:
        if self._below_range(value):
            return None
        if self._above_range(value):
            return self._last_or_none()
        return self._tree._neighbor(value, True, True, self._valid)

    def ceiling(self, value: T) -> Optional[T]:
        if self._above_range(value):
            return None
        if self._below_range(value):
            return self._first_or_none()
        return self._tree._neighbor(value, False, True, self._valid)

    def iterator(self) -> MutableTreeIter[T]:
        return MutableTreeIter(self._tree, self.lower_bound, self.upper_bound)

    def __iter__(self) -> TreeIter[T]:
        return TreeIter(self._tree, self.lower_bound, self.upper_bound)

    def _view(self, lower: Optional[Bound], upper: Optional[Bound]) -> RangeView[T]:
        return RangeView(
            self._tree,
            tighter_lower(self.lower_bound, lower),
            tighter_upper(self.upper_bound, upper),
        )

    def check_invariant(self) -> bool:
        return self._tree.check_invariant()

    def __repr__(self) -> str:
        return "RangeView(lower={!r}, upper={!r})".format(
            self.lower_bound, self.upper_bound
        )

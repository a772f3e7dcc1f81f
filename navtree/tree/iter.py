from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, List, Optional, TypeVar

from .arena import NIL
from .bound import Bound, tighter_lower

if TYPE_CHECKING:
    from .base import Tree

T = TypeVar("T")


class TreeIter(Generic[T]):
    """Ascending in-order traversal of a tree, optionally clipped to bounds.

    Pending nodes sit on an explicit stack holding the left spine of the
    part of the tree not yet visited. Subtrees lying wholly below the lower
    bound are never pushed, and traversal ends at the first node past the
    upper bound.

    The traversal reads the live node graph. Mutating the tree while an
    iterator is outstanding (other than through `MutableTreeIter.remove`)
    leaves the iterator in an undefined state.
    """

    def __init__(
        self,
        tree: Tree[T],
        lower: Optional[Bound] = None,
        upper: Optional[Bound] = None,
    ):
        self._tree: Tree[T] = tree
        self._lower: Optional[Bound] = lower
        self._upper: Optional[Bound] = upper
        self._stack: List[int] = []

        self._push_spine(tree._root)

    def _push_spine(self, node: int):
        arena = self._tree._arena
        lower = self._lower

        while node != NIL:
            if lower is not None and not lower.admits_above(arena.values[node]):
                # This node and its whole left subtree are below the range.
                node = int(arena.right[node])
            else:
                self._stack.append(node)
                node = int(arena.left[node])

    def __iter__(self) -> TreeIter[T]:
        return self

    def __next__(self) -> T:
        if len(self._stack) == 0:
            raise StopIteration()

        arena = self._tree._arena
        node = self._stack.pop()
        value = arena.values[node]

        if self._upper is not None and not self._upper.admits_below(value):
            self._stack.clear()
            raise StopIteration()

        self._push_spine(int(arena.right[node]))
        return value


class MutableTreeIter(TreeIter[T]):
    """A `TreeIter` that can also delete the element it last produced."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._last: Any = None
        self._can_remove: bool = False

    def __next__(self) -> T:
        value = super().__next__()
        self._last = value
        self._can_remove = True
        return value

    def remove(self):
        """Delete the most recently produced element from the tree.

        Traversal resumes with the smallest remaining element greater than
        the removed one.
        """
        if not self._can_remove:
            raise RuntimeError("remove() called without a preceding next()")

        self._can_remove = False
        self._tree.remove(self._last)

        self._stack.clear()
        self._lower = tighter_lower(self._lower, Bound(self._last, False))
        self._push_spine(self._tree._root)

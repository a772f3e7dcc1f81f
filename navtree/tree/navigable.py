from __future__ import annotations

from abc import abstractmethod
from collections.abc import MutableSet
from typing import Generic, Iterator, Optional, TypeVar

from .bound import Bound

T = TypeVar("T")


class NavigableSet(Generic[T], MutableSet):
    """An ordered set supporting neighbor queries and live range views.

    Subclasses provide the primitive operations; the polling, range and
    `collections.abc` plumbing is shared. Unlike `set.remove`, `remove`
    reports a missing element by returning False instead of raising.
    """

    @abstractmethod
    def add(self, value: T) -> bool:
        """Insert `value` if absent. Returns whether the set changed."""

    @abstractmethod
    def remove(self, value: T) -> bool:
        """Delete `value` if present. Returns whether the set changed."""

    @abstractmethod
    def contains(self, value: T) -> bool:
        pass

    @abstractmethod
    def size(self) -> int:
        pass

    @abstractmethod
    def first(self) -> T:
        """The smallest element. Raises IndexError if there is none."""

    @abstractmethod
    def last(self) -> T:
        """The largest element. Raises IndexError if there is none."""

    @abstractmethod
    def lower(self, value: T) -> Optional[T]:
        """The largest element strictly less than `value`, if any."""

    @abstractmethod
    def higher(self, value: T) -> Optional[T]:
        """The smallest element strictly greater than `value`, if any."""

    @abstractmethod
    def floor(self, value: T) -> Optional[T]:
        """The largest element less than or equal to `value`, if any."""

    @abstractmethod
    def ceiling(self, value: T) -> Optional[T]:
        """The smallest element greater than or equal to `value`, if any."""

    @abstractmethod
    def iterator(self):
        """A fresh ascending iterator that also supports `remove()`."""

    @abstractmethod
    def check_invariant(self) -> bool:
        pass

    @abstractmethod
    def _view(
        self, lower: Optional[Bound], upper: Optional[Bound]
    ) -> NavigableSet[T]:
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[T]:
        pass

    def is_empty(self) -> bool:
        return self.size() == 0

    def poll_first(self) -> Optional[T]:
        """Remove and return the smallest element, or None if empty."""
        if self.is_empty():
            return None
        value = self.first()
        self.remove(value)
        return value

    def poll_last(self) -> Optional[T]:
        """Remove and return the largest element, or None if empty."""
        if self.is_empty():
            return None
        value = self.last()
        self.remove(value)
        return value

    def sub_set(
        self,
        from_value: T,
        to_value: T,
        from_inclusive: bool = True,
        to_inclusive: bool = False,
    ) -> NavigableSet[T]:
        """A live view of the elements between `from_value` and `to_value`."""
        if from_value > to_value:
            raise ValueError(
                "Range start {} is greater than range end {}".format(
                    from_value, to_value
                )
            )
        return self._view(
            Bound(from_value, from_inclusive), Bound(to_value, to_inclusive)
        )

    def head_set(self, to_value: T, inclusive: bool = False) -> NavigableSet[T]:
        """A live view of the elements below `to_value`."""
        return self._view(None, Bound(to_value, inclusive))

    def tail_set(self, from_value: T, inclusive: bool = True) -> NavigableSet[T]:
        """A live view of the elements above `from_value`."""
        return self._view(Bound(from_value, inclusive), None)

    def discard(self, value: T):
        self.remove(value)

    def __contains__(self, value) -> bool:
        return self.contains(value)

    def __len__(self) -> int:
        return self.size()

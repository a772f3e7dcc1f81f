from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

import numpy as np

T = TypeVar("T")

NIL = -1


class NodeArena(Generic[T]):
    """Node storage addressed by integer handles.

    Child, parent, height and liveness fields are kept in parallel numpy columns and
    element values in a plain list. A handle stays valid until it is
    released; released slots are reused by later allocations. `NIL` marks
    an absent link.
    """

    def __init__(self, capacity: int = 16):
        if capacity < 1:
            raise ValueError("Arena capacity must be positive")

        self.values: List[Optional[T]] = [None] * capacity
        self.left: np.ndarray = np.full(capacity, NIL, dtype=np.int64)
        self.right: np.ndarray = np.full(capacity, NIL, dtype=np.int64)
        self.parent: np.ndarray = np.full(capacity, NIL, dtype=np.int64)
        self.height: np.ndarray = np.zeros(capacity, dtype=np.int64)
        self.live: np.ndarray = np.zeros(capacity, dtype=bool)

        # Popped from the end, so lower slots are handed out first.
        self._free: List[int] = list(range(capacity - 1, -1, -1))
        self._n_live: int = 0

    @property
    def capacity(self) -> int:
        return len(self.values)

    def __len__(self) -> int:
        return self._n_live

    def _grow(self):
        old = self.capacity
        new = old * 2

        self.values.extend([None] * (new - old))
        self.left = np.concatenate([self.left, np.full(old, NIL, dtype=np.int64)])
        self.right = np.concatenate([self.right, np.full(old, NIL, dtype=np.int64)])
        self.parent = np.concatenate(
            [self.parent, np.full(old, NIL, dtype=np.int64)]
        )
        self.height = np.concatenate([self.height, np.zeros(old, dtype=np.int64)])
        self.live = np.concatenate([self.live, np.zeros(old, dtype=bool)])
        self._free.extend(range(new - 1, old - 1, -1))

    def alloc(self, value: T) -> int:
        """Create a detached leaf holding `value` and return its handle."""
        if len(self._free) == 0:
            self._grow()

        idx = self._free.pop()
        self.values[idx] = value
        self.left[idx] = NIL
        self.right[idx] = NIL
        self.parent[idx] = NIL
        self.height[idx] = 1
        self.live[idx] = True
        self._n_live += 1
        return idx

    def release(self, idx: int):
        assert self.live[idx], "double release of arena slot " + str(idx)
        self.live[idx] = False
        self.values[idx] = None
        self.left[idx] = NIL
        self.right[idx] = NIL
        self.parent[idx] = NIL
        self.height[idx] = 0
        self._free.append(idx)
        self._n_live -= 1

    def height_of(self, idx: int) -> int:
        if idx == NIL:
            return 0
        return int(self.height[idx])

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy.random import default_rng

from .tree import AVLTree

logger = logging.getLogger(__name__)

ADD = "add"
REMOVE = "remove"

Op = Tuple[str, int]


def random_workload(
    n_ops: int = 10000,
    key_range: int = 1000,
    add_ratio: float = 0.6,
    seed: Optional[int] = None,
) -> List[Op]:
    """Draw a sequence of `(op, key)` pairs with keys in `[0, key_range)`."""
    if not (0 <= add_ratio <= 1):
        raise ValueError("add_ratio must lie in [0, 1]")

    rng = default_rng(seed)
    keys = rng.integers(0, key_range, size=n_ops)
    adds = rng.random(n_ops) < add_ratio

    return [(ADD if a else REMOVE, int(k)) for a, k in zip(adds, keys)]


def replay(tree: AVLTree, ops: Sequence[Op]) -> Tuple[np.ndarray, np.ndarray]:
    """Apply `ops` to `tree`, recording its height and size after each one."""
    heights = np.zeros(len(ops), dtype=np.int64)
    sizes = np.zeros(len(ops), dtype=np.int64)

    for i, (op, key) in enumerate(ops):
        if op == ADD:
            tree.add(key)
        elif op == REMOVE:
            tree.remove(key)
        else:
            raise ValueError("Unknown workload operation: " + str(op))

        heights[i] = tree.height()
        sizes[i] = len(tree)

    return heights, sizes


def avl_height_bound(sizes) -> np.ndarray:
    """Upper bound on the height of an AVL tree holding `sizes` elements."""
    sizes = np.asarray(sizes, dtype=np.float64)
    return 1.4405 * np.log2(sizes + 2) - 0.3277


def main(n_ops: int = 100000, key_range: int = 10000, seed: Optional[int] = None):
    logging.basicConfig(level=logging.INFO)

    tree: AVLTree[int] = AVLTree()
    heights, sizes = replay(tree, random_workload(n_ops, key_range, seed=seed))
    slack = avl_height_bound(sizes) - heights

    logger.info(
        "%d ops: final size %d, max height %d, min slack to AVL bound %.3f",
        n_ops,
        len(tree),
        int(heights.max(initial=0)),
        float(slack.min(initial=np.inf)),
    )
    assert tree.check_invariant(), "tree invariant violated after workload"


if __name__ == "__main__":
    main()

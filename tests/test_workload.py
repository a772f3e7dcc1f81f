from hypothesis import given, settings, strategies as st
import logging
import numpy as np
import pytest

from navtree.tree.avl import AVLTree
from navtree.workload import (
    ADD,
    REMOVE,
    avl_height_bound,
    main,
    random_workload,
    replay,
)


def test_random_workload_is_seeded():
    ops = random_workload(500, 100, seed=1234)

    assert len(ops) == 500
    assert ops == random_workload(500, 100, seed=1234)
    assert all(op in (ADD, REMOVE) for op, _ in ops)
    assert all(0 <= k < 100 for _, k in ops)


def test_random_workload_ratio():
    assert all(op == ADD for op, _ in random_workload(100, 10, add_ratio=1, seed=0))
    assert all(op == REMOVE for op, _ in random_workload(100, 10, add_ratio=0, seed=0))

    with pytest.raises(ValueError):
        random_workload(10, 10, add_ratio=1.5)


@settings(max_examples=25, deadline=None)
@given(
    st.integers(min_value=0, max_value=2000),
    st.integers(min_value=1, max_value=500),
    st.integers(min_value=0, max_value=2**32 - 1),
)
def test_replay_stays_within_height_bound(n_ops, key_range, seed):
    ops = random_workload(n_ops, key_range, seed=seed)
    tree = AVLTree()

    heights, sizes = replay(tree, ops)

    model = set()
    expected_sizes = []
    for op, k in ops:
        if op == ADD:
            model.add(k)
        else:
            model.discard(k)
        expected_sizes.append(len(model))

    assert np.array_equal(sizes, np.array(expected_sizes, dtype=np.int64))
    assert np.all(heights <= avl_height_bound(sizes))
    assert list(tree) == sorted(model)
    assert tree.check_invariant()


def test_height_bound_small_trees():
    bound = avl_height_bound([0, 1, 2, 4, 7, 12])
    # heights of the sparsest AVL trees of those sizes
    assert np.all(np.array([0, 1, 2, 3, 4, 5]) <= bound)


def test_replay_rejects_unknown_op():
    with pytest.raises(ValueError):
        replay(AVLTree(), [(ADD, 1), ("pop", 1)])


def test_main_logs_summary(caplog):
    with caplog.at_level(logging.INFO, logger="navtree.workload"):
        main(n_ops=2000, key_range=300, seed=7)

    assert "final size" in caplog.text

from .bound import Bound
from .navigable import NavigableSet
from .base import Tree
from .avl import AVLTree
from .view import RangeView
from .iter import TreeIter, MutableTreeIter

__all__ = [
    "Bound",
    "NavigableSet",
    "Tree",
    "AVLTree",
    "RangeView",
    "TreeIter",
    "MutableTreeIter",
]

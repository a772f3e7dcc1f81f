from . import tree
from . import workload

from .tree import AVLTree, Tree, RangeView, NavigableSet

__all__ = [
    "AVLTree",
    "Tree",
    "RangeView",
    "NavigableSet",
]

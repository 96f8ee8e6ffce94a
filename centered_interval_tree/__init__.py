"""
Centered interval tree: a static in-memory index answering
"which intervals contain this point?" and "which intervals overlap this range?".
"""

from .accessors import Interval, attribute_accessors, key_accessors
from .errors import EmptyInputError, IntervalTreeError, InvalidRangeError, InvariantViolationError
from .node import IntervalTreeNode
from .tree import IntervalTree

__all__ = [
    'IntervalTree',
    'IntervalTreeNode',
    'Interval',
    'attribute_accessors',
    'key_accessors',
    'IntervalTreeError',
    'EmptyInputError',
    'InvariantViolationError',
    'InvalidRangeError',
]

"""
Centered interval tree over a static collection of intervals.

The tree is built once from every interval it will ever hold and answers two
questions: which intervals contain a point, and which intervals overlap a
range. There is no insert or delete; to change the contents build a new tree.

Construction picks a centerpoint from the median-by-start interval, keeps the
intervals that straddle it in a node and sends the ones entirely to its left
or right into subtrees. The centerpoint comes from a single interval's span,
so depth is logarithmic on well spread input but not guaranteed on adversarial
input.
"""

import numbers
from typing import Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

from .accessors import interval_end, interval_start
from .errors import EmptyInputError, InvalidRangeError, InvariantViolationError
from .logging_config import get_logger
from .node import IntervalTreeNode
from .overlap import end_admits, overlaps_range, start_admits

logger = get_logger(__name__)

T = TypeVar("T")  # stored interval type
R = TypeVar("R")  # ordinal coordinate type


def centerpoint(start: R, end: R) -> R:
    """
    Halfway point of [start, end] in the coordinates' own arithmetic.

    Integers use floor division so the result stays an exact integer inside
    the span; everything else (float, Decimal, Fraction, datetime) uses `/`.
    """
    if isinstance(start, numbers.Integral) and isinstance(end, numbers.Integral):
        return start + (end - start) // 2
    return start + (end - start) / 2


class IntervalTree(Generic[T, R]):
    """
    A static index answering point and range intersection queries.

    Intervals can be of any type; the tree reads their coordinates through
    `get_start` and `get_end`, which default to positions 0 and 1 so that
    ``(start, end)`` tuples and :class:`Interval` work as they are. Coordinates
    must be totally ordered and support ``+``, ``-`` and division by 2.

    The `open_ended` flag selects the endpoint-inclusion policy for the whole
    tree: closed (default) treats both ends as inclusive, open-ended treats an
    interval's end as exclusive.

    Example:
        >>> tree = IntervalTree([(10, 20), (40, 75), (78, 85)])
        >>> tree.intersecting_point(75)
        [(40, 75)]
        >>> sorted(tree.intersecting_interval(15, 80))
        [(10, 20), (40, 75), (78, 85)]
        >>> len(tree)
        3

    Methods:
        intersecting_point(point): Intervals containing a point
        intersecting_interval(start, end): Intervals overlapping a range
        squash(): All intervals, pre-order
        size(): Number of intervals
        depth(): Number of levels
        copy(): Independent copy sharing accessors and policy
        to_string(): Debug dump of every node
    """
    __slots__ = ("data", "left", "right", "get_start", "get_end", "open_ended")

    def __init__(
        self,
        intervals: Iterable[T],
        get_start: Optional[Callable[[T], R]] = None,
        get_end: Optional[Callable[[T], R]] = None,
        open_ended: bool = False,
    ):
        """
        Build the tree.

        Args:
            intervals: Non-empty collection of intervals, in any order
            get_start: Maps an interval to its start (default: ``item[0]``)
            get_end: Maps an interval to its end (default: ``item[1]``)
            open_ended: Treat interval ends as exclusive

        Raises:
            EmptyInputError: If `intervals` is empty
            InvariantViolationError: If the chosen centerpoint intersects nothing
        """
        self.get_start = get_start if get_start is not None else interval_start
        self.get_end = get_end if get_end is not None else interval_end
        self.open_ended = open_ended
        self.left: Optional["IntervalTree[T, R]"] = None
        self.right: Optional["IntervalTree[T, R]"] = None

        ordered = sorted(intervals, key=self.get_start)
        if not ordered:
            raise EmptyInputError("Interval tree constructor got empty set of intervals")

        pivot = ordered[len(ordered) // 2]
        pivot_start = self.get_start(pivot)
        mid = centerpoint(pivot_start, self.get_end(pivot))

        here: List[T] = []
        lt: List[T] = []
        rt: List[T] = []
        for interval in ordered:
            if self.get_end(interval) < mid:
                lt.append(interval)
            elif self.get_start(interval) > mid:
                rt.append(interval)
            else:
                here.append(interval)

        if not here:
            raise InvariantViolationError(
                f"picked mid point at {mid} but this failed to intersect anything"
            )
        logger.debug(
            f"Picked mid {mid} for {len(ordered)} intervals: "
            f"{len(lt)} left, {len(here)} here, {len(rt)} right"
        )

        if lt:
            self.left = IntervalTree(lt, self.get_start, self.get_end, open_ended)
        if rt:
            self.right = IntervalTree(rt, self.get_start, self.get_end, open_ended)
        self.data: IntervalTreeNode[T, R] = IntervalTreeNode(here, mid, self.get_start, self.get_end)

    # ----- queries -----

    def intersecting_point(self, point: R) -> List[T]:
        """
        Return every interval containing `point`, in no particular order.

        Args:
            point: The coordinate to test

        Returns:
            List of intervals with ``start <= point <= end`` (closed policy)
            or ``start <= point < end`` (open-ended policy)
        """
        result: List[T] = []
        self._intersecting_point(point, result)
        return result

    def _intersecting_point(self, point: R, result: List[T]) -> None:
        node = self.data
        if point > node.mid:
            # everything here starts at or before mid, so only the end can exclude it
            self._collect_ending_after(point, result)
            if self.right is not None:
                self.right._intersecting_point(point, result)
        elif point < node.mid:
            # everything here ends at or after mid, so only the start can exclude it
            for interval in node.by_start:
                if not start_admits(self.get_start(interval), point):
                    break
                result.append(interval)
            if self.left is not None:
                self.left._intersecting_point(point, result)
        elif self.open_ended:
            self._collect_ending_after(point, result)
        else:
            result.extend(node.by_end)

    def _collect_ending_after(self, point: R, result: List[T]) -> None:
        for interval in reversed(self.data.by_end):
            if not end_admits(self.get_end(interval), point, self.open_ended):
                break
            result.append(interval)

    def intersecting_interval(self, start: R, end: R) -> List[T]:
        """
        Return every interval overlapping the range [start, end], in no particular order.

        Args:
            start: Start of the query range
            end: End of the query range

        Returns:
            List of overlapping intervals. Under the open-ended policy intervals
            that only touch the range at a boundary are left out.

        Raises:
            InvalidRangeError: If start > end
        """
        if end < start:
            raise InvalidRangeError(f"Query range start {start} lies after its end {end}")
        result: List[T] = []
        self._intersecting_interval(start, end, result)
        return result

    def _intersecting_interval(self, start: R, end: R, result: List[T]) -> None:
        node = self.data
        for interval in node.by_start:
            if overlaps_range(self.get_start(interval), self.get_end(interval),
                              start, end, self.open_ended):
                result.append(interval)

        if self.left is not None and start <= node.mid:
            self.left._intersecting_interval(start, end, result)
        if self.right is not None and end >= node.mid:
            self.right._intersecting_interval(start, end, result)

    # ----- whole-tree utilities -----

    def squash(self) -> List[T]:
        """Return all intervals in the tree (node, then left, then right). Non-destructive."""
        result: List[T] = []

        def _preorder(t: IntervalTree[T, R]):
            result.extend(t.data.by_start)
            if t.left is not None:
                _preorder(t.left)
            if t.right is not None:
                _preorder(t.right)

        _preorder(self)
        return result

    def size(self) -> int:
        """Return the number of intervals. Walks the whole tree."""
        res = len(self.data)
        if self.left is not None:
            res += self.left.size()
        if self.right is not None:
            res += self.right.size()
        return res

    def depth(self) -> int:
        """Return the number of levels, 1 for a tree with a single node."""
        left = self.left.depth() if self.left is not None else 0
        right = self.right.depth() if self.right is not None else 0
        return 1 + max(left, right)

    def copy(self) -> "IntervalTree[T, R]":
        """
        Return an independent copy of the tree.

        Nodes and subtrees are new objects; the accessors, the policy flag and
        the stored interval objects are shared.
        """
        other = IntervalTree.__new__(IntervalTree)
        other.get_start = self.get_start
        other.get_end = self.get_end
        other.open_ended = self.open_ended
        other.data = self.data.copy()
        other.left = self.left.copy() if self.left is not None else None
        other.right = self.right.copy() if self.right is not None else None
        return other

    __copy__ = copy

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[T]:
        return iter(self.squash())

    def __eq__(self, other) -> bool:
        """Check if two trees have the same policy and the same structure."""
        if not isinstance(other, IntervalTree):
            return NotImplemented
        return (self.open_ended == other.open_ended
                and self.data == other.data
                and self.left == other.left
                and self.right == other.right)

    __hash__ = None

    def to_string(self) -> str:
        """Return a recursive dump of mid, by_start and by_end at every node."""
        left = self.left.to_string() if self.left is not None else "<EMPTY>"
        right = self.right.to_string() if self.right is not None else "<EMPTY>"
        return self.data.to_string() + "\n** left ** " + left + "\n** right ** " + right

    __str__ = to_string

    def __repr__(self) -> str:
        return f"IntervalTree(size={self.size()}, open_ended={self.open_ended})"

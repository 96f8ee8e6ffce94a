"""
Storage for the intervals that straddle one centerpoint.
"""

from typing import Callable, Generic, Iterable, Tuple, TypeVar

T = TypeVar("T")  # stored interval type
R = TypeVar("R")  # ordinal coordinate type


class IntervalTreeNode(Generic[T, R]):
    """
    The intervals assigned to one centerpoint, kept sorted twice.

    Every interval in a node satisfies ``start <= mid <= end``. ``by_start``
    is ascending by start and ``by_end`` ascending by end; both hold the same
    intervals. Sorting is stable, so ties keep their input order.
    """
    __slots__ = ("mid", "by_start", "by_end", "get_start", "get_end")

    def __init__(
        self,
        intervals: Iterable[T],
        mid: R,
        get_start: Callable[[T], R],
        get_end: Callable[[T], R],
    ):
        self.mid = mid
        self.get_start = get_start
        self.get_end = get_end
        intervals = list(intervals)
        self.by_start: Tuple[T, ...] = tuple(sorted(intervals, key=get_start))
        self.by_end: Tuple[T, ...] = tuple(sorted(intervals, key=get_end))

    def __len__(self) -> int:
        return len(self.by_start)

    def copy(self) -> "IntervalTreeNode[T, R]":
        """Return a new node holding the same intervals and accessors."""
        other = IntervalTreeNode.__new__(IntervalTreeNode)
        other.mid = self.mid
        other.get_start = self.get_start
        other.get_end = self.get_end
        other.by_start = self.by_start
        other.by_end = self.by_end
        return other

    def __eq__(self, other) -> bool:
        if not isinstance(other, IntervalTreeNode):
            return NotImplemented
        return (self.mid == other.mid
                and self.by_start == other.by_start
                and self.by_end == other.by_end)

    __hash__ = None

    def _format(self, interval: T) -> str:
        return f"({self.get_start(interval)} - {self.get_end(interval)})"

    def to_string(self) -> str:
        lines = [f"mid: {self.mid}", "intervals sorted by start:"]
        lines.extend(self._format(interval) for interval in self.by_start)
        lines.append("intervals sorted by end:")
        lines.extend(self._format(interval) for interval in self.by_end)
        return "\n".join(lines) + "\n"

    __str__ = to_string

    def __repr__(self) -> str:
        return f"IntervalTreeNode(mid={self.mid!r}, intervals={list(self.by_start)!r})"

"""
Accessor functions that map a stored interval to its start and end.

An IntervalTree never looks inside the objects it indexes; it only calls the
two accessors it was built with. The defaults read positions 0 and 1, which
covers plain ``(start, end)`` tuples as well as :class:`Interval`.
"""

from operator import attrgetter, itemgetter
from typing import Any, Callable, NamedTuple, Tuple


class Interval(NamedTuple):
    """A closed interval with an optional payload."""
    start: Any
    end: Any
    data: Any = None


interval_start = itemgetter(0)
interval_end = itemgetter(1)


def attribute_accessors(start_attr: str = "start", end_attr: str = "end") -> Tuple[Callable, Callable]:
    """Return (get_start, get_end) reading the given attributes of an object."""
    return attrgetter(start_attr), attrgetter(end_attr)


def key_accessors(start_key: Any = "start", end_key: Any = "end") -> Tuple[Callable, Callable]:
    """Return (get_start, get_end) reading the given keys of a mapping."""
    return itemgetter(start_key), itemgetter(end_key)

"""
Endpoint-inclusion policy shared by the tree traversals and the brute-force scans.

With the closed policy both endpoints of an interval are inclusive. With the
open-ended policy an interval's end is exclusive: point queries match
``start <= point < end`` and range queries no longer count intervals that
merely touch the query at a boundary.
"""


def start_admits(start, point) -> bool:
    """An interval starting at `start` does not begin after `point` (both policies)."""
    return start <= point


def end_admits(end, point, open_ended: bool = False) -> bool:
    """An interval ending at `end` has not finished before `point`."""
    if open_ended:
        return end > point
    return end >= point


def contains_point(start, end, point, open_ended: bool = False) -> bool:
    """Check whether the interval [start, end] contains `point`."""
    return start_admits(start, point) and end_admits(end, point, open_ended)


def overlaps_range(i_start, i_end, start, end, open_ended: bool = False) -> bool:
    """
    Four-way overlap test between an interval and the query range [start, end].

    The interval overlaps if its start or end falls inside the query, or the
    query's start or end falls inside the interval.
    """
    if open_ended:
        return ((start <= i_start < end)
                or (start < i_end <= end)
                or (i_start <= start < i_end)
                or (i_start < end <= i_end))
    return ((start <= i_start <= end)
            or (start <= i_end <= end)
            or (i_start <= start <= i_end)
            or (i_start <= end <= i_end))

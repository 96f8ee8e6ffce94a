"""Exceptions raised by the interval tree."""


class IntervalTreeError(Exception):
    """Base class for all interval tree errors."""


class EmptyInputError(IntervalTreeError, ValueError):
    """Raised when a tree is constructed from an empty collection of intervals."""


class InvariantViolationError(IntervalTreeError, RuntimeError):
    """
    Raised when the chosen centerpoint does not intersect any interval.

    The centerpoint is taken from the span of one of the input intervals, so
    this can only happen if the partitioning itself is broken. It is never
    part of normal control flow.
    """


class InvalidRangeError(IntervalTreeError, ValueError):
    """Raised when a range query is given a start that lies after its end."""

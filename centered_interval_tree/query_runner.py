"""
Config-driven batch queries and benchmarking against the brute-force scan.

Query mode builds one tree from the configured intervals and answers every
configured point and range query. Benchmark mode builds a tree from the
configured intervals, fires random queries at it and optionally checks every
answer against a linear scan.

Usage:
    interval-tree-query --config queries.yaml
    interval-tree-query --config queries.yaml --mode benchmark --benchmark.num_queries 10000
"""

import numbers
import time
from collections import Counter
from typing import Any, Dict, List

import numpy as np
from tqdm import tqdm

from .accessors import Interval
from .flexible_config import FlexibleConfig
from .logging_config import get_logger
from .script_utils import (
    brute_force_interval,
    brute_force_point,
    interval_to_record,
    load_intervals,
    random_intervals,
    record_to_interval,
    save_jsonl,
)
from .tree import IntervalTree

logger = get_logger(__name__)


def intervals_from_config(config: FlexibleConfig) -> List[Interval]:
    """
    Collect the intervals named in the ``intervals`` section.

    Exactly one of ``intervals.path``, ``intervals.inline`` and
    ``intervals.random`` must be given.
    """
    sources = [key for key in ("path", "inline", "random") if config.has(f"intervals.{key}")]
    if len(sources) != 1:
        raise ValueError(
            f"Config must set exactly one of intervals.path, intervals.inline, "
            f"intervals.random (got {sources or 'none'})"
        )

    source = sources[0]
    if source == "path":
        return load_intervals(config.get("intervals.path"))
    if source == "inline":
        return [record_to_interval(record) for record in config.get("intervals.inline")]

    random_config = config.get("intervals.random") or {}
    rng = np.random.default_rng(random_config.get("seed"))
    intervals = random_intervals(
        count=random_config.get("count", 1000),
        low=random_config.get("low", 0),
        high=random_config.get("high", 100_000),
        max_length=random_config.get("max_length", 1_000),
        rng=rng,
    )
    logger.info(f"Generated {len(intervals)} random intervals")
    return intervals


def build_tree(config: FlexibleConfig) -> IntervalTree:
    """Build the tree described by the ``intervals`` and ``tree`` sections."""
    intervals = intervals_from_config(config)
    return IntervalTree(intervals, open_ended=bool(config.get("tree.open_ended", False)))


def _sorted_records(intervals) -> List[Dict[str, Any]]:
    return [interval_to_record(iv) for iv in sorted(intervals, key=lambda iv: (iv.start, iv.end))]


def _coordinate(value, query: str):
    """Return value if it is a usable query coordinate (a real number), else raise ValueError."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{query} needs numeric coordinates, got {value!r}")
    return value


def run_queries(config: FlexibleConfig) -> List[Dict[str, Any]]:
    """
    Answer every query in the ``queries`` section.

    Returns:
        One record per query, points first, then ranges. If ``output`` is set
        the records are also written there as JSONL.
    """
    tree = build_tree(config)
    logger.info(f"Built {tree!r} with depth {tree.depth()}")

    points = config.get("queries.points", []) or []
    ranges = config.get("queries.ranges", []) or []
    if not points and not ranges:
        logger.warning("No queries configured (queries.points / queries.ranges)")

    results = []
    for point in points:
        point = _coordinate(point, f"Point query {point!r}")
        matches = tree.intersecting_point(point)
        results.append({"query": "point", "point": point, "matches": _sorted_records(matches)})
        logger.debug(f"point {point}: {len(matches)} matches")

    for query_range in ranges:
        if not isinstance(query_range, (list, tuple)) or len(query_range) != 2:
            raise ValueError(f"Range query must be [start, end], got {query_range!r}")
        start, end = (_coordinate(value, f"Range query {query_range!r}") for value in query_range)
        matches = tree.intersecting_interval(start, end)
        results.append({"query": "range", "start": start, "end": end, "matches": _sorted_records(matches)})
        logger.debug(f"range [{start}, {end}]: {len(matches)} matches")

    output = config.get("output")
    if output:
        save_jsonl(results, output)
        logger.info(f"Wrote {len(results)} query results to {output}")

    return results


def _same_intervals(found, expected) -> bool:
    """Compare two query answers as multisets of the very same interval objects."""
    return Counter(map(id, found)) == Counter(map(id, expected))


def _random_coordinates(rng: np.random.Generator, lo, hi, size) -> np.ndarray:
    if isinstance(lo, (int, np.integer)) and isinstance(hi, (int, np.integer)):
        return rng.integers(lo, hi, size=size, endpoint=True)
    return rng.uniform(lo, hi, size=size)


def run_benchmark(config: FlexibleConfig) -> Dict[str, Any]:
    """
    Time construction and random queries, optionally verifying every answer.

    Returns:
        Summary with size, depth, build_seconds, point_seconds,
        range_seconds, num_queries and mismatches
    """
    intervals = intervals_from_config(config)
    open_ended = bool(config.get("tree.open_ended", False))
    num_queries = int(config.get("benchmark.num_queries", 1000))
    verify = bool(config.get("benchmark.verify", True))
    progress = bool(config.get("benchmark.progress", True))
    rng = np.random.default_rng(config.get("benchmark.seed"))

    t0 = time.perf_counter()
    tree = IntervalTree(intervals, open_ended=open_ended)
    build_seconds = time.perf_counter() - t0

    lo = min(iv.start for iv in intervals)
    hi = max(iv.end for iv in intervals)
    points = _random_coordinates(rng, lo, hi, num_queries).tolist()
    bounds = np.sort(_random_coordinates(rng, lo, hi, (num_queries, 2)), axis=1)
    ranges = [(s, e) for s, e in bounds.tolist()]

    mismatches = 0
    point_seconds = 0.0
    for point in tqdm(points, desc="Point queries", disable=not progress):
        t0 = time.perf_counter()
        found = tree.intersecting_point(point)
        point_seconds += time.perf_counter() - t0
        if verify and not _same_intervals(found, brute_force_point(intervals, point, open_ended)):
            mismatches += 1
            logger.error(f"Point query {point} disagrees with brute-force scan")

    range_seconds = 0.0
    for start, end in tqdm(ranges, desc="Range queries", disable=not progress):
        t0 = time.perf_counter()
        found = tree.intersecting_interval(start, end)
        range_seconds += time.perf_counter() - t0
        if verify and not _same_intervals(found, brute_force_interval(intervals, start, end, open_ended)):
            mismatches += 1
            logger.error(f"Range query [{start}, {end}] disagrees with brute-force scan")

    summary = {
        "size": tree.size(),
        "depth": tree.depth(),
        "build_seconds": build_seconds,
        "point_seconds": point_seconds,
        "range_seconds": range_seconds,
        "num_queries": num_queries,
        "mismatches": mismatches,
    }
    logger.info(
        f"Built tree of {summary['size']} intervals (depth {summary['depth']}) in {build_seconds:.4f}s; "
        f"{num_queries} point queries in {point_seconds:.4f}s, "
        f"{num_queries} range queries in {range_seconds:.4f}s"
    )
    if verify:
        logger.info(f"Verification against brute-force scan: {mismatches} mismatches")
    return summary

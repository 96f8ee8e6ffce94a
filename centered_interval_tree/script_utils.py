import json
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional

import numpy as np
import yaml

from .accessors import Interval, interval_end, interval_start
from .logging_config import get_logger
from .overlap import contains_point, overlaps_range

logger = get_logger(__name__)


def load_jsonl(filepath):
    """
    Load a JSONL (JSON Lines) file into a list of records.

    Args:
        filepath (str): Path to the JSONL file

    Returns:
        list: One decoded JSON value per non-empty line
    """
    data = []
    with open(filepath, 'r', encoding='utf-8') as file:
        for line in file:
            line = line.strip()
            if line:
                data.append(json.loads(line))
    return data


def save_jsonl(data, filepath):
    """
    Save a list of records to a JSONL (JSON Lines) file.

    Args:
        data (list): JSON-serializable records
        filepath (str): Path to the output JSONL file
    """
    with open(filepath, 'w', encoding='utf-8') as file:
        for item in data:
            json.dump(item, file)
            file.write('\n')


def record_to_interval(record) -> Interval:
    """
    Convert a decoded record into an Interval.

    Accepts ``[start, end]``, ``[start, end, data]`` or a mapping with
    ``start`` and ``end`` keys; a mapping's other keys become the payload.

    Raises:
        ValueError: If the record has no start/end or start > end
    """
    if isinstance(record, dict):
        if "start" not in record or "end" not in record:
            raise ValueError(f"Interval record needs 'start' and 'end': {record}")
        extra = {k: v for k, v in record.items() if k not in ("start", "end")}
        if set(extra) == {"data"}:
            extra = extra["data"]
        interval = Interval(record["start"], record["end"], extra or None)
    elif isinstance(record, (list, tuple)) and len(record) in (2, 3):
        interval = Interval(*record)
    else:
        raise ValueError(f"Cannot interpret interval record: {record!r}")

    if interval.end < interval.start:
        raise ValueError(f"Interval must satisfy start <= end, got {record!r}")
    return interval


def interval_to_record(interval: Interval) -> dict:
    """Convert an Interval to a JSON-friendly dict, leaving out an empty payload."""
    record = {"start": interval.start, "end": interval.end}
    if interval.data is not None:
        record["data"] = interval.data
    return record


def load_intervals(filepath) -> List[Interval]:
    """
    Load intervals from a .jsonl, .yaml or .yml file.

    A YAML file holds either a list of records or a mapping with an
    ``intervals`` list.
    """
    path = Path(filepath)
    suffix = path.suffix.lower()
    if suffix == ".jsonl":
        records = load_jsonl(path)
    elif suffix in (".yaml", ".yml"):
        with open(path, 'r', encoding='utf-8') as f:
            records = yaml.safe_load(f) or []
        if isinstance(records, dict):
            records = records.get("intervals", [])
    else:
        raise ValueError(f"Unsupported interval file type '{suffix}' for {path}")

    intervals = [record_to_interval(record) for record in records]
    logger.info(f"Loaded {len(intervals)} intervals from {path}")
    return intervals


def random_intervals(
    count: int,
    low: int = 0,
    high: int = 100_000,
    max_length: int = 1_000,
    rng: Optional[np.random.Generator] = None,
) -> List[Interval]:
    """
    Draw `count` random integer intervals.

    Starts are uniform in [low, high), lengths uniform in [0, max_length].

    Args:
        count: Number of intervals
        low: Smallest possible start
        high: Upper bound (exclusive) for starts
        max_length: Largest possible end - start
        rng: Random number generator (created if not provided)

    Returns:
        List of Interval with Python int coordinates
    """
    if high <= low:
        raise ValueError(f"Invalid range for random intervals: low={low}, high={high}")
    if max_length < 0:
        raise ValueError(f"max_length must be non-negative, got {max_length}")
    if rng is None:
        rng = np.random.default_rng()

    starts = rng.integers(low, high, size=count)
    lengths = rng.integers(0, max_length, size=count, endpoint=True)
    return [Interval(int(s), int(s + n)) for s, n in zip(starts, lengths)]


def brute_force_point(
    intervals: Iterable[Any],
    point,
    open_ended: bool = False,
    get_start: Callable = interval_start,
    get_end: Callable = interval_end,
) -> list:
    """Reference point query: test every interval independently."""
    return [iv for iv in intervals
            if contains_point(get_start(iv), get_end(iv), point, open_ended)]


def brute_force_interval(
    intervals: Iterable[Any],
    start,
    end,
    open_ended: bool = False,
    get_start: Callable = interval_start,
    get_end: Callable = interval_end,
) -> list:
    """Reference range query: test every interval independently."""
    return [iv for iv in intervals
            if overlaps_range(get_start(iv), get_end(iv), start, end, open_ended)]

"""
Tests for interval loading, random generation and the brute-force scans.
"""

import json

import numpy as np
import pytest
import yaml

from centered_interval_tree.accessors import Interval
from centered_interval_tree.script_utils import (
    brute_force_interval,
    brute_force_point,
    interval_to_record,
    load_intervals,
    load_jsonl,
    random_intervals,
    record_to_interval,
    save_jsonl,
)


class TestRecordConversion:
    """Test conversion between decoded records and Interval."""

    def test_list_record(self):
        assert record_to_interval([1, 5]) == Interval(1, 5)
        assert record_to_interval([1, 5, "gene"]) == Interval(1, 5, "gene")

    def test_dict_record_with_extra_fields(self):
        interval = record_to_interval({"start": 1, "end": 5, "name": "a", "score": 3})
        assert interval == Interval(1, 5, {"name": "a", "score": 3})

    def test_dict_record_with_data_field(self):
        assert record_to_interval({"start": 1, "end": 5, "data": "x"}) == Interval(1, 5, "x")

    def test_reversed_record_rejected(self):
        with pytest.raises(ValueError, match="start <= end"):
            record_to_interval([5, 1])

    def test_missing_field_rejected(self):
        with pytest.raises(ValueError):
            record_to_interval({"start": 1})

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            record_to_interval("1-5")

    def test_interval_to_record(self):
        assert interval_to_record(Interval(1, 5)) == {"start": 1, "end": 5}
        assert interval_to_record(Interval(1, 5, "x")) == {"start": 1, "end": 5, "data": "x"}


class TestLoadIntervals:
    """Test reading interval files."""

    def test_jsonl_roundtrip_helpers(self, tmp_path):
        path = tmp_path / "data.jsonl"
        save_jsonl([{"a": 1}, [2, 3]], path)
        assert load_jsonl(path) == [{"a": 1}, [2, 3]]

    def test_load_jsonl_intervals(self, tmp_path):
        path = tmp_path / "intervals.jsonl"
        path.write_text(json.dumps([10, 20]) + "\n\n" + json.dumps({"start": 40, "end": 75}) + "\n")

        assert load_intervals(path) == [Interval(10, 20), Interval(40, 75)]

    def test_load_yaml_list(self, tmp_path):
        path = tmp_path / "intervals.yaml"
        path.write_text(yaml.safe_dump([[1, 2], [3, 4]]))

        assert load_intervals(path) == [Interval(1, 2), Interval(3, 4)]

    def test_load_yaml_mapping(self, tmp_path):
        path = tmp_path / "intervals.yml"
        path.write_text(yaml.safe_dump({"intervals": [{"start": 1, "end": 2}]}))

        assert load_intervals(path) == [Interval(1, 2)]

    def test_unknown_suffix(self, tmp_path):
        path = tmp_path / "intervals.csv"
        path.write_text("1,2\n")
        with pytest.raises(ValueError, match="Unsupported"):
            load_intervals(path)


class TestRandomIntervals:
    """Test numpy-based interval generation."""

    def test_bounds(self):
        intervals = random_intervals(500, low=10, high=50, max_length=7, rng=np.random.default_rng(0))

        assert len(intervals) == 500
        assert all(10 <= iv.start < 50 for iv in intervals)
        assert all(0 <= iv.end - iv.start <= 7 for iv in intervals)
        assert all(type(iv.start) is int and type(iv.end) is int for iv in intervals)

    def test_seeded_generation_is_reproducible(self):
        a = random_intervals(20, rng=np.random.default_rng(7))
        b = random_intervals(20, rng=np.random.default_rng(7))
        assert a == b

    def test_zero_length(self):
        intervals = random_intervals(10, max_length=0, rng=np.random.default_rng(0))
        assert all(iv.start == iv.end for iv in intervals)

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            random_intervals(5, low=10, high=10)


class TestBruteForce:
    """Test the reference scans."""

    def test_point(self, disjoint_intervals):
        assert brute_force_point(disjoint_intervals, 75) == [Interval(40, 75)]
        assert brute_force_point(disjoint_intervals, 75, open_ended=True) == []

    def test_interval(self, disjoint_intervals):
        assert brute_force_interval(disjoint_intervals, 20, 40) == [Interval(10, 20), Interval(40, 75)]
        assert brute_force_interval(disjoint_intervals, 20, 40, open_ended=True) == []

"""Unit tests for loading suites in suite.py."""

import json
import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from suite import Statistics, load_suite, statistics_from_dict, suite_from_dict


def make_suite_dict():
    return {
        "scenarios": [
            {
                "name": "flat_map",
                "input_name": "big list",
                "run_time_statistics": {
                    "average": 2.5e6,
                    "ips": 400.0,
                    "std_dev": 1e5,
                    "std_dev_ratio": 0.04,
                    "median": 2.4e6,
                    "minimum": 2e6,
                    "maximum": 3e6,
                    "sample_size": 3,
                    "percentiles": {"50": 2.4e6, "99": 3e6},
                },
                "run_times": [2e6, 2.4e6, 3e6],
                "memory_usage_statistics": {
                    "average": 2048,
                    "minimum": 2048,
                    "maximum": 2048,
                    "sample_size": 1,
                },
            },
            {
                "name": "map.flatten",
                "run_time_statistics": {"average": 3e6, "minimum": 3e6, "maximum": 3e6, "sample_size": 1},
            },
        ],
        "system": {"os": "Linux", "num_cores": 8, "unknown_key": "ignored"},
        "configuration": {"file": "out/report.html", "auto_open": False},
    }


def test_suite_from_dict_builds_records():
    suite = suite_from_dict(make_suite_dict())
    first, second = suite.scenarios
    assert first.name == "flat_map"
    assert first.input_name == "big list"
    assert first.run_time_statistics.percentiles == {50: 2.4e6, 99: 3e6}
    assert first.run_times == [2e6, 2.4e6, 3e6]
    assert first.memory_usage_statistics.average == 2048
    assert second.input_name is None
    assert second.memory_usage_statistics is None
    assert second.run_times == []
    assert suite.system.os == "Linux"
    assert suite.system.num_cores == 8
    assert suite.configuration.file == "out/report.html"
    assert suite.configuration.auto_open is False
    assert suite.configuration.inline_assets is None


def test_missing_required_statistic_is_fatal():
    with pytest.raises(KeyError):
        statistics_from_dict({"minimum": 1, "maximum": 2, "sample_size": 1})


def test_statistics_to_dict_uses_string_percentile_keys():
    stats = Statistics(average=1.0, minimum=1.0, maximum=1.0, sample_size=1, percentiles={99: 1.0})
    data = stats.to_dict()
    assert data["percentiles"] == {"99": 1.0}
    assert data["mode"] is None


def test_load_suite_reads_json_file(tmp_path):
    p = tmp_path / "suite.json"
    p.write_text(json.dumps(make_suite_dict()), encoding="utf-8")
    suite = load_suite(str(p))
    assert [s.name for s in suite.scenarios] == ["flat_map", "map.flatten"]

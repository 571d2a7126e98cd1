"""
Benchmark suite records consumed by the HTML formatter.

A suite is produced once by the benchmarking engine and never mutated here:
  - Scenario: one job run against one input (or no input at all)
  - Statistics: aggregate metrics for run times or memory usages
  - SystemInfo: environment metadata shown on every page
  - Configuration: formatter options (output file, auto open, assets, scaling)

Durations are nanoseconds, memory usages are bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from utils.io import load_json


@dataclass(frozen=True)
class Statistics:
    average: float
    minimum: float
    maximum: float
    sample_size: int
    ips: Optional[float] = None
    std_dev: float = 0.0
    std_dev_ratio: float = 0.0
    std_dev_ips: Optional[float] = None
    median: Optional[float] = None
    mode: Optional[float] = None
    percentiles: Dict[int, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        # percentile keys become strings, matching what a JSON round trip gives
        return {
            "average": self.average,
            "ips": self.ips,
            "std_dev": self.std_dev,
            "std_dev_ratio": self.std_dev_ratio,
            "std_dev_ips": self.std_dev_ips,
            "median": self.median,
            "mode": self.mode,
            "minimum": self.minimum,
            "maximum": self.maximum,
            "sample_size": self.sample_size,
            "percentiles": {str(k): v for k, v in self.percentiles.items()},
        }


@dataclass(frozen=True)
class Scenario:
    name: str
    run_time_statistics: Statistics
    run_times: List[float] = field(default_factory=list)
    input_name: Optional[str] = None  # None means the job ran without an input
    memory_usage_statistics: Optional[Statistics] = None
    memory_usages: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class SystemInfo:
    os: str = ""
    cpu_speed: str = ""
    num_cores: Optional[int] = None
    available_memory: str = ""
    python: str = ""
    tool_version: str = ""


@dataclass(frozen=True)
class Configuration:
    file: Optional[str] = None
    auto_open: Optional[bool] = None
    inline_assets: Optional[bool] = None
    unit_scaling: Optional[str] = None

    def formatter_options(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "auto_open": self.auto_open,
            "inline_assets": self.inline_assets,
            "unit_scaling": self.unit_scaling,
        }


@dataclass(frozen=True)
class Suite:
    scenarios: List[Scenario]
    system: SystemInfo = field(default_factory=SystemInfo)
    configuration: Configuration = field(default_factory=Configuration)


# ---------- Loading ----------

def statistics_from_dict(data: Dict[str, Any]) -> Statistics:
    """Build Statistics from a decoded JSON object.

    ``average``, ``minimum``, ``maximum`` and ``sample_size`` are required;
    a missing one raises KeyError.
    """
    percentiles = {int(k): float(v) for k, v in (data.get("percentiles") or {}).items()}
    return Statistics(
        average=float(data["average"]),
        minimum=float(data["minimum"]),
        maximum=float(data["maximum"]),
        sample_size=int(data["sample_size"]),
        ips=data.get("ips"),
        std_dev=float(data.get("std_dev") or 0.0),
        std_dev_ratio=float(data.get("std_dev_ratio") or 0.0),
        std_dev_ips=data.get("std_dev_ips"),
        median=data.get("median"),
        mode=data.get("mode"),
        percentiles=percentiles,
    )


def scenario_from_dict(data: Dict[str, Any]) -> Scenario:
    memory = data.get("memory_usage_statistics")
    return Scenario(
        name=str(data["name"]),
        input_name=data.get("input_name"),
        run_time_statistics=statistics_from_dict(data["run_time_statistics"]),
        run_times=list(data.get("run_times") or []),
        memory_usage_statistics=statistics_from_dict(memory) if memory else None,
        memory_usages=list(data.get("memory_usages") or []),
    )


def suite_from_dict(data: Dict[str, Any]) -> Suite:
    system = data.get("system") or {}
    config = data.get("configuration") or {}
    return Suite(
        scenarios=[scenario_from_dict(s) for s in data.get("scenarios", [])],
        system=SystemInfo(**{k: v for k, v in system.items() if k in SystemInfo.__dataclass_fields__}),
        configuration=Configuration(
            **{k: v for k, v in config.items() if k in Configuration.__dataclass_fields__}
        ),
    )


def load_suite(path: str) -> Suite:
    """Read a suite saved as JSON (``scenarios``, ``system``, ``configuration``)."""
    return suite_from_dict(load_json(path))

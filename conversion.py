"""
Unit scaling and display formatting for durations, counts and memory.

Each family is a tuple of Units ordered from smallest to largest magnitude.
A group of values shares one unit, picked by a scaling strategy:
  - best:     the most frequent best-fit unit (ties go to the larger unit)
  - largest:  the largest best-fit unit among the values
  - smallest: the smallest best-fit unit among the values
  - none:     the base unit, no scaling
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from suite import Scenario


@dataclass(frozen=True)
class Unit:
    name: str
    magnitude: float
    label: str


# Durations are measured in nanoseconds
NANOSECOND = Unit("nanosecond", 1, "ns")
MICROSECOND = Unit("microsecond", 1e3, "μs")
MILLISECOND = Unit("millisecond", 1e6, "ms")
SECOND = Unit("second", 1e9, "s")
MINUTE = Unit("minute", 60e9, "min")
HOUR = Unit("hour", 3600e9, "h")
DURATION_UNITS = (NANOSECOND, MICROSECOND, MILLISECOND, SECOND, MINUTE, HOUR)

ONE = Unit("one", 1, "")
THOUSAND = Unit("thousand", 1e3, "K")
MILLION = Unit("million", 1e6, "M")
BILLION = Unit("billion", 1e9, "B")
COUNT_UNITS = (ONE, THOUSAND, MILLION, BILLION)

BYTE = Unit("byte", 1, "B")
KILOBYTE = Unit("kilobyte", 1024, "KB")
MEGABYTE = Unit("megabyte", 1024 ** 2, "MB")
GIGABYTE = Unit("gigabyte", 1024 ** 3, "GB")
TERABYTE = Unit("terabyte", 1024 ** 4, "TB")
MEMORY_UNITS = (BYTE, KILOBYTE, MEGABYTE, GIGABYTE, TERABYTE)

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class Units:
    run_time: Unit
    ips: Unit
    memory: Unit


# ---------- Unit selection ----------

def best_unit(value: float, family: Sequence[Unit]) -> Unit:
    """Largest unit of ``family`` whose magnitude does not exceed ``value``."""
    chosen = family[0]
    for unit in family:
        if abs(value) >= unit.magnitude:
            chosen = unit
    return chosen


def unit_for(values: Iterable[Optional[float]], family: Sequence[Unit], strategy: str = "best") -> Unit:
    if strategy == "none":
        return family[0]
    fits = [best_unit(v, family) for v in values if v is not None]
    if not fits:
        return family[0]
    if strategy == "largest":
        return max(fits, key=lambda u: u.magnitude)
    if strategy == "smallest":
        return min(fits, key=lambda u: u.magnitude)
    if strategy == "best":
        counts = Counter(fits)
        return max(counts, key=lambda u: (counts[u], u.magnitude))
    raise ValueError(f"Unknown unit scaling strategy: {strategy}")


def units(scenarios: Sequence[Scenario], strategy: str = "best") -> Units:
    """Pick one display unit per measure for a whole input group.

    Only the averages vote for run time and memory, ips values for ips.
    """
    run_time_values: List[Optional[float]] = []
    ips_values: List[Optional[float]] = []
    memory_values: List[Optional[float]] = []
    for scenario in scenarios:
        stats = scenario.run_time_statistics
        run_time_values.append(stats.average)
        ips_values.append(stats.ips)
        if scenario.memory_usage_statistics is not None:
            memory_values.append(scenario.memory_usage_statistics.average)
    return Units(
        run_time=unit_for(run_time_values, DURATION_UNITS, strategy),
        ips=unit_for(ips_values, COUNT_UNITS, strategy),
        memory=unit_for(memory_values, MEMORY_UNITS, strategy),
    )


# ---------- Formatting ----------

def scale(value: float, unit: Unit) -> float:
    return value / unit.magnitude


def format_value(value: Optional[float], unit: Unit) -> str:
    """``"1.50 ms"`` style string; labelless units render the bare number."""
    if value is None:
        return NOT_AVAILABLE
    number = f"{scale(value, unit):.2f}"
    return f"{number} {unit.label}" if unit.label else number


def format_percent(ratio: Optional[float]) -> str:
    if ratio is None:
        return NOT_AVAILABLE
    return f"±{ratio * 100:.2f}%"


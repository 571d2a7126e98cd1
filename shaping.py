"""
Reshape scenario results into the structures the report pages consume.

Grouping keeps the engine's order: input groups appear in first-seen order and
scenarios keep their relative order inside a group. Ranking is by ascending
average run time with a stable sort, so equal averages keep input order. The
comparison table and the embedded JSON payload both use this ranking.
"""

import json
import math
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Sequence

from suite import Scenario, Statistics


def group_by_input(scenarios: Sequence[Scenario]) -> Dict[Optional[str], List[Scenario]]:
    groups: Dict[Optional[str], List[Scenario]] = {}
    for scenario in scenarios:
        groups.setdefault(scenario.input_name, []).append(scenario)
    return groups


def ensure_unique_names(input_name: Optional[str], scenarios: Sequence[Scenario]) -> None:
    """Scenario names key pages and payloads, so they must be unique per input."""
    seen = set()
    for scenario in scenarios:
        if scenario.name in seen:
            raise ValueError(
                f"Duplicate scenario name {scenario.name!r} for input {input_name!r}"
            )
        seen.add(scenario.name)


def sort_scenarios(scenarios: Sequence[Scenario]) -> List[Scenario]:
    return sorted(scenarios, key=lambda s: s.run_time_statistics.average)


def sorted_statistics(scenarios: Sequence[Scenario]) -> "OrderedDict[str, Statistics]":
    return OrderedDict(
        (s.name, s.run_time_statistics) for s in sort_scenarios(scenarios)
    )


def run_times_by_name(scenarios: Sequence[Scenario]) -> Dict[str, List[float]]:
    return {s.name: list(s.run_times) for s in scenarios}


def relative_to_fastest(scenarios: Sequence[Scenario]) -> Dict[str, Optional[float]]:
    """Slowdown factor of each scenario against the top-ranked one.

    The fastest scenario maps to None. A zero fastest average leaves every
    factor undefined (None).
    """
    ranked = sort_scenarios(scenarios)
    if not ranked:
        return {}
    fastest = ranked[0].run_time_statistics.average
    factors: Dict[str, Optional[float]] = {}
    for i, scenario in enumerate(ranked):
        if i == 0 or not fastest:
            factors[scenario.name] = None
        else:
            factors[scenario.name] = scenario.run_time_statistics.average / fastest
    return factors


# ---------- JSON payloads ----------

def _finite(value: Any) -> Any:
    # JSON has no Infinity or NaN; those become null
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_finite(v) for v in value]
    return value


def comparison_data(scenarios: Sequence[Scenario]) -> Dict[str, Any]:
    ranked = sort_scenarios(scenarios)
    return {
        "statistics": {s.name: s.run_time_statistics.to_dict() for s in ranked},
        "sort_order": [s.name for s in ranked],
        "run_times": run_times_by_name(scenarios),
    }


def job_data(scenario: Scenario) -> Dict[str, Any]:
    return {
        "statistics": scenario.run_time_statistics.to_dict(),
        "run_times": list(scenario.run_times),
    }


def comparison_payload(scenarios: Sequence[Scenario]) -> str:
    return json.dumps(_finite(comparison_data(scenarios)), ensure_ascii=False, allow_nan=False)


def job_payload(scenario: Scenario) -> str:
    return json.dumps(_finite(job_data(scenario)), ensure_ascii=False, allow_nan=False)

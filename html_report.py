"""
Render a benchmark suite into a set of cross-linked HTML pages.

Pages (keyed by their tag tuple, see page_layout):
  - ()             index linking every comparison and job detail page
  - (input,)       comparison of all jobs run against one input
  - (input, job)   run time details of one job for one input

format() is pure: the same suite and versions always give the same pages.
write() in writer.py puts them on disk.

Usage:
    pages, options = format(suite)
    writer.write(pages, options)
"""

import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

import conversion
import page_layout
import report_config
import shaping
from suite import Scenario, Suite, SystemInfo

ROOT = Path(__file__).resolve().parent
TEMPLATE_DIR = ROOT / "templates"
ASSET_DIR = ROOT / "assets"
STYLESHEET = "css/report.css"
SCRIPT = "js/report.js"

DISTRIBUTION = "bench-html"

JOB_COUNT_CLASS = "job-count-"
# charts only get a width class below this many jobs, wider ones use the full width
MAX_WIDTH_JOB_COUNT = 7

Pages = Dict[page_layout.Tags, str]


# ---------- Helpers ----------

def default_versions() -> Dict[str, str]:
    """Versions shown in the page footer, looked up once per run."""
    try:
        own = metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        own = "unknown"
    return {
        DISTRIBUTION: own,
        "python": ".".join(str(p) for p in sys.version_info[:3]),
    }


def input_headline(input_name: Optional[str]) -> str:
    return "" if input_name is None else f" ({input_name})"


def max_width_class(job_count: int) -> str:
    if job_count < MAX_WIDTH_JOB_COUNT:
        return f"{JOB_COUNT_CLASS}{job_count}"
    return ""


def script_json(payload: str) -> str:
    # keeps the payload from closing its <script> element early
    return payload.replace("</", "<\\/")


def format_slower(factor: Optional[float]) -> str:
    if factor is None:
        return ""
    return f"{factor:.2f}x slower"


def _read_asset(relative: str) -> str:
    return (ASSET_DIR / relative).read_text(encoding="utf-8")


def build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(enabled_extensions=("j2",)),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["scaled"] = conversion.format_value
    env.filters["percent"] = conversion.format_percent
    env.filters["slower"] = format_slower
    env.filters["script_json"] = script_json
    env.globals["input_headline"] = input_headline
    env.globals["max_width_class"] = max_width_class
    return env


# ---------- Pages ----------

class ReportRenderer:
    """Renders the pages of one suite; holds the shared page context."""

    def __init__(
        self,
        system: SystemInfo,
        filename: str,
        unit_scaling: str,
        inline_assets: bool,
        versions: Dict[str, str],
    ):
        self.filename = filename
        self.unit_scaling = unit_scaling
        self.env = build_environment()
        self.shared: Dict[str, Any] = {
            "system": system,
            "inline_assets": inline_assets,
            "versions": versions,
            "index_path": page_layout.relative_file_path(filename, ()),
            "stylesheet": STYLESHEET,
            "script": SCRIPT,
        }
        if inline_assets:
            self.shared["inline_css"] = _read_asset(STYLESHEET)
            self.shared["inline_js"] = _read_asset(SCRIPT)

    def _render(self, template_name: str, **context: Any) -> str:
        template = self.env.get_template(template_name)
        return template.render(**self.shared, **context)

    def reports_for_input(
        self, input_name: Optional[str], scenarios: Sequence[Scenario]
    ) -> List[Tuple[page_layout.Tags, str]]:
        """Comparison page first, then one detail page per job in group order."""
        units = conversion.units(scenarios, self.unit_scaling)
        comparison = (
            page_layout.comparison_tags(input_name),
            self.comparison(input_name, scenarios, units),
        )
        jobs = [
            (page_layout.job_tags(input_name, s.name), self.job_detail(input_name, s, units))
            for s in scenarios
        ]
        return [comparison] + jobs

    def comparison(
        self, input_name: Optional[str], scenarios: Sequence[Scenario], units: conversion.Units
    ) -> str:
        ranked = shaping.sort_scenarios(scenarios)
        return self._render(
            "comparison.html.j2",
            input_name=input_name,
            scenarios=ranked,
            statistics=shaping.sorted_statistics(scenarios),
            slower=shaping.relative_to_fastest(scenarios),
            has_memory=any(s.memory_usage_statistics is not None for s in ranked),
            job_count=len(scenarios),
            units=units,
            payload=shaping.comparison_payload(scenarios),
        )

    def job_detail(self, input_name: Optional[str], scenario: Scenario, units: conversion.Units) -> str:
        return self._render(
            "job_detail.html.j2",
            input_name=input_name,
            scenario=scenario,
            job_name=scenario.name,
            units=units,
            comparison_path=page_layout.relative_file_path(
                self.filename, page_layout.comparison_tags(input_name)
            ),
            payload=shaping.job_payload(scenario),
        )

    def index(self, groups: Dict[Optional[str], List[Scenario]]) -> str:
        tags = {
            input_name: [page_layout.comparison_tags(input_name)]
            + [page_layout.job_tags(input_name, s.name) for s in scenarios]
            for input_name, scenarios in groups.items()
        }
        names_to_paths = page_layout.inputs_to_paths(tags, self.filename)
        entries = []
        for input_name, paths in names_to_paths.items():
            job_names = [s.name for s in groups[input_name]]
            entries.append({
                "input_name": input_name,
                "comparison_path": paths[0],
                "jobs": list(zip(job_names, paths[1:])),
            })
        return self._render("index.html.j2", entries=entries)


def format(suite: Suite, versions: Optional[Dict[str, str]] = None) -> Tuple[Pages, Dict[str, Any]]:
    """Transform the suite into HTML pages keyed by tag tuple.

    Returns the pages along with the resolved formatter options, which is what
    writer.write() expects.
    """
    options = report_config.resolve_options(suite.configuration.formatter_options())
    renderer = ReportRenderer(
        system=suite.system,
        filename=options["file"],
        unit_scaling=options["unit_scaling"],
        inline_assets=options["inline_assets"],
        versions=versions if versions is not None else default_versions(),
    )

    groups = shaping.group_by_input(suite.scenarios)
    for input_name, scenarios in groups.items():
        shaping.ensure_unique_names(input_name, scenarios)
    pages: Pages = {(): renderer.index(groups)}
    for input_name, scenarios in groups.items():
        pages.update(renderer.reports_for_input(input_name, scenarios))
    return pages, options

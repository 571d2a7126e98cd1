"""
Write rendered report pages to disk and optionally open the index page.

Layout next to the configured file (e.g. benchmarks/output/results.html):
  - results.html                      index
  - <input>-results.html              comparison per input
  - <input>-<job>-results.html        job detail per input
  - assets/**                         CSS/JS, only when assets are not inlined

Writes are not transactional; a failure leaves the pages written so far.
"""

import os
import platform
import shutil
import subprocess
import sys
from typing import Any, Dict, List

from tqdm import tqdm

import html_report
import page_layout
from suite import Suite
from utils.io import write_text

ASSET_DIRECTORY = "assets"


class ReportWriteError(RuntimeError):
    """A report directory or page could not be written."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"Failed to write {path}: {cause}")
        self.path = path


def create_base_directory(filename: str) -> str:
    base_directory = os.path.dirname(filename) or "."
    try:
        os.makedirs(base_directory, exist_ok=True)
    except OSError as exc:
        raise ReportWriteError(base_directory, exc) from exc
    return base_directory


def copy_asset_files(base_directory: str) -> str:
    target = os.path.join(base_directory, ASSET_DIRECTORY)
    try:
        shutil.copytree(str(html_report.ASSET_DIR), target, dirs_exist_ok=True)
    except OSError as exc:
        raise ReportWriteError(target, exc) from exc
    return target


def prepare_folder_structure(filename: str, inline_assets: bool) -> str:
    base_directory = create_base_directory(filename)
    if not inline_assets:
        copy_asset_files(base_directory)
    return base_directory


def get_browser() -> str:
    system = platform.system()
    if system == "Darwin":
        return "open"
    if system == "Windows":
        return "explorer"
    return "xdg-open"


def open_report(filename: str) -> bool:
    """Best effort: failures are reported, never raised."""
    browser = get_browser()
    try:
        result = subprocess.run([browser, filename], check=False)
    except OSError as exc:
        print(f"[warn] Could not open report with {browser}: {exc}", file=sys.stderr)
        return False
    if result.returncode > 0:
        print(f"[warn] {browser} exited with status {result.returncode}", file=sys.stderr)
        return False
    print(f"[info] Opened report using {browser}")
    return True


def write(pages: Dict[page_layout.Tags, str], options: Dict[str, Any]) -> List[str]:
    """Write every page next to ``options["file"]``; return the written paths."""
    filename = options["file"]
    base_directory = prepare_folder_structure(filename, options["inline_assets"])

    written = []
    for tags, content in tqdm(pages.items(), desc="Writing report", unit="page"):
        path = os.path.join(base_directory, page_layout.relative_file_path(filename, tags))
        try:
            write_text(path, content)
        except OSError as exc:
            raise ReportWriteError(path, exc) from exc
        written.append(path)

    print(f"[done] Wrote {len(written)} pages to {base_directory}")
    if options["auto_open"]:
        open_report(filename)
    return written


def output(suite: Suite) -> List[str]:
    """Format and write in one call, for hosts that only know one hook."""
    pages, options = html_report.format(suite)
    return write(pages, options)

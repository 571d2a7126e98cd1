"""Tests for writing report pages in writer.py."""

import subprocess
import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import writer
from suite import Configuration, Scenario, Statistics, Suite


def make_pages():
    return {
        (): "<html>index</html>",
        ("big list",): "<html>comparison</html>",
        ("big list", "flat_map"): "<html>job</html>",
    }


def make_options(target, **overrides):
    options = {
        "file": str(target / "out" / "results.html"),
        "auto_open": False,
        "inline_assets": False,
        "unit_scaling": "best",
    }
    options.update(overrides)
    return options


def test_write_creates_pages_and_assets(tmp_path):
    written = writer.write(make_pages(), make_options(tmp_path))
    out = tmp_path / "out"
    assert (out / "results.html").read_text(encoding="utf-8") == "<html>index</html>"
    assert (out / "big.20.list-results.html").read_text(encoding="utf-8") == "<html>comparison</html>"
    assert (out / "big.20.list-flat_map-results.html").exists()
    assert (out / "assets" / "css" / "report.css").exists()
    assert (out / "assets" / "js" / "report.js").exists()
    assert len(written) == 3


def test_write_twice_is_idempotent(tmp_path):
    options = make_options(tmp_path)
    writer.write(make_pages(), options)
    pages = make_pages()
    pages[()] = "<html>second</html>"
    writer.write(pages, options)
    assert (tmp_path / "out" / "results.html").read_text(encoding="utf-8") == "<html>second</html>"


def test_inline_assets_skip_asset_copy(tmp_path):
    writer.write(make_pages(), make_options(tmp_path, inline_assets=True))
    assert not (tmp_path / "out" / "assets").exists()


def test_write_failure_names_the_path(tmp_path):
    # a directory where the index page should go makes the write fail
    (tmp_path / "out" / "results.html").mkdir(parents=True)
    with pytest.raises(writer.ReportWriteError) as excinfo:
        writer.write(make_pages(), make_options(tmp_path, inline_assets=True))
    assert "results.html" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_auto_open_opens_index(tmp_path, monkeypatch):
    opened = []
    monkeypatch.setattr(writer, "open_report", lambda filename: opened.append(filename))
    options = make_options(tmp_path, auto_open=True)
    writer.write(make_pages(), options)
    assert opened == [options["file"]]


def test_open_report_uses_platform_browser(monkeypatch):
    calls = []

    def fake_run(cmd, check):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr(writer.platform, "system", lambda: "Darwin")
    monkeypatch.setattr(writer.subprocess, "run", fake_run)
    assert writer.open_report("out/results.html") is True
    assert calls == [["open", "out/results.html"]]


def test_open_report_swallows_failures(monkeypatch, capsys):
    def missing_binary(cmd, check):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(writer.platform, "system", lambda: "Linux")
    monkeypatch.setattr(writer.subprocess, "run", missing_binary)
    assert writer.open_report("results.html") is False
    assert "xdg-open" in capsys.readouterr().err

    monkeypatch.setattr(writer.subprocess, "run", lambda cmd, check: subprocess.CompletedProcess(cmd, 3))
    assert writer.open_report("results.html") is False


def test_get_browser_on_windows(monkeypatch):
    monkeypatch.setattr(writer.platform, "system", lambda: "Windows")
    assert writer.get_browser() == "explorer"


def test_output_formats_and_writes(tmp_path):
    stats = Statistics(average=1e6, minimum=9e5, maximum=1.1e6, sample_size=2, ips=1000.0)
    suite = Suite(
        scenarios=[Scenario(name="flat_map", run_time_statistics=stats, run_times=[9e5, 1.1e6])],
        configuration=Configuration(file=str(tmp_path / "report.html"), auto_open=False),
    )
    written = writer.output(suite)
    assert sorted(Path(p).name for p in written) == [
        "no.input-flat_map-report.html",
        "no.input-report.html",
        "report.html",
    ]
    assert "flat_map" in (tmp_path / "report.html").read_text(encoding="utf-8")

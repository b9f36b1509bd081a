"""Tests for CLI."""

import json
import subprocess
import sys
from pathlib import Path


def run_cli(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "transit_schedules.cli", *args],
        capture_output=True,
        text=True,
    )


def test_cli_count(gtfs_minimal: Path) -> None:
    """Test indexed count output."""
    result = run_cli("count", "1", "--gtfs", str(gtfs_minimal))

    assert result.returncode == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "Finding schedules for 1"
    assert lines[1].startswith("Found 2 schedules for 1 in ")
    assert lines[1].endswith("µs")


def test_cli_scan(gtfs_branching: Path) -> None:
    """Test linear scan output."""
    result = run_cli("scan", "Red", "--gtfs", str(gtfs_branching))

    assert result.returncode == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "Finding schedules for Red"
    assert lines[1].startswith("Found 5 schedules for Red in ")
    assert lines[1].endswith("ms")


def test_cli_count_unknown_route(gtfs_minimal: Path) -> None:
    """Test an unknown route is a zero count, not an error."""
    result = run_cli("count", "3", "--gtfs", str(gtfs_minimal))

    assert result.returncode == 0
    assert "Found 0 schedules for 3" in result.stdout


def test_cli_missing_route_id(gtfs_minimal: Path) -> None:
    """Test a missing route id aborts before loading."""
    result = run_cli("count", "--gtfs", str(gtfs_minimal))

    assert result.returncode == 2
    assert "route_id" in result.stderr
    assert "Loading GTFS data" not in result.stderr


def test_cli_missing_gtfs(tmp_path: Path) -> None:
    """Test a missing GTFS directory fails with a diagnostic."""
    result = run_cli("count", "1", "--gtfs", str(tmp_path / "missing"))

    assert result.returncode == 1
    assert "Error" in result.stderr
    assert "Finding schedules" not in result.stdout


def test_cli_bad_header(write_gtfs) -> None:
    """Test a header mismatch names the file and aborts."""
    gtfs_dir = write_gtfs(
        "trip_id,route_id,service_id\nT1,1,S1\n",
        "trip_id,arrival_time,departure_time,stop_id\nT1,08:00,08:01,A\n",
    )

    result = run_cli("scan", "1", "--gtfs", str(gtfs_dir))

    assert result.returncode == 1
    assert "trips.txt" in result.stderr


def test_cli_show(gtfs_minimal: Path) -> None:
    """Test materialized JSON on stdout."""
    result = run_cli("show", "1", "--gtfs", str(gtfs_minimal))

    assert result.returncode == 0
    trips = json.loads(result.stdout)
    assert trips[0]["trip_id"] == "T1"
    assert [s["stop_id"] for s in trips[0]["schedules"]] == ["A", "B"]


def test_cli_show_output_file(gtfs_minimal: Path, tmp_path: Path) -> None:
    """Test materialized JSON written to a file."""
    output = tmp_path / "out" / "route1.json"

    result = run_cli("show", "1", "--gtfs", str(gtfs_minimal), "--output", str(output))

    assert result.returncode == 0
    assert json.loads(output.read_text(encoding="utf-8"))[0]["route_id"] == "1"


def test_cli_bench(gtfs_branching: Path) -> None:
    """Test strategy comparison."""
    result = run_cli("bench", "--gtfs", str(gtfs_branching), "--repeat", "2")

    assert result.returncode == 0
    assert "Benchmark results" in result.stdout
    assert "indexed-count" in result.stdout


def test_cli_version() -> None:
    """Test CLI version flag."""
    result = run_cli("--version")

    assert result.returncode == 0
    assert "0.1.0" in result.stdout


def test_cli_help() -> None:
    """Test CLI help."""
    result = run_cli("--help")

    assert result.returncode == 0
    for command in ("count", "scan", "show", "serve", "bench"):
        assert command in result.stdout


def test_cli_show_unwritable_output(gtfs_minimal: Path, tmp_path: Path) -> None:
    """Test a failed JSON write is reported as an error, not a traceback exit."""
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")

    result = run_cli(
        "show", "1", "--gtfs", str(gtfs_minimal), "--output", str(blocker / "route1.json")
    )

    assert result.returncode == 1
    assert "Error:" in result.stderr

"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from transit_schedules.api import load
from transit_schedules.gtfs.models import Dataset


@pytest.fixture
def gtfs_minimal() -> Path:
    """Path to minimal GTFS fixture."""
    return Path(__file__).parent / "fixtures" / "gtfs_minimal"


@pytest.fixture
def gtfs_branching() -> Path:
    """Path to branching GTFS fixture (extra columns, unsorted rows, orphans)."""
    return Path(__file__).parent / "fixtures" / "gtfs_branching"


@pytest.fixture
def minimal_dataset(gtfs_minimal: Path) -> Dataset:
    """Loaded minimal fixture."""
    return load(str(gtfs_minimal))


@pytest.fixture
def branching_dataset(gtfs_branching: Path) -> Dataset:
    """Loaded branching fixture."""
    return load(str(gtfs_branching))


@pytest.fixture
def write_gtfs(tmp_path: Path):
    """Write a GTFS directory from raw trips and stop_times contents."""

    def _write(trips: str, stop_times: str) -> Path:
        gtfs_dir = tmp_path / "gtfs"
        gtfs_dir.mkdir(exist_ok=True)
        (gtfs_dir / "trips.txt").write_text(trips, encoding="utf-8")
        (gtfs_dir / "stop_times.txt").write_text(stop_times, encoding="utf-8")
        return gtfs_dir

    return _write

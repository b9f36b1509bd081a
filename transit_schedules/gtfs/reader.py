"""GTFS table loader."""

import csv
import logging
import time
from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

from transit_schedules.gtfs.models import Dataset, LoadConfig, StopTime, Trip
from transit_schedules.optimization.indexing import build_index

logger = logging.getLogger(__name__)

R = TypeVar("R")

TRIPS_HEADER = ("route_id", "service_id", "trip_id")
STOP_TIMES_HEADER = ("trip_id", "arrival_time", "departure_time", "stop_id")


class TableFormatError(ValueError):
    """A GTFS table does not have the expected layout."""


def load_table(
    path: str | Path,
    expected_header: tuple[str, ...],
    build_record: Callable[[list[str]], R],
) -> list[R]:
    """
    Read a GTFS table whose first row must start with expected_header.

    Fields are extracted by position; the header only gates loading.

    Args:
        path: Path to the CSV file
        expected_header: Column names the first row must begin with
        build_record: Builds a record from a row with at least len(expected_header) fields

    Returns:
        Records in file order
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Required file not found: {file_path}")

    start = time.perf_counter()
    width = len(expected_header)
    records: list[R] = []

    with open(file_path, encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f)
        try:
            header = next(reader, None)
            if header is None or tuple(header[:width]) != expected_header:
                raise TableFormatError(
                    f"{file_path} not in expected format: expected header starting with "
                    f"{list(expected_header)}, got {header}"
                )

            for row in reader:
                if not row:
                    continue
                if len(row) < width:
                    raise TableFormatError(
                        f"{file_path}:{reader.line_num}: expected at least {width} columns, "
                        f"got {len(row)}: {row}"
                    )
                records.append(build_record(row))
        except csv.Error as e:
            raise TableFormatError(f"{file_path}:{reader.line_num}: {e}") from e

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"Loaded {len(records)} rows from {file_path} in {elapsed_ms:.0f} ms")

    return records


def _trip_from_row(row: list[str]) -> Trip:
    return Trip(trip_id=row[2], route_id=row[0], service_id=row[1])


def _stop_time_from_row(row: list[str]) -> StopTime:
    return StopTime(trip_id=row[0], stop_id=row[3], arrival_time=row[1], departure_time=row[2])


def load_trips(path: str | Path) -> tuple[tuple[Trip, ...], Mapping[str, tuple[int, ...]]]:
    """Read trips.txt and index trip positions by route_id."""
    trips = tuple(load_table(path, TRIPS_HEADER, _trip_from_row))
    return trips, build_index(trips, lambda trip: trip.route_id)


def load_stop_times(
    path: str | Path,
) -> tuple[tuple[StopTime, ...], Mapping[str, tuple[int, ...]]]:
    """Read stop_times.txt and index stop time positions by trip_id."""
    stop_times = tuple(load_table(path, STOP_TIMES_HEADER, _stop_time_from_row))
    return stop_times, build_index(stop_times, lambda stop_time: stop_time.trip_id)


def load_dataset(config: LoadConfig) -> Dataset:
    """Load trips and stop times from a GTFS directory."""
    gtfs_path = Path(config.gtfs_path)
    if not gtfs_path.is_dir():
        raise FileNotFoundError(f"GTFS path not found or not a directory: {config.gtfs_path}")

    trips_path = gtfs_path / config.trips_file
    stop_times_path = gtfs_path / config.stop_times_file

    if config.jobs > 1:
        # The two tables share nothing, so they can load side by side.
        with ThreadPoolExecutor(max_workers=2) as executor:
            trips_future = executor.submit(load_trips, trips_path)
            stop_times_future = executor.submit(load_stop_times, stop_times_path)
            trips, trips_ix_by_route = trips_future.result()
            stop_times, stop_times_ix_by_trip = stop_times_future.result()
    else:
        trips, trips_ix_by_route = load_trips(trips_path)
        stop_times, stop_times_ix_by_trip = load_stop_times(stop_times_path)

    return Dataset(
        trips=trips,
        trips_ix_by_route=trips_ix_by_route,
        stop_times=stop_times,
        stop_times_ix_by_trip=stop_times_ix_by_trip,
    )

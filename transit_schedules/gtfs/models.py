"""Data models for GTFS records, query results and configuration."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Trip:
    """GTFS trip."""

    trip_id: str
    route_id: str
    service_id: str


@dataclass(frozen=True)
class StopTime:
    """GTFS stop time. Times are kept exactly as they appear in the feed."""

    trip_id: str
    stop_id: str
    arrival_time: str
    departure_time: str


@dataclass(frozen=True)
class ScheduleResponse:
    """One stop of a trip as returned to clients."""

    stop_id: str
    arrival_time: str
    departure_time: str

    def to_dict(self) -> dict[str, str]:
        return {
            "stop_id": self.stop_id,
            "arrival_time": self.arrival_time,
            "departure_time": self.departure_time,
        }


@dataclass(frozen=True)
class TripResponse:
    """A trip with its schedules in stop_times.txt order."""

    trip_id: str
    service_id: str
    route_id: str
    schedules: tuple[ScheduleResponse, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "trip_id": self.trip_id,
            "service_id": self.service_id,
            "route_id": self.route_id,
            "schedules": [schedule.to_dict() for schedule in self.schedules],
        }


@dataclass(frozen=True)
class Dataset:
    """Loaded tables and their indices.

    Built once at startup and shared by every query. Tables are tuples and
    indices are read-only mappings of key -> tuple of table positions.
    """

    trips: tuple[Trip, ...]
    trips_ix_by_route: Mapping[str, tuple[int, ...]]
    stop_times: tuple[StopTime, ...]
    stop_times_ix_by_trip: Mapping[str, tuple[int, ...]]

    @property
    def stats(self) -> dict[str, int]:
        return {
            "trips": len(self.trips),
            "routes": len(self.trips_ix_by_route),
            "stop_times": len(self.stop_times),
            "indexed_trips": len(self.stop_times_ix_by_trip),
        }


class Strategy(str, Enum):
    """Query execution strategies."""

    SCAN = "scan"
    INDEXED_COUNT = "indexed-count"
    INDEXED_MATERIALIZE = "indexed-materialize"


@dataclass
class QueryResult:
    """Result of a timed query."""

    route_id: str
    strategy: Strategy
    count: int
    trips: list[TripResponse] = field(default_factory=list)
    elapsed_seconds: float = 0.0


@dataclass
class LoadConfig:
    """Configuration for loading a GTFS directory."""

    gtfs_path: str
    trips_file: str = "trips.txt"
    stop_times_file: str = "stop_times.txt"
    jobs: int = 1


@dataclass
class ServeConfig:
    """Configuration for the HTTP server."""

    host: str = "0.0.0.0"
    port: int = 4000

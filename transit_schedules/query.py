"""Route schedule queries over a loaded dataset.

Every strategy answers the same question, "which stop times belong to the trips
of route R", and must agree on the answer. Unknown routes and trips without
stop times are not errors: they simply contribute nothing.
"""

import logging
from collections import Counter

from transit_schedules.gtfs.models import Dataset, ScheduleResponse, Strategy, TripResponse

logger = logging.getLogger(__name__)

_NO_POSITIONS: tuple[int, ...] = ()


def count_by_scan(dataset: Dataset, route_id: str) -> int:
    """Count stop times for a route by scanning both tables in full."""
    # A trip row repeated in trips.txt counts its stop times once per row.
    trip_rows = Counter(trip.trip_id for trip in dataset.trips if trip.route_id == route_id)

    count = 0
    for stop_time in dataset.stop_times:
        count += trip_rows.get(stop_time.trip_id, 0)
    return count


def count_indexed(dataset: Dataset, route_id: str) -> int:
    """Count stop times for a route through the route and trip indices."""
    count = 0
    for trip_ix in dataset.trips_ix_by_route.get(route_id, _NO_POSITIONS):
        trip = dataset.trips[trip_ix]
        count += len(dataset.stop_times_ix_by_trip.get(trip.trip_id, _NO_POSITIONS))
    return count


def schedules_for_route(dataset: Dataset, route_id: str) -> list[TripResponse]:
    """Build the trip responses for a route, in trips.txt order."""
    responses: list[TripResponse] = []
    for trip_ix in dataset.trips_ix_by_route.get(route_id, _NO_POSITIONS):
        trip = dataset.trips[trip_ix]
        stop_time_ixs = dataset.stop_times_ix_by_trip.get(trip.trip_id, _NO_POSITIONS)

        schedules = []
        for stop_time_ix in stop_time_ixs:
            stop_time = dataset.stop_times[stop_time_ix]
            schedules.append(
                ScheduleResponse(
                    stop_id=stop_time.stop_id,
                    arrival_time=stop_time.arrival_time,
                    departure_time=stop_time.departure_time,
                )
            )

        responses.append(
            TripResponse(
                trip_id=trip.trip_id,
                service_id=trip.service_id,
                route_id=trip.route_id,
                schedules=tuple(schedules),
            )
        )

    return responses


def execute(
    dataset: Dataset, route_id: str, strategy: Strategy
) -> tuple[int, list[TripResponse]]:
    """Run a query with the given strategy.

    Returns:
        The stop time count and, for INDEXED_MATERIALIZE, the trip responses
    """
    if strategy is Strategy.SCAN:
        return count_by_scan(dataset, route_id), []
    if strategy is Strategy.INDEXED_COUNT:
        return count_indexed(dataset, route_id), []
    if strategy is Strategy.INDEXED_MATERIALIZE:
        trips = schedules_for_route(dataset, route_id)
        return sum(len(trip.schedules) for trip in trips), trips
    raise ValueError(f"Unknown strategy: {strategy}")

"""Public API for transit-schedules."""

import logging
import time
from collections.abc import Iterable

from transit_schedules.gtfs.models import Dataset, LoadConfig, QueryResult, Strategy
from transit_schedules.gtfs.reader import load_dataset
from transit_schedules.query import execute

logger = logging.getLogger(__name__)


def load(gtfs_path: str, config: LoadConfig | None = None) -> Dataset:
    """
    Load trips and stop times and build their indices.

    Args:
        gtfs_path: Path to GTFS directory
        config: Optional load configuration

    Returns:
        Read-only dataset shared by all subsequent queries
    """
    if config is None:
        config = LoadConfig(gtfs_path=gtfs_path)

    logger.info(f"Loading GTFS data from {gtfs_path}")
    start = time.perf_counter()

    dataset = load_dataset(config)

    elapsed = time.perf_counter() - start
    logger.info(f"Loaded {dataset.stats} in {elapsed:.2f}s")

    return dataset


def run_query(
    dataset: Dataset,
    route_id: str,
    strategy: Strategy = Strategy.INDEXED_COUNT,
) -> QueryResult:
    """
    Run a single timed query for a route.

    Only the query itself is timed; loading is excluded.

    Args:
        dataset: Loaded dataset
        route_id: GTFS route_id, matched exactly
        strategy: Execution strategy

    Returns:
        QueryResult with the count, trips (materializing strategy only) and elapsed time
    """
    start = time.perf_counter()
    count, trips = execute(dataset, route_id, strategy)
    elapsed = time.perf_counter() - start

    logger.debug(f"{strategy.value} query for {route_id!r}: {count} schedules in {elapsed:.6f}s")

    return QueryResult(
        route_id=route_id,
        strategy=strategy,
        count=count,
        trips=trips,
        elapsed_seconds=elapsed,
    )


def benchmark(
    dataset: Dataset,
    route_ids: Iterable[str] | None = None,
    repeat: int = 1,
) -> dict[str, float]:
    """
    Replay a list of routes through every strategy.

    Args:
        dataset: Loaded dataset
        route_ids: Routes to query (default: every route in the dataset)
        repeat: Number of passes over the route list

    Returns:
        Total elapsed seconds per strategy value
    """
    routes = list(dataset.trips_ix_by_route) if route_ids is None else list(route_ids)
    totals = {strategy.value: 0.0 for strategy in Strategy}

    logger.info(f"Benchmarking {len(routes)} routes x {repeat}")

    for _ in range(repeat):
        for route_id in routes:
            counts = {}
            for strategy in Strategy:
                result = run_query(dataset, route_id, strategy)
                totals[strategy.value] += result.elapsed_seconds
                counts[strategy.value] = result.count

            if len(set(counts.values())) != 1:
                raise RuntimeError(f"Strategies disagree for route {route_id}: {counts}")

    return totals

"""JSON output for materialized schedules."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from transit_schedules.gtfs.models import TripResponse

logger = logging.getLogger(__name__)


def trip_responses_to_json(trips: Iterable[TripResponse], indent: int | None = None) -> str:
    """Serialize trip responses as a JSON array, keeping field order."""
    return json.dumps([trip.to_dict() for trip in trips], indent=indent, ensure_ascii=False)


def write_json_file(output_path: Path, trips: list[TripResponse]) -> Path:
    """Write trip responses to a JSON file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(trip_responses_to_json(trips, indent=2))

    logger.info(f"Wrote {len(trips)} trips to {output_path}")

    return output_path

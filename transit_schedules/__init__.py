"""Transit Schedules - Indexed GTFS trip schedule queries by route."""

from transit_schedules.api import benchmark, load, run_query
from transit_schedules.version import VERSION

__version__ = VERSION
__all__ = ["VERSION", "benchmark", "load", "run_query"]

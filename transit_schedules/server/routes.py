"""HTTP routes for served mode."""

import platform

from flask import Blueprint, Response, current_app, jsonify

from transit_schedules.gtfs.models import Dataset
from transit_schedules.query import schedules_for_route

EXTENSION_KEY = "transit_schedules"

schedules_bp = Blueprint("schedules", __name__)


def get_dataset() -> Dataset:
    """Dataset attached to the running app by create_app."""
    return current_app.extensions[EXTENSION_KEY]


@schedules_bp.route("/")
def index() -> str:
    return f"Flask (Python {platform.python_version()}) minimal transit data API."


@schedules_bp.route("/schedules/<route_id>")
def schedules(route_id: str) -> Response:
    """All trips of a route with their schedules; unknown routes give an empty list."""
    trips = schedules_for_route(get_dataset(), route_id)
    return jsonify([trip.to_dict() for trip in trips])

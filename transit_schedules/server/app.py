"""Flask application for served mode."""

import logging

from flask import Flask

from transit_schedules.gtfs.models import Dataset, ServeConfig
from transit_schedules.server.routes import EXTENSION_KEY, schedules_bp

logger = logging.getLogger(__name__)


def create_app(dataset: Dataset) -> Flask:
    """Build the app around an already loaded dataset.

    The dataset is attached once here and only read by request handlers.
    """
    app = Flask(__name__)
    app.json.sort_keys = False

    app.extensions[EXTENSION_KEY] = dataset
    app.register_blueprint(schedules_bp)

    return app


def serve(dataset: Dataset, config: ServeConfig | None = None) -> None:
    """Serve schedules until the process is stopped."""
    if config is None:
        config = ServeConfig()

    app = create_app(dataset)
    logger.info(f"Serving {dataset.stats['routes']} routes on http://{config.host}:{config.port}")
    app.run(host=config.host, port=config.port, threaded=True)

"""Application factory and app-wide configuration."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from fire_tracker.app.api.routes import EXTENSION_KEY, api_bp
from fire_tracker.config import load_config
from fire_tracker.core.rates import ExchangeRateProvider
from fire_tracker.store import InMemoryRecordStore, JsonFileRecordStore, RecordStore


def create_app(
    config: Optional[Mapping[str, Any]] = None,
    store: Optional[RecordStore] = None,
    rate_provider: Optional[ExchangeRateProvider] = None,
) -> Flask:
    """Build the Flask app instance."""
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    if store is None:
        data_file = app.config["DATA_FILE"]
        store = JsonFileRecordStore(data_file) if data_file else InMemoryRecordStore()
    if rate_provider is None:
        rate_provider = ExchangeRateProvider(
            url=app.config["EXCHANGE_RATE_URL"],
            timeout=app.config["EXCHANGE_RATE_TIMEOUT"],
            cache_seconds=app.config["EXCHANGE_RATE_CACHE_SECONDS"],
        )
    app.extensions[EXTENSION_KEY] = {"store": store, "rates": rate_provider}

    app.register_blueprint(api_bp, url_prefix="/api")
    app.logger.info("fire tracker API ready (store=%s)", type(store).__name__)
    return app

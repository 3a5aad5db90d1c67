from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from retireplan.app import create_app
from retireplan.config import Settings
from retireplan.core.projection import ProjectionEngine


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None, APP_ENV="test", LOG_LEVEL="WARNING")


@pytest.fixture()
def app(settings: Settings) -> Flask:
    flask_app = create_app(settings)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def engine() -> ProjectionEngine:
    return ProjectionEngine()

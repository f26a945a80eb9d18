import os

import pytest
from flask import Flask

from radius_map.api import geocoding
from radius_map.api.services.circle_store import get_circle_store
from radius_map.routes import create_radius_blueprint

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class FakeGeocoder:
    """Stands in for googlemaps.Client; records queries."""

    def __init__(self, results=None, error=None):
        self.results = results or {}
        self.error = error
        self.queries = []

    def geocode(self, address, **kwargs):
        self.queries.append(address)
        if self.error is not None:
            raise self.error
        match = self.results.get(address)
        if match is None:
            return []
        lat, lng = match
        return [{"geometry": {"location": {"lat": lat, "lng": lng}}}]


@pytest.fixture(autouse=True)
def _reset_geocoder():
    geocoding.reset_client()
    yield
    geocoding.reset_client()


@pytest.fixture(autouse=True)
def _reset_circle_store():
    get_circle_store().clear()
    yield
    get_circle_store().clear()


@pytest.fixture
def fake_geocoder(monkeypatch):
    fake = FakeGeocoder(results={
        "Empire State Building": (40.748817, -73.985428),
        "Brooklyn Bridge": (40.706086, -73.996864),
    })
    monkeypatch.setattr(geocoding, "_get_client", lambda: fake)
    return fake


@pytest.fixture
def app():
    app = Flask(__name__)
    app.secret_key = "test-secret"
    app.config.update(TESTING=True)
    app.register_blueprint(create_radius_blueprint(BASE_DIR))
    return app


@pytest.fixture
def client(app):
    return app.test_client()

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from services import routes as route_service
from store import EntityStore


def make_stop(order, **overrides):
    stop = {
        "id": f"stop-{order}",
        "name": f"Stop {order}",
        "description": "A place worth a look",
        "image": f"https://img.example.com/stop-{order}.jpg",
        "latitude": 37.77 + order / 1000,
        "longitude": -122.42,
        "order": order,
        "estimatedTimeMinutes": 15,
    }
    stop.update(overrides)
    return stop


def make_route_payload(**overrides):
    payload = {
        "title": "Ferry Building Food Tour",
        "description": "Taste local flavors and artisan foods",
        "longDescription": "Sample artisan cheeses and fresh produce.",
        "category": "food-drink",
        "heroImage": "https://img.example.com/hero.jpg",
        "duration": 90,
        "distance": 1.8,
        "difficulty": "easy",
        "stops": [make_stop(1), make_stop(2)],
        "isPublished": True,
        "createdBy": "user-1",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def store():
    store = EntityStore("sqlite://")
    yield store
    store.dispose()


@pytest.fixture
def make_route(store):
    """Create a route in the store; `rating` is applied with a follow-up update."""
    def _make(rating=None, **overrides):
        route = route_service.create_route(store, make_route_payload(**overrides))
        if rating is not None:
            route = route_service.update_route(store, route.id, {"rating": rating})
        return route
    return _make


@pytest.fixture
def settings(tmp_path):
    return Settings(log_path=str(tmp_path / "api.log"), seed_demo_data=False)


@pytest.fixture
def client(store, settings):
    app = create_app(settings, store=store)
    with TestClient(app) as test_client:
        yield test_client

from typing import Any, List, Mapping, Optional, Union

from database import new_id
from models.Route import Route
from models.RouteStop import RouteStop
from schemas import RouteCreate, RouteStopCreate, RouteUpdate
from services.validation import parse_payload
from store import EntityStore
from utils.logger import get_logger

logger = get_logger("routes")


def _build_stops(stops: List[RouteStopCreate]) -> List[RouteStop]:
    return [
        RouteStop(
            id=stop.id or new_id(),
            name=stop.name,
            description=stop.description,
            image=stop.image,
            latitude=stop.latitude,
            longitude=stop.longitude,
            order=stop.order,
            estimated_time_minutes=stop.estimated_time_minutes,
        )
        for stop in stops
    ]


def _column_values(data: dict) -> dict:
    for key in ("category", "difficulty"):
        if data.get(key) is not None:
            data[key] = data[key].value
    return data


def get_route(store: EntityStore, route_id: str) -> Optional[Route]:
    return store.get(Route, route_id)


def create_route(store: EntityStore, payload: Union[RouteCreate, Mapping[str, Any]]) -> Route:
    """
    Validate and store a new route.
    Ratings start at zero; a route is only discoverable once published.
    """
    route_in = parse_payload(RouteCreate, payload, "Invalid route data")

    data = _column_values(route_in.model_dump(exclude={"stops"}))
    data["stops"] = _build_stops(route_in.stops)
    data["rating"] = 0.0
    data["review_count"] = 0

    route = store.create(Route, data)
    logger.info("Route %s created (%d stops, published=%s)", route.id, len(route.stops), route.is_published)
    return route


def update_route(
    store: EntityStore,
    route_id: str,
    patch: Union[RouteUpdate, Mapping[str, Any]],
) -> Optional[Route]:
    """Apply the fields present in `patch`; returns None if the route is absent."""
    route_update = parse_payload(RouteUpdate, patch, "Invalid route data")

    update_data = _column_values(route_update.model_dump(exclude_unset=True, exclude={"stops"}))
    if "stops" in route_update.model_fields_set:
        update_data["stops"] = _build_stops(route_update.stops)

    return store.update(Route, route_id, update_data)
